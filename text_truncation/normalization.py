"""
Unicode normalization with an optional bounded cache.
"""

import logging
import unicodedata

_LOGGER = logging.getLogger(__name__)

NORMALIZATION_FORM = "NFC"
DEFAULT_CACHE_CAPACITY = 1000


class NormalizationCache:
    """
    Bounded cache of NFC-normalized strings keyed by the raw input.

    The cache is cleared completely once it holds more than `capacity`
    entries. It only saves work; results are identical without it.
    """

    def __init__(self, capacity=DEFAULT_CACHE_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries = {}

    def __len__(self):
        return len(self._entries)

    def __contains__(self, text):
        return text in self._entries

    def normalize(self, text):
        if text in self._entries:
            return self._entries[text]

        normalized = unicodedata.normalize(NORMALIZATION_FORM, text)
        if len(self._entries) >= self.capacity:
            _LOGGER.debug("Normalization cache full (%d entries), clearing", len(self._entries))
            self._entries.clear()
        self._entries[text] = normalized
        return normalized

    def clear(self):
        self._entries.clear()


def normalize_text(text, cache=None):
    """
    Return the NFC form of text, going through cache when one is given.

    :param text: Raw string
    :param cache: Optional NormalizationCache
    :return: Normalized string (the input itself when already normalized)
    """
    if not text:
        return text
    if cache is not None:
        return cache.normalize(text)
    return unicodedata.normalize(NORMALIZATION_FORM, text)
