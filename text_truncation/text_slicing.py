"""
Visual-unit aware slicing.
Finds how many trailing units free a given width and cuts strings
without ever splitting an emoji cluster.
"""

import logging

from .character_widths import SPACE, CharacterClassifier
from .visual_length import visual_units
from .width_estimation import unit_cost

_LOGGER = logging.getLogger(__name__)


def calculate_slice_position(
    text,
    unit_width,
    target_width,
    is_monospaced=False,
    short_characters=(),
    long_characters=(),
    cache=None,
):
    """
    Calculate how many visual units to drop from the end of a string so that
    the dropped units are at least target_width wide.

    When the unit just before the cut is a plain space it is dropped as well,
    so no dangling space is left in front of the ellipsis.

    :param text: The string to analyze
    :param unit_width: Width of a normal class character
    :param target_width: Width that needs to be removed
    :param is_monospaced: Whether the font is monospaced
    :param short_characters: Extra characters with short width (0.5x)
    :param long_characters: Extra characters with long width (1.5x)
    :param cache: Optional NormalizationCache
    :return: Number of trailing visual units to drop (0 or more)
    """
    if not text or target_width <= 0:
        return 0

    units = visual_units(text, cache)
    classifier = CharacterClassifier(short_characters, long_characters)
    accumulated_width = 0.0
    dropped = 0

    for index in range(len(units) - 1, -1, -1):
        accumulated_width += unit_cost(units[index], unit_width, classifier, is_monospaced)
        dropped += 1

        if accumulated_width >= target_width:
            if index > 0:
                previous = units[index - 1]
                if not previous.is_emoji and previous.text == SPACE:
                    dropped += 1
            _LOGGER.debug(
                "Dropping %d of %d units to free %.2fpx (accumulated %.2fpx)",
                dropped,
                len(units),
                target_width,
                accumulated_width,
            )
            return dropped

    _LOGGER.debug("Target width %.2fpx never reached, dropping all %d units", target_width, len(units))
    return len(units)


def visual_slice(text, start=0, end=None, cache=None):
    """
    Slice a string by visual position, keeping emoji clusters whole.

    Indexes behave like Python sequence slicing over visual units: negative
    values count from the end, out of range values are clamped and
    start >= end gives an empty string. Note that end=0 also means empty,
    pass None to slice to the end.

    The text is cut in its NFC form, the same index space
    calculate_slice_position counts in, so a combining sequence is never
    split.

    :param text: The string to slice
    :param start: Start visual position (inclusive)
    :param end: End visual position (exclusive) or None
    :param cache: Optional NormalizationCache
    :return: Substring of the NFC form of text
    """
    if not text:
        return ""

    units = visual_units(text, cache)
    return "".join(unit.text for unit in units[start:end])
