"""
Emoji cluster detection for visual-width accounting.
Splits text into visual units where every emoji sequence is one unit.
"""

import logging
from collections import namedtuple

import emoji

_LOGGER = logging.getLogger(__name__)

VARIATION_SELECTOR_16 = "\ufe0f"

# One renderable item: a single character or a whole emoji cluster
VisualUnit = namedtuple("VisualUnit", ["text", "is_emoji"])


def segment_visual_units(text):
    """
    Split text into visual units.

    Emoji sequences (ZWJ sequences, flags, keycaps, skin tone modifiers) are
    matched with the emoji library and kept together as one unit. A
    variation selector directly after an emoji is folded into it, the same
    way Twemoji treats U+FE0F as part of the preceding emoji. Every other code
    point becomes its own unit, so the units always join back to text.

    :param text: String to segment (callers normalize it first if needed)
    :return: List of VisualUnit
    """
    if not text:
        return []

    units = []
    last_index = 0
    for item in emoji.emoji_list(text):
        start = item["match_start"]
        end = item["match_end"]

        # Regular characters before the emoji
        units.extend(VisualUnit(char, False) for char in text[last_index:start])

        # Extend over a variation selector the match left out
        if end < len(text) and text[end] == VARIATION_SELECTOR_16:
            _LOGGER.debug("Folding variation selector into emoji %r", item["emoji"])
            end += 1

        units.append(VisualUnit(text[start:end], True))
        last_index = end

    units.extend(VisualUnit(char, False) for char in text[last_index:])
    return units
