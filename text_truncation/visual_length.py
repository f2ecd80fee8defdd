"""
Visual length analysis.
Counts visual units of a string and how many of them are short, long or emoji.
"""

from dataclasses import dataclass

from .character_widths import CharacterClassifier, WidthClass
from .emoji_handler import segment_visual_units
from .normalization import normalize_text


@dataclass(frozen=True)
class VisualProfile:
    """Unit counts of one string. Emoji clusters count as one unit each."""

    visual_length: int = 0
    short_count: int = 0
    emoji_count: int = 0
    long_count: int = 0


EMPTY_PROFILE = VisualProfile()


def visual_units(text, cache=None):
    """
    Normalize text to NFC and split it into visual units.

    :param text: Raw string
    :param cache: Optional NormalizationCache
    :return: List of VisualUnit
    """
    return segment_visual_units(normalize_text(text, cache))


def analyze_visual_length(text, short_characters=(), long_characters=(), cache=None):
    """
    Return the visual length, short character count, emoji count and long
    character count of a string.

    :param text: The string to analyze
    :param short_characters: Extra characters with short width (0.5x)
    :param long_characters: Extra characters with long width (1.5x)
    :param cache: Optional NormalizationCache
    :return: VisualProfile
    """
    if not text:
        return EMPTY_PROFILE

    classifier = CharacterClassifier(short_characters, long_characters)
    visual_length = 0
    short_count = 0
    emoji_count = 0
    long_count = 0

    for unit in visual_units(text, cache):
        visual_length += 1
        if unit.is_emoji:
            emoji_count += 1
            continue
        width_class = classifier.classify(unit.text)
        if width_class is WidthClass.SHORT:
            short_count += 1
        elif width_class is WidthClass.LONG:
            long_count += 1

    return VisualProfile(visual_length, short_count, emoji_count, long_count)


def visual_length(text, cache=None):
    """Number of visual units in text."""
    return len(visual_units(text, cache)) if text else 0
