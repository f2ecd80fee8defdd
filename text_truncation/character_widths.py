"""
Character width classification for proportional-font estimates.
Maps single characters to a relative width class without font metrics.
"""

from enum import Enum


class WidthClass(Enum):
    """Relative multiplier of the estimated average glyph width."""

    SHORT = 0.5
    NORMAL = 1.0
    LONG = 1.5
    EMOJI = 2.0


# Narrow glyphs in most sans-serif UI fonts
SHORT_CHARACTERS = frozenset(
    ["í", "ỉ", "ị", "ì", "i", "t", "f", "r", "l", ".", ",", "|", ":", ";", "'", '"', "!"]
)

# Wide glyphs
LONG_CHARACTERS = frozenset(["m", "w", "M", "W"])

SPACE = " "


def merge_character_sets(custom_characters, default_characters):
    """
    Union caller-supplied characters with a built-in set.

    :param custom_characters: Iterable of extra characters (may be empty or None)
    :param default_characters: Built-in frozenset
    :return: frozenset containing both
    """
    if not custom_characters:
        return default_characters
    return default_characters.union(custom_characters)


def classify_character(char, short_characters=SHORT_CHARACTERS, long_characters=LONG_CHARACTERS):
    """
    Classify a single character.

    A literal space is always short. The sets passed in are expected to be
    already merged with the defaults (see merge_character_sets).

    :param char: Single character
    :param short_characters: Characters rendered at half width
    :param long_characters: Characters rendered at one and a half width
    :return: WidthClass
    """
    if char == SPACE:
        return WidthClass.SHORT
    if char in short_characters:
        return WidthClass.SHORT
    if char in long_characters:
        return WidthClass.LONG
    return WidthClass.NORMAL


class CharacterClassifier:
    """Classifier bound to one pair of override sets."""

    def __init__(self, short_overrides=(), long_overrides=()):
        self.short_characters = merge_character_sets(short_overrides, SHORT_CHARACTERS)
        self.long_characters = merge_character_sets(long_overrides, LONG_CHARACTERS)

    def classify(self, char):
        return classify_character(char, self.short_characters, self.long_characters)

    def multiplier(self, char):
        return self.classify(char).value
