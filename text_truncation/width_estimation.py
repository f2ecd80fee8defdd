"""
Average glyph width estimation from rendered line measurements.

The host renderer reports the text and pixel width of every wrapped line.
From one line we derive the width of an average (normal class) character,
corrected for the mix of narrow, wide and emoji glyphs on that line.
"""

import logging
from dataclasses import dataclass

from .character_widths import CharacterClassifier, WidthClass
from .visual_length import visual_units

_LOGGER = logging.getLogger(__name__)

# Tunable coefficients of the balance correction. Empirically chosen, not
# derived from font metrics; may need recalibration per target platform.
EMOJI_BALANCE_WEIGHT = 1.0
LONG_BALANCE_WEIGHT = 0.5
SHORT_BALANCE_WEIGHT = 0.5


@dataclass(frozen=True)
class LineMeasurement:
    """One wrapped line as reported by the host renderer."""

    text: str
    rendered_width_px: float

    @property
    def content(self):
        """Line text without its trailing newline."""
        return self.text[:-1] if self.text.endswith("\n") else self.text


def balance_difference(emoji_count=0, short_count=0, long_count=0):
    """
    Weighted surplus of wide glyphs over narrow glyphs on a line.

    Positive when the line leans towards emoji and long characters, negative
    when it leans towards short characters.
    """
    return (
        EMOJI_BALANCE_WEIGHT * emoji_count
        + LONG_BALANCE_WEIGHT * long_count
        - SHORT_BALANCE_WEIGHT * short_count
    )


def estimate_unit_width(line, profile):
    """
    Estimate the pixel width of one normal class character.

    :param line: LineMeasurement of the reference line
    :param profile: VisualProfile of the line content
    :return: Pixels per unit, 0 when the line has no visual units
    """
    if profile.visual_length <= 0:
        return 0.0

    unit_width = line.rendered_width_px / profile.visual_length
    balance = balance_difference(profile.emoji_count, profile.short_count, profile.long_count)
    if balance == 0:
        return unit_width

    ratio = abs(balance) / profile.visual_length
    if balance < 0:
        corrected = unit_width * (1 + ratio)
    else:
        corrected = unit_width * (1 - ratio)

    _LOGGER.debug(
        "Unit width %.3fpx corrected to %.3fpx (balance=%.1f over %d units)",
        unit_width,
        corrected,
        balance,
        profile.visual_length,
    )
    return corrected


def unit_cost(unit, unit_width, classifier, is_monospaced=False):
    """
    Estimated pixel width of a single visual unit.

    :param unit: VisualUnit
    :param unit_width: Width of a normal class character
    :param classifier: CharacterClassifier with the active overrides
    :param is_monospaced: All non-emoji units cost exactly unit_width
    :return: Width in pixels
    """
    if unit.is_emoji:
        return unit_width * WidthClass.EMOJI.value
    if is_monospaced:
        return unit_width
    return unit_width * classifier.multiplier(unit.text)


def string_width(
    text,
    unit_width,
    is_monospaced=False,
    short_characters=(),
    long_characters=(),
    cache=None,
):
    """
    Estimate the total visual width of a string.

    :param text: The string to measure
    :param unit_width: Width of a normal class character
    :param is_monospaced: Whether the font is monospaced
    :param short_characters: Extra characters with short width (0.5x)
    :param long_characters: Extra characters with long width (1.5x)
    :param cache: Optional NormalizationCache
    :return: Width in pixels
    """
    if not text:
        return 0.0

    classifier = CharacterClassifier(short_characters, long_characters)
    return sum(
        unit_cost(unit, unit_width, classifier, is_monospaced)
        for unit in visual_units(text, cache)
    )
