"""
Reference host renderer backed by reportlab font metrics.

Wraps text to a width with real glyph widths and reports one
LineMeasurement per wrapped line, the way a UI toolkit reports its text
layout. Line texts keep their trailing spaces and newlines so they
concatenate back to the input.
"""

import logging
import re

from reportlab.pdfbase import pdfmetrics

from .width_estimation import LineMeasurement

_LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 12

# A word with the whitespace that follows it, or a run of leading whitespace
_WORD_PATTERN = re.compile(r"\S+\s*|\s+")


def measure_text_width(text, font_name=DEFAULT_FONT_NAME, font_size=DEFAULT_FONT_SIZE):
    """Rendered width of text without trailing whitespace."""
    return pdfmetrics.stringWidth(text.rstrip(), font_name, font_size)


def wrap_paragraph(paragraph, max_width, font_name, font_size):
    """
    Greedy word wrap of a single paragraph (no newlines).

    :return: List of line strings, trailing spaces kept on their line
    """
    words = _WORD_PATTERN.findall(paragraph)
    if not words:
        return [""]

    lines = []
    current_line = ""

    def break_long_word(word):
        """Break a long word into parts that fit the width."""
        broken_parts = []
        current_part = ""
        for char in word:
            test_part = current_part + char
            if measure_text_width(test_part, font_name, font_size) <= max_width or not current_part:
                current_part = test_part
            else:
                broken_parts.append(current_part)
                current_part = char
        if current_part:
            broken_parts.append(current_part)
        return broken_parts

    for word in words:
        test_line = current_line + word
        if measure_text_width(test_line, font_name, font_size) <= max_width:
            current_line = test_line
            continue

        if current_line:
            lines.append(current_line)
            current_line = ""

        if measure_text_width(word, font_name, font_size) > max_width:
            broken_parts = break_long_word(word)
            lines.extend(broken_parts[:-1])
            current_line = broken_parts[-1]
        else:
            current_line = word

    if current_line:
        lines.append(current_line)
    return lines


def measure_lines(text, max_width, font_name=DEFAULT_FONT_NAME, font_size=DEFAULT_FONT_SIZE):
    """
    Wrap text to max_width and measure every resulting line.

    :param text: Full, untruncated text
    :param max_width: Container width in points (used as pixels)
    :param font_name: Registered reportlab font name
    :param font_size: Font size
    :return: List of LineMeasurement
    """
    if not text:
        return []
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")

    paragraphs = text.split("\n")
    # A trailing newline ends the last paragraph instead of opening a new one
    if paragraphs[-1] == "":
        paragraphs.pop()

    measurements = []
    for index, paragraph in enumerate(paragraphs):
        lines = wrap_paragraph(paragraph, max_width, font_name, font_size)
        if index < len(paragraphs) - 1 or text.endswith("\n"):
            lines[-1] += "\n"
        for line in lines:
            measurements.append(LineMeasurement(line, measure_text_width(line, font_name, font_size)))

    _LOGGER.debug("Wrapped %d characters into %d lines at %.1fpt", len(text), len(measurements), max_width)
    return measurements
