"""
Configuration surface of the truncation engine.
"""

import json
import logging
from dataclasses import dataclass, fields
from typing import Optional

_LOGGER = logging.getLogger(__name__)

DEFAULT_READ_MORE_TEXT = "Show more"
DEFAULT_READ_LESS_TEXT = "Show less"
ELLIPSIS = "..."

# Extra safety margin (in average character widths) per host platform
PLATFORM_COMPENSATION = {
    "android": 0,
    "ios": 7,
}

default_platform = "android"


def get_default_compensation(platform):
    """Get the default compensation units for a host platform."""
    if platform in PLATFORM_COMPENSATION:
        return PLATFORM_COMPENSATION[platform]
    else:
        raise ValueError(f"Unsupported platform: {platform}")


def _validate_characters(name, characters):
    for char in characters:
        if not isinstance(char, str) or len(char) != 1:
            raise ValueError(f"{name} must contain single characters, got {char!r}")


@dataclass(frozen=True)
class TruncationOptions:
    """
    Caller-set options. compensation_units=None picks the platform default.
    """

    read_more_text: str = DEFAULT_READ_MORE_TEXT
    read_less_text: str = DEFAULT_READ_LESS_TEXT
    compensation_units: Optional[int] = None
    is_monospaced: bool = False
    short_characters: tuple = ()
    long_characters: tuple = ()
    platform: str = default_platform

    def __post_init__(self):
        if self.platform not in PLATFORM_COMPENSATION:
            raise ValueError(f"Unsupported platform: {self.platform}")

        if self.compensation_units is None:
            object.__setattr__(self, "compensation_units", get_default_compensation(self.platform))
        if isinstance(self.compensation_units, bool) or not isinstance(self.compensation_units, int):
            raise ValueError(f"compensation_units must be an integer, got {self.compensation_units!r}")
        if self.compensation_units < 0:
            raise ValueError(f"compensation_units must not be negative, got {self.compensation_units}")

        # Accept any iterable of characters, including a plain string
        object.__setattr__(self, "short_characters", tuple(self.short_characters or ()))
        object.__setattr__(self, "long_characters", tuple(self.long_characters or ()))
        _validate_characters("short_characters", self.short_characters)
        _validate_characters("long_characters", self.long_characters)

        for name in ("read_more_text", "read_less_text"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string")

    @property
    def read_more_label(self):
        return self.read_more_text.strip() or DEFAULT_READ_MORE_TEXT

    @property
    def read_less_label(self):
        return self.read_less_text.strip() or DEFAULT_READ_LESS_TEXT

    @property
    def affordance_text(self):
        """Text drawn after the truncated text, ellipsis included."""
        return f"{ELLIPSIS} {self.read_more_label}"


def options_from_dict(values):
    """
    Build TruncationOptions from a plain mapping.

    :param values: dict with TruncationOptions field names as keys
    :return: TruncationOptions
    """
    known = {field.name for field in fields(TruncationOptions)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return TruncationOptions(**values)


def load_options(path):
    """
    Load TruncationOptions from a JSON file.

    :param path: Path to a JSON object file
    :return: TruncationOptions
    """
    with open(path, "r", encoding="utf-8") as f:
        values = json.load(f)
    if not isinstance(values, dict):
        raise ValueError(f"Options file {path} must contain a JSON object")
    _LOGGER.debug("Loaded truncation options from %s", path)
    return options_from_dict(values)
