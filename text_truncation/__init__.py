"""
Text truncation utilities package.
Estimates how much text fits into a number of rendered lines with a
"Show more" label, using only the line measurements of a host renderer.
"""

from .character_widths import (
    WidthClass,
    SHORT_CHARACTERS,
    LONG_CHARACTERS,
    CharacterClassifier,
    classify_character,
)
from .normalization import NormalizationCache, normalize_text
from .emoji_handler import VisualUnit, segment_visual_units
from .visual_length import VisualProfile, analyze_visual_length, visual_length, visual_units
from .width_estimation import LineMeasurement, balance_difference, estimate_unit_width, string_width
from .text_slicing import calculate_slice_position, visual_slice
from .config import ELLIPSIS, TruncationOptions, get_default_compensation, load_options, options_from_dict
from .truncation import (
    Phase,
    TruncationEngine,
    TruncationRequest,
    TruncationResult,
    TruncationState,
)

__all__ = [
    # Character classification
    'WidthClass',
    'SHORT_CHARACTERS',
    'LONG_CHARACTERS',
    'CharacterClassifier',
    'classify_character',
    # Normalization
    'NormalizationCache',
    'normalize_text',
    # Visual units
    'VisualUnit',
    'segment_visual_units',
    'VisualProfile',
    'analyze_visual_length',
    'visual_length',
    'visual_units',
    # Width estimation
    'LineMeasurement',
    'balance_difference',
    'estimate_unit_width',
    'string_width',
    # Slicing
    'calculate_slice_position',
    'visual_slice',
    # Configuration
    'ELLIPSIS',
    'TruncationOptions',
    'get_default_compensation',
    'load_options',
    'options_from_dict',
    # Engine
    'Phase',
    'TruncationEngine',
    'TruncationRequest',
    'TruncationResult',
    'TruncationState',
]
