"""
Truncation engine for "Show more" text.

Given the lines a host renderer produced for the full text, decides whether
the text exceeds the line limit and computes a truncated text that leaves
room for the ellipsis and the read more label on the last visible line.

The engine holds no per-text state. Layout progress is an explicit
TruncationState value owned by the host and passed into every call:

    UNMEASURED -> MEASURING -> RESOLVED

A state leaves UNMEASURED once both the container width and the line
measurements of the unconstrained render are known. Any change of text,
line limit or style starts over from UNMEASURED.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .config import ELLIPSIS, TruncationOptions
from .normalization import NormalizationCache
from .text_slicing import calculate_slice_position, visual_slice
from .visual_length import analyze_visual_length
from .width_estimation import LineMeasurement, estimate_unit_width, string_width

_LOGGER = logging.getLogger(__name__)

# Substituted when the reference line yields no usable unit width
FALLBACK_UNIT_WIDTH = 1.0


@dataclass(frozen=True)
class TruncationRequest:
    full_text: str
    max_lines: int
    container_width_px: float
    line_measurements: tuple
    affordance_text: str = f"{ELLIPSIS} Show more"
    compensation_units: int = 0
    is_monospaced: bool = False
    short_overrides: tuple = ()
    long_overrides: tuple = ()

    @classmethod
    def from_options(cls, full_text, max_lines, container_width_px, line_measurements, options):
        return cls(
            full_text=full_text,
            max_lines=max_lines,
            container_width_px=container_width_px,
            line_measurements=tuple(line_measurements),
            affordance_text=options.affordance_text,
            compensation_units=options.compensation_units,
            is_monospaced=options.is_monospaced,
            short_overrides=options.short_characters,
            long_overrides=options.long_characters,
        )


@dataclass(frozen=True)
class TruncationResult:
    """display_text excludes the read more label, the host appends it."""

    needs_truncation: bool
    display_text: str


class Phase(Enum):
    UNMEASURED = "unmeasured"
    MEASURING = "measuring"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class TruncationState:
    phase: Phase
    full_text: str
    max_lines: int
    style_key: object = None
    container_width_px: float = 0.0
    line_measurements: tuple = ()
    result: TruncationResult = None
    expanded: bool = False

    @property
    def content_key(self):
        return (self.full_text, self.max_lines, self.style_key)

    @property
    def has_layout_data(self):
        return self.container_width_px > 0 and len(self.line_measurements) > 0

    @property
    def needs_truncation(self):
        return self.phase is Phase.RESOLVED and self.result.needs_truncation


def as_line_measurement(line):
    """Accept a LineMeasurement or a (text, width) pair."""
    if isinstance(line, LineMeasurement):
        return line
    text, width = line
    return LineMeasurement(text, float(width))


def _normalize_max_lines(max_lines):
    if max_lines < 1:
        _LOGGER.warning("Line limit %s is below 1, using 1", max_lines)
        return 1
    return max_lines


class TruncationEngine:
    """
    :param options: TruncationOptions (defaults when omitted)
    :param cache: Optional NormalizationCache shared across calls
    """

    def __init__(self, options=None, cache=None):
        self.options = options or TruncationOptions()
        self.cache = cache

    @classmethod
    def with_cache(cls, options=None, capacity=None):
        cache = NormalizationCache(capacity) if capacity else NormalizationCache()
        return cls(options, cache)

    def truncate(self, request):
        """
        Compute the truncation for one set of measurements.

        :param request: TruncationRequest
        :return: TruncationResult, or None while layout data is missing
        """
        if not request.full_text:
            return TruncationResult(False, "")
        if request.container_width_px <= 0 or not request.line_measurements:
            _LOGGER.debug("Container width or line measurements missing, nothing to compute")
            return None

        max_lines = _normalize_max_lines(request.max_lines)
        lines = request.line_measurements
        if len(lines) <= max_lines:
            return TruncationResult(False, request.full_text)

        visible_text = "".join(line.text for line in lines[:max_lines])
        if visible_text.endswith("\n"):
            visible_text = visible_text[:-1]

        last_line = lines[max_lines - 1]
        profile = analyze_visual_length(
            last_line.content, request.short_overrides, request.long_overrides, self.cache
        )
        unit_width = estimate_unit_width(last_line, profile) or FALLBACK_UNIT_WIDTH

        affordance_cost = string_width(
            request.affordance_text,
            unit_width,
            request.is_monospaced,
            request.short_overrides,
            request.long_overrides,
            self.cache,
        ) + request.compensation_units * unit_width

        units_to_drop = 0
        target_last_line_width = request.container_width_px - affordance_cost
        if affordance_cost > 0 and last_line.rendered_width_px > target_last_line_width:
            units_to_drop = calculate_slice_position(
                visible_text,
                unit_width,
                affordance_cost,
                request.is_monospaced,
                request.short_overrides,
                request.long_overrides,
                self.cache,
            )

        _LOGGER.debug(
            "%d lines over limit %d: unit width %.2fpx, affordance %.2fpx, dropping %d units",
            len(lines),
            max_lines,
            unit_width,
            affordance_cost,
            units_to_drop,
        )
        end = -units_to_drop if units_to_drop else None
        display_text = visual_slice(visible_text, 0, end, self.cache).rstrip()
        return TruncationResult(True, display_text + ELLIPSIS)

    def request_for(self, state):
        return TruncationRequest.from_options(
            state.full_text,
            state.max_lines,
            state.container_width_px,
            state.line_measurements,
            self.options,
        )

    # State transitions

    def begin(self, full_text, max_lines, style_key=None):
        return TruncationState(Phase.UNMEASURED, full_text, _normalize_max_lines(max_lines), style_key)

    def sync_content(self, state, full_text, max_lines, style_key=None):
        """
        Keep state when text, line limit and style are unchanged, otherwise
        start over and drop the old measurements.
        """
        fresh = self.begin(full_text, max_lines, style_key)
        if fresh.content_key == state.content_key:
            return state
        _LOGGER.debug("Content changed, discarding %d stale line measurements", len(state.line_measurements))
        return fresh

    def on_container_layout(self, state, container_width_px):
        if state.phase is Phase.RESOLVED:
            return state
        return self._with_layout_data(state, container_width_px=container_width_px or 0.0)

    def on_text_layout(self, state, lines):
        if state.phase is Phase.RESOLVED:
            return state
        measurements = tuple(as_line_measurement(line) for line in lines or ())
        return self._with_layout_data(state, line_measurements=measurements)

    def _with_layout_data(self, state, **changes):
        updated = replace(state, **changes)
        phase = Phase.MEASURING if updated.has_layout_data else Phase.UNMEASURED
        if phase is not updated.phase:
            _LOGGER.debug("Truncation state %s -> %s", updated.phase.value, phase.value)
        return replace(updated, phase=phase)

    def resolve(self, state):
        """
        Run the truncation for a MEASURING state. An empty text needs no
        layout data and resolves straight away.
        """
        if state.phase is Phase.RESOLVED:
            return state
        if state.phase is Phase.UNMEASURED and state.full_text:
            _LOGGER.warning("Cannot resolve truncation before container width and line measurements are known")
            return state

        result = self.truncate(self.request_for(state))
        _LOGGER.debug("Truncation state %s -> resolved (needs_truncation=%s)", state.phase.value, result.needs_truncation)
        return replace(state, phase=Phase.RESOLVED, result=result, expanded=False)

    def measure(self, state, container_width_px, lines):
        """Record both layout results and resolve when they are complete."""
        state = self.on_container_layout(state, container_width_px)
        state = self.on_text_layout(state, lines)
        if state.phase is Phase.MEASURING or not state.full_text:
            state = self.resolve(state)
        return state

    # Host rendering helpers

    def toggle_expansion(self, state):
        if not state.needs_truncation:
            return state
        return replace(state, expanded=not state.expanded)

    def visible_text(self, state):
        if state.needs_truncation and not state.expanded:
            return state.result.display_text
        return state.full_text

    def affordance_label(self, state):
        if not state.needs_truncation:
            return None
        return self.options.read_less_label if state.expanded else self.options.read_more_label

    def render_line_limit(self, state):
        """Line cap for the host render; None once the text is already cut."""
        if state.needs_truncation:
            return None
        return state.max_lines

    def rendered_text(self, state):
        label = self.affordance_label(state)
        text = self.visible_text(state)
        return f"{text} {label}" if label else text
