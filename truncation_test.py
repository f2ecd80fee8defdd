import pytest

from text_truncation.config import ELLIPSIS, TruncationOptions
from text_truncation.normalization import NormalizationCache
from text_truncation.truncation import (
    Phase,
    TruncationEngine,
    TruncationRequest,
    TruncationResult,
)
from text_truncation.width_estimation import LineMeasurement

FLAG_JP = "\U0001F1EF\U0001F1F5"


def make_lines(*pairs):
    return tuple(LineMeasurement(text, width) for text, width in pairs)


def request(full_text, max_lines, container_width, lines, options=None):
    return TruncationRequest.from_options(
        full_text, max_lines, container_width, lines, options or TruncationOptions()
    )


def four_normal_lines():
    lines = make_lines(*[("abcdeabcde", 100)] * 4)
    return "".join(line.text for line in lines), lines


def test_empty_text_needs_no_truncation():
    engine = TruncationEngine()
    assert engine.truncate(request("", 3, 300, ())) == TruncationResult(False, "")


def test_missing_layout_data_gives_no_result():
    engine = TruncationEngine()
    text, lines = four_normal_lines()
    assert engine.truncate(request(text, 3, 0, lines)) is None
    assert engine.truncate(request(text, 3, 300, ())) is None


def test_text_that_fits_is_kept():
    engine = TruncationEngine()
    lines = make_lines(("first line ", 90), ("second line ", 95), ("third", 40))
    text = "".join(line.text for line in lines)
    result = engine.truncate(request(text, 3, 300, lines))
    assert result == TruncationResult(False, text)


def test_truncation_shrinks_with_compensation():
    text, lines = four_normal_lines()
    lengths = []
    for compensation in (0, 10, 20):
        engine = TruncationEngine(TruncationOptions(compensation_units=compensation))
        result = engine.truncate(request(text, 3, 300, lines, engine.options))
        assert result.needs_truncation
        assert result.display_text.endswith(ELLIPSIS)
        lengths.append(len(result.display_text) - len(ELLIPSIS))

    assert lengths == [30, 9, 0]


def test_balance_correction_changes_trim():
    engine = TruncationEngine()
    results = {}
    for char in ("i", "M"):
        lines = make_lines((char * 40, 200), ("tail", 20))
        text = "".join(line.text for line in lines)
        results[char] = engine.truncate(request(text, 1, 200, lines)).display_text

    assert results["i"] == "i" * 18 + ELLIPSIS
    assert results["M"] == "M" * 32 + ELLIPSIS


def test_cut_moves_to_emoji_boundary():
    options = TruncationOptions(read_more_text="+")
    engine = TruncationEngine(options)
    lines = make_lines((f"abcde{FLAG_JP}gh", 128), ("more", 40))
    text = "".join(line.text for line in lines)

    result = engine.truncate(request(text, 1, 128, lines, options))
    assert result.display_text == "abcde" + ELLIPSIS
    assert "\U0001F1EF" not in result.display_text


def test_trailing_newline_and_whitespace_removed():
    engine = TruncationEngine()
    lines = make_lines(("short line  \n", 50), ("next", 30))
    text = "".join(line.text for line in lines)
    result = engine.truncate(request(text, 1, 300, lines))
    assert result == TruncationResult(True, "short line" + ELLIPSIS)


def test_empty_last_line_falls_back_to_unit_width():
    engine = TruncationEngine()
    lines = make_lines(("\n", 0), ("more", 40))
    result = engine.truncate(request("\nmore", 1, 300, lines))
    assert result == TruncationResult(True, ELLIPSIS)


def test_line_limit_below_one_uses_one():
    engine = TruncationEngine()
    lines = make_lines(("one ", 30), ("two", 30))
    result = engine.truncate(request("one two", 0, 300, lines))
    assert result == TruncationResult(True, "one" + ELLIPSIS)


def test_same_request_same_result():
    engine = TruncationEngine(cache=NormalizationCache(capacity=4))
    text, lines = four_normal_lines()
    req = request(text, 3, 250, lines)
    first = engine.truncate(req)
    assert engine.truncate(req) == first
    assert TruncationEngine().truncate(req) == first


def test_display_text_is_prefix_of_full_text():
    engine = TruncationEngine(TruncationOptions(compensation_units=3))
    lines = make_lines(
        (f"Trip to Tokyo {FLAG_JP} was ", 180),
        ("wonderful and we will ", 190),
        ("come back next year", 170),
    )
    text = "".join(line.text for line in lines)
    for max_lines in (1, 2):
        result = engine.truncate(request(text, max_lines, 200, lines, engine.options))
        assert result.needs_truncation
        assert text.startswith(result.display_text[: -len(ELLIPSIS)])


def test_state_machine_transitions():
    engine = TruncationEngine()
    text, lines = four_normal_lines()

    state = engine.begin(text, 3)
    assert state.phase is Phase.UNMEASURED
    assert engine.resolve(state) is state

    state = engine.on_container_layout(state, 300)
    assert state.phase is Phase.UNMEASURED
    state = engine.on_text_layout(state, lines)
    assert state.phase is Phase.MEASURING

    state = engine.resolve(state)
    assert state.phase is Phase.RESOLVED
    assert state.needs_truncation
    assert engine.render_line_limit(state) is None

    # later layout passes of the truncated render are ignored
    assert engine.on_text_layout(state, lines[:1]) is state
    assert engine.on_container_layout(state, 10) is state


def test_zero_width_keeps_state_unmeasured():
    engine = TruncationEngine()
    text, lines = four_normal_lines()
    state = engine.on_text_layout(engine.begin(text, 3), lines)
    state = engine.on_container_layout(state, 0)
    assert state.phase is Phase.UNMEASURED
    assert engine.render_line_limit(state) == 3


def test_text_layout_accepts_pairs():
    engine = TruncationEngine()
    state = engine.measure(engine.begin("ab cd", 1), 100, [("ab ", 20), ("cd", 20)])
    assert state.phase is Phase.RESOLVED
    assert state.line_measurements[0] == LineMeasurement("ab ", 20.0)


def test_content_change_discards_measurements():
    engine = TruncationEngine()
    text, lines = four_normal_lines()
    state = engine.measure(engine.begin(text, 3), 300, lines)

    assert engine.sync_content(state, text, 3) is state

    for changed in (("other", 3, None), (text, 2, None), (text, 3, "bold")):
        fresh = engine.sync_content(state, *changed)
        assert fresh.phase is Phase.UNMEASURED
        assert fresh.line_measurements == ()
        assert fresh.container_width_px == 0
        assert fresh.result is None


def test_toggle_expansion():
    engine = TruncationEngine()
    text, lines = four_normal_lines()
    state = engine.measure(engine.begin(text, 3), 300, lines)

    assert engine.visible_text(state) == state.result.display_text
    assert engine.affordance_label(state) == "Show more"
    assert engine.rendered_text(state) == state.result.display_text + " Show more"

    expanded = engine.toggle_expansion(state)
    assert expanded.expanded
    assert engine.visible_text(expanded) == text
    assert engine.affordance_label(expanded) == "Show less"

    assert not engine.toggle_expansion(expanded).expanded


def test_toggle_is_noop_without_truncation():
    engine = TruncationEngine()
    state = engine.measure(engine.begin("fits", 3), 300, [("fits", 30)])
    assert not state.needs_truncation
    assert engine.toggle_expansion(state) is state
    assert engine.affordance_label(state) is None
    assert engine.rendered_text(state) == "fits"


def test_with_cache_builds_bounded_cache():
    engine = TruncationEngine.with_cache(capacity=8)
    assert engine.cache.capacity == 8
    text, lines = four_normal_lines()
    assert engine.truncate(request(text, 3, 300, lines)).needs_truncation
    assert len(engine.cache) > 0


def test_request_from_options():
    options = TruncationOptions(
        read_more_text="Read more",
        compensation_units=2,
        is_monospaced=True,
        short_characters="ab",
        long_characters=["z"],
    )
    req = TruncationRequest.from_options("text", 2, 100, [], options)
    assert req.affordance_text == "... Read more"
    assert req.compensation_units == 2
    assert req.is_monospaced
    assert req.short_overrides == ("a", "b")
    assert req.long_overrides == ("z",)
    assert req.line_measurements == ()


def test_decomposed_accent_stays_with_its_letter():
    options = TruncationOptions(read_more_text="+", compensation_units=0)
    engine = TruncationEngine(options)
    lines = make_lines(("Cafe\u0301 ok", 70), ("more", 30))
    text = "".join(line.text for line in lines)

    result = engine.truncate(request(text, 1, 70, lines, options))
    assert result.display_text != "Cafe" + ELLIPSIS
    assert result.display_text == "Caf" + ELLIPSIS


def test_empty_text_state_resolves_without_layout():
    engine = TruncationEngine()
    state = engine.measure(engine.begin("", 3), 300, [])
    assert state.phase is Phase.RESOLVED
    assert state.result == TruncationResult(False, "")
    assert engine.rendered_text(state) == ""

    assert engine.resolve(engine.begin("", 2)).phase is Phase.RESOLVED
