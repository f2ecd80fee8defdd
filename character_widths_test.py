from text_truncation.character_widths import (
    LONG_CHARACTERS,
    SHORT_CHARACTERS,
    CharacterClassifier,
    WidthClass,
    classify_character,
    merge_character_sets,
)


def test_default_classes():
    assert classify_character("i") is WidthClass.SHORT
    assert classify_character(".") is WidthClass.SHORT
    assert classify_character("\u00ed") is WidthClass.SHORT
    assert classify_character("M") is WidthClass.LONG
    assert classify_character("w") is WidthClass.LONG
    assert classify_character("a") is WidthClass.NORMAL
    assert classify_character("7") is WidthClass.NORMAL


def test_space_is_always_short():
    classifier = CharacterClassifier(long_overrides=[" "])
    assert classifier.classify(" ") is WidthClass.SHORT
    assert classify_character(" ", frozenset(), frozenset()) is WidthClass.SHORT


def test_overrides_extend_defaults():
    classifier = CharacterClassifier(short_overrides=["a"], long_overrides=["b"])
    assert classifier.classify("a") is WidthClass.SHORT
    assert classifier.classify("b") is WidthClass.LONG
    # built-ins still apply
    assert classifier.classify("i") is WidthClass.SHORT
    assert classifier.classify("m") is WidthClass.LONG
    # defaults are left untouched
    assert "a" not in SHORT_CHARACTERS
    assert "b" not in LONG_CHARACTERS


def test_short_wins_over_long():
    classifier = CharacterClassifier(short_overrides=["m"])
    assert classifier.classify("m") is WidthClass.SHORT


def test_multiplier_values():
    classifier = CharacterClassifier()
    assert classifier.multiplier("l") == 0.5
    assert classifier.multiplier("x") == 1.0
    assert classifier.multiplier("W") == 1.5
    assert WidthClass.EMOJI.value == 2.0


def test_merge_without_custom_returns_default():
    assert merge_character_sets((), SHORT_CHARACTERS) is SHORT_CHARACTERS
    assert merge_character_sets(None, LONG_CHARACTERS) is LONG_CHARACTERS
