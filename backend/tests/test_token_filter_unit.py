from __future__ import annotations

from app.nlp.token_filter import filter_text, split_tokens


def test_filter_strips_punctuation() -> None:
    assert filter_text("hello, world!") == "hello world"


def test_filter_drops_digits_unless_requested() -> None:
    assert filter_text("room 101 is free") == "room  is free"
    assert filter_text("room 101 is free", keep_digits=True) == "room 101 is free"


def test_filter_is_idempotent() -> None:
    samples = [
        "hello, world!",
        "كَتَبَ الوَلَدُ الدَّرْسَ.",
        "tab\tseparated   words",
        "mixed 42 digits; and (brackets)",
        "",
    ]
    for sample in samples:
        for keep_digits in (False, True):
            once = filter_text(sample, keep_digits=keep_digits)
            assert filter_text(once, keep_digits=keep_digits) == once


def test_filter_keeps_arabic_diacritics_attached_to_words() -> None:
    assert filter_text("كَتَبَ، الدَّرْسَ؟") == "كَتَبَ الدَّرْسَ"


def test_filter_folds_line_breaks_into_one_line() -> None:
    filtered = filter_text("first line\nsecond line\r\nthird")

    assert "\n" not in filtered
    assert "\r" not in filtered
    assert split_tokens(filtered) == ["first", "line", "second", "line", "third"]


def test_split_tokens_collapses_whitespace_runs() -> None:
    assert split_tokens("  a \t b  c  ") == ["a", "b", "c"]
