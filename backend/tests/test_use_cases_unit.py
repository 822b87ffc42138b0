from __future__ import annotations

from pathlib import Path

import pytest

from app.api.schemas.v1.vocab import LemmaPartUpdate
from app.db.migrations import apply_migrations, get_connection
from app.nlp.adapter import AlignedToken, LemmatizeResult
from app.services.use_cases import VocabularyUseCase


def _db_path(tmp_path: Path) -> Path:
    db_path = tmp_path / "vocabulary.sqlite3"
    apply_migrations(db_path)
    return db_path


def _result(*pairs: tuple[str, str]) -> LemmatizeResult:
    return LemmatizeResult(
        normalized_text=" ".join(lemma for _, lemma in pairs),
        alignment=tuple(
            AlignedToken(token=word, lemma=lemma, parts=tuple(lemma.split("+")))
            for word, lemma in pairs
        ),
    )


def _counts(db_path: Path) -> dict[str, tuple[bool, int]]:
    with get_connection(db_path) as conn:
        return {
            row["lemma_part"]: (bool(row["is_known"]), row["count"])
            for row in conn.execute("SELECT lemma_part, is_known, count FROM lemmas").fetchall()
        }


def test_record_lemmatized_counts_every_part(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)

    response = use_case.record_lemmatized(_result(("كتبها", "ktb+ha"), ("كتب", "ktb")))

    assert response.lemmatized_text == "ktb+ha ktb"
    assert [word.lemma_parts for word in response.words] == [["ktb", "ha"], ["ktb"]]
    assert _counts(db_path) == {"ktb": (False, 2), "ha": (False, 1)}


def test_record_lemmatized_with_empty_alignment_touches_nothing(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)

    response = VocabularyUseCase(db_path).record_lemmatized(LemmatizeResult(normalized_text="a b c"))

    assert response.words == []
    assert response.lemmatized_text == "a b c"
    assert _counts(db_path) == {}


def test_check_reports_part_status_and_word_knownness(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)
    use_case.update_parts([LemmaPartUpdate(part="ktb", is_known=True)])

    response = use_case.check(_result(("كتبها", "ktb+ha"), ("كتب", "ktb")))

    first, second = response.words
    assert [(part.part, part.is_known, part.count) for part in first.lemma_parts] == [
        ("ktb", True, 1),
        ("ha", False, 0),
    ]
    assert first.is_known is False
    assert second.is_known is True
    assert _counts(db_path) == {"ktb": (True, 1)}


def test_update_known_marks_parts_of_unknown_words(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)

    response = use_case.update_known(
        _result(("كتبها", "ktb+ha"), ("الولد", "Al+wld")),
        unknown_words=["الولد"],
    )

    assert response.updated_parts == 4
    assert _counts(db_path) == {
        "ktb": (True, 1),
        "ha": (True, 1),
        "Al": (False, 1),
        "wld": (False, 1),
    }


def test_update_parts_overwrites_status_and_bumps_count(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)

    use_case.update_parts([LemmaPartUpdate(part="ktb", is_known=True)])
    use_case.update_parts([LemmaPartUpdate(part="ktb", is_known=False)])

    assert _counts(db_path) == {"ktb": (False, 2)}


def test_update_parts_rejects_blank_part_without_partial_writes(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)

    with pytest.raises(ValueError):
        use_case.update_parts(
            [
                LemmaPartUpdate(part="ktb", is_known=True),
                LemmaPartUpdate(part="   ", is_known=True),
            ]
        )

    assert _counts(db_path) == {}


def test_list_entries_filters_by_status_and_timestamp(tmp_path: Path) -> None:
    db_path = _db_path(tmp_path)
    use_case = VocabularyUseCase(db_path)
    use_case.update_parts(
        [
            LemmaPartUpdate(part="ktb", is_known=True),
            LemmaPartUpdate(part="drs", is_known=False),
        ]
    )
    with get_connection(db_path) as conn:
        conn.execute("UPDATE lemmas SET last_seen = '2024-01-01 00:00:00' WHERE lemma_part = 'ktb'")
        conn.execute("UPDATE lemmas SET last_seen = '2024-06-01 00:00:00' WHERE lemma_part = 'drs'")

    everything = use_case.list_entries()
    known = use_case.list_entries(is_known=True)
    unknown = use_case.list_entries(is_known=False)
    recent = use_case.list_entries(after="2024-03-01 00:00:00")

    assert [item.lemma_part for item in everything.items] == ["drs", "ktb"]
    assert [item.lemma_part for item in known.items] == ["ktb"]
    assert [item.lemma_part for item in unknown.items] == ["drs"]
    assert [item.lemma_part for item in recent.items] == ["drs"]
    assert everything.items[0].last_seen == "2024-06-01 00:00:00"
