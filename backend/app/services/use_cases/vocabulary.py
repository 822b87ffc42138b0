from __future__ import annotations

from pathlib import Path
from typing import Iterable

from app.api.schemas.v1.lemmatize import (
    CheckResponse,
    LemmaPartStatus,
    LemmatizeResponse,
    WordLemma,
    WordLemmaStatus,
)
from app.api.schemas.v1.vocab import (
    LemmaPartUpdate,
    UpdateResponse,
    VocabEntry,
    VocabListResponse,
)
from app.db.migrations import get_connection
from app.nlp.adapter import LemmatizeResult


_SEEN_SQL = """
    INSERT INTO lemmas (lemma_part, count)
    VALUES (?, 1)
    ON CONFLICT(lemma_part) DO UPDATE SET
        count = count + 1,
        last_seen = CURRENT_TIMESTAMP
"""

_MARK_SQL = """
    INSERT INTO lemmas (lemma_part, is_known, count)
    VALUES (?, ?, 1)
    ON CONFLICT(lemma_part) DO UPDATE SET
        is_known = excluded.is_known,
        count = count + 1,
        last_seen = CURRENT_TIMESTAMP
"""


class VocabularyUseCase:
    """Vocabulary bookkeeping over lemma parts derived from analyzer output."""

    def __init__(self, db_path: Path):
        self._db_path = db_path

    def record_lemmatized(self, result: LemmatizeResult) -> LemmatizeResponse:
        with get_connection(self._db_path) as conn:
            for aligned in result.alignment:
                for part in aligned.parts:
                    conn.execute(_SEEN_SQL, (part,))

        return LemmatizeResponse(
            lemmatized_text=result.normalized_text,
            words=[
                WordLemma(word=aligned.token, lemma=aligned.lemma, lemma_parts=list(aligned.parts))
                for aligned in result.alignment
            ],
        )

    def check(self, result: LemmatizeResult) -> CheckResponse:
        words: list[WordLemmaStatus] = []
        with get_connection(self._db_path) as conn:
            for aligned in result.alignment:
                part_statuses: list[LemmaPartStatus] = []
                for part in aligned.parts:
                    row = conn.execute(
                        "SELECT is_known, count FROM lemmas WHERE lemma_part = ?",
                        (part,),
                    ).fetchone()
                    part_statuses.append(
                        LemmaPartStatus(
                            part=part,
                            is_known=bool(row["is_known"]) if row else False,
                            count=int(row["count"]) if row else 0,
                        )
                    )
                words.append(
                    WordLemmaStatus(
                        word=aligned.token,
                        lemma=aligned.lemma,
                        lemma_parts=part_statuses,
                        is_known=all(status.is_known for status in part_statuses),
                    )
                )

        return CheckResponse(lemmatized_text=result.normalized_text, words=words)

    def update_known(self, result: LemmatizeResult, unknown_words: Iterable[str]) -> UpdateResponse:
        unknown = set(unknown_words)
        updated = 0
        with get_connection(self._db_path) as conn:
            for aligned in result.alignment:
                is_known = aligned.token not in unknown
                for part in aligned.parts:
                    conn.execute(_MARK_SQL, (part, is_known))
                    updated += 1

        return UpdateResponse(status="updated", updated_parts=updated)

    def update_parts(self, updates: Iterable[LemmaPartUpdate]) -> UpdateResponse:
        updated = 0
        with get_connection(self._db_path) as conn:
            for update in updates:
                part = update.part.strip()
                if not part:
                    raise ValueError("part must not be blank")
                conn.execute(_MARK_SQL, (part, update.is_known))
                updated += 1

        return UpdateResponse(status="updated", updated_parts=updated)

    def list_entries(self, is_known: bool | None = None, after: str | None = None) -> VocabListResponse:
        with get_connection(self._db_path) as conn:
            rows = conn.execute(
                """
                SELECT lemma_part, is_known, count, last_seen
                FROM lemmas
                WHERE (:is_known IS NULL OR is_known = :is_known)
                  AND (:after IS NULL OR last_seen > :after)
                ORDER BY last_seen DESC, lemma_part
                """,
                {"is_known": is_known, "after": after},
            ).fetchall()

        return VocabListResponse(
            items=[
                VocabEntry(
                    lemma_part=row["lemma_part"],
                    is_known=bool(row["is_known"]),
                    count=int(row["count"]),
                    last_seen=row["last_seen"],
                )
                for row in rows
            ]
        )
