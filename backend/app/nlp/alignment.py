from __future__ import annotations

import logging

from app.nlp.adapter import AlignedToken, LemmatizeResult
from app.nlp.token_filter import split_tokens


logger = logging.getLogger(__name__)

PART_DELIMITER = "+"


def split_parts(lemma: str) -> tuple[str, ...]:
    # Empty segments ("w+" -> "w", "") are dropped so no blank part reaches the vocabulary store.
    parts = tuple(part for part in lemma.split(PART_DELIMITER) if part)
    return parts or (lemma,)


def build_alignment(filtered_text: str, response_line: str) -> LemmatizeResult:
    """Pair input tokens with analyzer tokens by position.

    The analyzer is trusted to keep token count and order. When the counts
    differ the alignment is left empty; the raw response is still returned.
    """
    words = split_tokens(filtered_text)
    lemmas = split_tokens(response_line)

    if len(words) != len(lemmas):
        logger.info(
            "alignment_token_count_mismatch",
            extra={"input_tokens": len(words), "response_tokens": len(lemmas)},
        )
        return LemmatizeResult(normalized_text=response_line)

    return LemmatizeResult(
        normalized_text=response_line,
        alignment=tuple(
            AlignedToken(token=word, lemma=lemma, parts=split_parts(lemma))
            for word, lemma in zip(words, lemmas)
        ),
    )
