from __future__ import annotations

import unicodedata


def _is_letter(character: str, keep_digits: bool) -> bool:
    if character.isalpha():
        return True
    if keep_digits and character.isdigit():
        return True
    # Combining marks (Arabic harakat, shadda) belong to the word they sit on.
    return unicodedata.category(character).startswith("M")


def filter_text(text: str, keep_digits: bool = False) -> str:
    """Strip everything but letters and whitespace, folding line breaks into spaces.

    The analyzer tokenizes on its own; punctuation left in the text makes its
    token count drift from a plain whitespace split of the input. Line breaks
    would split one request into several protocol lines.
    """
    kept = "".join(
        character
        for character in text
        if character.isspace() or _is_letter(character, keep_digits)
    )
    return " ".join(kept.splitlines())


def split_tokens(text: str) -> list[str]:
    return text.split()
