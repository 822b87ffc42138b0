from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class AlignedToken:
    token: str
    lemma: str
    parts: tuple[str, ...]


@dataclass(frozen=True)
class LemmatizeResult:
    normalized_text: str
    alignment: tuple[AlignedToken, ...] = field(default_factory=tuple)


class Lemmatizer(Protocol):
    async def lemmatize(self, text: str) -> LemmatizeResult:
        ...

    async def ensure_ready(self) -> None:
        ...

    async def aclose(self) -> None:
        ...

    def metadata(self) -> dict[str, object]:
        ...
