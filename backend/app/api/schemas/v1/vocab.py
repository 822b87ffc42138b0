from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class UpdateKnownRequest(BaseModel):
    text: str = Field(...)
    unknown_words: list[str] = Field(default_factory=list)


class LemmaPartUpdate(BaseModel):
    part: str = Field(..., min_length=1)
    is_known: bool


class UpdateLemmaPartsRequest(BaseModel):
    parts: list[LemmaPartUpdate]


class UpdateResponse(BaseModel):
    status: Literal["updated"]
    updated_parts: int


class VocabEntry(BaseModel):
    lemma_part: str
    is_known: bool
    count: int
    last_seen: str | None


class VocabListResponse(BaseModel):
    items: list[VocabEntry]
