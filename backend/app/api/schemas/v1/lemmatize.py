from __future__ import annotations

from pydantic import BaseModel, Field


class LemmatizeRequest(BaseModel):
    text: str = Field(...)


class WordLemma(BaseModel):
    word: str
    lemma: str
    lemma_parts: list[str]


class LemmatizeResponse(BaseModel):
    lemmatized_text: str
    words: list[WordLemma]


class LemmaPartStatus(BaseModel):
    part: str
    is_known: bool
    count: int


class WordLemmaStatus(BaseModel):
    word: str
    lemma: str
    lemma_parts: list[LemmaPartStatus]
    is_known: bool


class CheckResponse(BaseModel):
    lemmatized_text: str
    words: list[WordLemmaStatus]
