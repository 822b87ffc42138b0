from app.api.schemas.v1 import (
    CheckResponse,
    LemmaPartStatus,
    LemmaPartUpdate,
    LemmatizeRequest,
    LemmatizeResponse,
    UpdateKnownRequest,
    UpdateLemmaPartsRequest,
    UpdateResponse,
    VocabEntry,
    VocabListResponse,
    WordLemma,
    WordLemmaStatus,
)

__all__ = [
    "LemmatizeRequest",
    "LemmatizeResponse",
    "WordLemma",
    "CheckResponse",
    "LemmaPartStatus",
    "WordLemmaStatus",
    "UpdateKnownRequest",
    "LemmaPartUpdate",
    "UpdateLemmaPartsRequest",
    "UpdateResponse",
    "VocabEntry",
    "VocabListResponse",
]
