from app.api.schemas.v1.lemmatize import (
    CheckResponse,
    LemmaPartStatus,
    LemmatizeRequest,
    LemmatizeResponse,
    WordLemma,
    WordLemmaStatus,
)
from app.api.schemas.v1.vocab import (
    LemmaPartUpdate,
    UpdateKnownRequest,
    UpdateLemmaPartsRequest,
    UpdateResponse,
    VocabEntry,
    VocabListResponse,
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
