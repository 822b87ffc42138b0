from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Request

from app.api.routes.common import lemmatize_or_raise, require_db_ready
from app.api.schemas.v1.vocab import (
    UpdateKnownRequest,
    UpdateLemmaPartsRequest,
    UpdateResponse,
    VocabListResponse,
)
from app.services.use_cases import VocabularyUseCase

router = APIRouter()
logger = logging.getLogger(__name__)


def _vocabulary_use_case(request: Request) -> VocabularyUseCase:
    return VocabularyUseCase(request.app.state.settings.db_path)


@router.put("/update-known", response_model=UpdateResponse)
async def update_known(payload: UpdateKnownRequest, request: Request) -> UpdateResponse:
    require_db_ready(request)
    result = await lemmatize_or_raise(request, payload.text)

    try:
        return _vocabulary_use_case(request).update_known(result, payload.unknown_words)
    except sqlite3.OperationalError as exc:
        logger.exception("vocab_db_operational_error")
        raise HTTPException(status_code=503, detail=f"Database unavailable: {exc}") from exc


@router.put("/update-parts", response_model=UpdateResponse)
def update_parts(payload: UpdateLemmaPartsRequest, request: Request) -> UpdateResponse:
    require_db_ready(request)

    try:
        return _vocabulary_use_case(request).update_parts(payload.parts)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except sqlite3.OperationalError as exc:
        logger.exception("vocab_db_operational_error")
        raise HTTPException(status_code=503, detail=f"Database unavailable: {exc}") from exc


def _list_vocab(request: Request, is_known: bool | None, after: str | None) -> VocabListResponse:
    require_db_ready(request)

    try:
        return _vocabulary_use_case(request).list_entries(is_known=is_known, after=after)
    except sqlite3.OperationalError as exc:
        logger.exception("vocab_db_operational_error")
        raise HTTPException(status_code=503, detail=f"Database unavailable: {exc}") from exc


@router.get("/vocab", response_model=VocabListResponse)
def get_vocab(request: Request, after: str | None = None) -> VocabListResponse:
    return _list_vocab(request, is_known=None, after=after)


@router.get("/vocab/known", response_model=VocabListResponse)
def get_known_vocab(request: Request, after: str | None = None) -> VocabListResponse:
    return _list_vocab(request, is_known=True, after=after)


@router.get("/vocab/unknown", response_model=VocabListResponse)
def get_unknown_vocab(request: Request, after: str | None = None) -> VocabListResponse:
    return _list_vocab(request, is_known=False, after=after)
