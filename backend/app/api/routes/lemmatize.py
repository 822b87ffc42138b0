from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Request

from app.api.routes.common import lemmatize_or_raise, require_db_ready
from app.api.schemas.v1.lemmatize import CheckResponse, LemmatizeRequest, LemmatizeResponse
from app.services.use_cases import VocabularyUseCase

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/lemmatize", response_model=LemmatizeResponse)
async def lemmatize(payload: LemmatizeRequest, request: Request) -> LemmatizeResponse:
    require_db_ready(request)
    result = await lemmatize_or_raise(request, payload.text)

    try:
        return VocabularyUseCase(request.app.state.settings.db_path).record_lemmatized(result)
    except sqlite3.OperationalError as exc:
        logger.exception("lemmatize_db_operational_error")
        raise HTTPException(
            status_code=503,
            detail=f"Database unavailable: {exc}",
        ) from exc


@router.post("/check", response_model=CheckResponse)
async def check(payload: LemmatizeRequest, request: Request) -> CheckResponse:
    require_db_ready(request)
    result = await lemmatize_or_raise(request, payload.text)

    try:
        return VocabularyUseCase(request.app.state.settings.db_path).check(result)
    except sqlite3.OperationalError as exc:
        logger.exception("check_db_operational_error")
        raise HTTPException(
            status_code=503,
            detail=f"Database unavailable: {exc}",
        ) from exc
