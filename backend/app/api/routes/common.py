from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from app.nlp.adapter import LemmatizeResult, Lemmatizer
from app.nlp.errors import AnalyzerError, ProcessUnresponsive

logger = logging.getLogger(__name__)


def require_db_ready(request: Request) -> None:
    if not bool(getattr(request.app.state, "db_ready", False)):
        raise HTTPException(
            status_code=503,
            detail="Database unavailable. Check backend logs and DB path configuration.",
        )


def require_lemmatizer(request: Request) -> Lemmatizer:
    lemmatizer = getattr(request.app.state, "lemmatizer", None)
    if not bool(getattr(request.app.state, "analyzer_ready", False)) or lemmatizer is None:
        raise HTTPException(
            status_code=503,
            detail="Analyzer unavailable. Check backend logs and analyzer artifact configuration.",
        )
    return lemmatizer


async def lemmatize_or_raise(request: Request, text: str) -> LemmatizeResult:
    lemmatizer = require_lemmatizer(request)
    try:
        return await lemmatizer.lemmatize(text)
    except ProcessUnresponsive as exc:
        logger.exception("analyzer_unresponsive")
        raise HTTPException(status_code=504, detail=f"Analyzer unresponsive: {exc}") from exc
    except AnalyzerError as exc:
        logger.exception("analyzer_request_failed")
        raise HTTPException(status_code=503, detail=f"Analyzer unavailable: {exc}") from exc
