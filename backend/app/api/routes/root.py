from fastapi import APIRouter, Request

router = APIRouter()

UNHEALTHY_ANALYZER_STATES = {"failed", "exited"}


@router.get("/")
def api_root() -> dict[str, str]:
    return {"status": "ok", "message": "mufradat vocabulary backend"}


@router.get("/health")
def health(request: Request) -> dict[str, object]:
    db_ready = bool(getattr(request.app.state, "db_ready", False))
    analyzer_ready = bool(getattr(request.app.state, "analyzer_ready", False))

    lemmatizer = getattr(request.app.state, "lemmatizer", None)
    analyzer_metadata = lemmatizer.metadata() if lemmatizer is not None else None
    if analyzer_metadata and analyzer_metadata.get("state") in UNHEALTHY_ANALYZER_STATES:
        # The process is never respawned; a restart of the service is required.
        analyzer_ready = False

    status = "ok" if db_ready and analyzer_ready else "degraded"
    payload: dict[str, object] = {
        "status": status,
        "service": "backend",
        "components": {
            "database": "ok" if db_ready else "degraded",
            "analyzer": "ok" if analyzer_ready else "degraded",
        },
    }
    if analyzer_metadata is not None:
        payload["analyzer"] = analyzer_metadata

    db_error = getattr(request.app.state, "db_error", None)
    analyzer_error = getattr(request.app.state, "analyzer_error", None)
    if db_error:
        payload["db_error"] = str(db_error)
    if analyzer_error:
        payload["analyzer_error"] = str(analyzer_error)

    return payload
