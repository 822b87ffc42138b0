from __future__ import annotations

from fastapi.testclient import TestClient

from app.main import create_app
from stubs import make_settings


def test_lemmatize_through_spawned_analyzer(tmp_path) -> None:
    request_log = tmp_path / "requests.log"
    settings = make_settings(
        tmp_path / "vocabulary.sqlite3",
        "--request-log", str(request_log),
    )

    app = create_app(settings)
    with TestClient(app) as client:
        before = client.get("/health").json()
        response = client.post("/lemmatize", json={"text": "كتبها, cats running!"})
        after = client.get("/health").json()

    assert before["analyzer"]["state"] == "not_started"
    assert response.status_code == 200
    assert response.json() == {
        "lemmatized_text": "ktb+ha cat run",
        "words": [
            {"word": "كتبها", "lemma": "ktb+ha", "lemma_parts": ["ktb", "ha"]},
            {"word": "cats", "lemma": "cat", "lemma_parts": ["cat"]},
            {"word": "running", "lemma": "run", "lemma_parts": ["run"]},
        ],
    }
    assert after["analyzer"]["state"] == "ready"
    assert request_log.read_text(encoding="utf-8").splitlines() == ["كتبها cats running"]


def test_eager_start_brings_analyzer_up_during_startup(tmp_path) -> None:
    spawn_log = tmp_path / "spawns.log"
    settings = make_settings(
        tmp_path / "vocabulary.sqlite3",
        "--spawn-log", str(spawn_log),
        analyzer_eager_start=True,
    )

    app = create_app(settings)
    with TestClient(app) as client:
        health = client.get("/health").json()
        client.post("/check", json={"text": "cats"})

    assert health["status"] == "ok"
    assert health["analyzer"]["state"] == "ready"
    assert len(spawn_log.read_text(encoding="utf-8").splitlines()) == 1


def test_eager_start_failure_marks_analyzer_degraded(tmp_path) -> None:
    settings = make_settings(
        tmp_path / "vocabulary.sqlite3",
        "--mode", "exit-before-ready",
        analyzer_eager_start=True,
    )

    app = create_app(settings)
    with TestClient(app) as client:
        health = client.get("/health").json()
        response = client.post("/lemmatize", json={"text": "cats"})

    assert health["components"]["analyzer"] == "degraded"
    assert "exited before it reported readiness" in health["analyzer_error"]
    assert response.status_code == 503


def test_dead_analyzer_fails_requests_without_respawn(tmp_path) -> None:
    spawn_log = tmp_path / "spawns.log"
    settings = make_settings(
        tmp_path / "vocabulary.sqlite3",
        "--mode", "close-on-request",
        "--spawn-log", str(spawn_log),
    )

    app = create_app(settings)
    with TestClient(app) as client:
        first = client.post("/lemmatize", json={"text": "cats"})
        second = client.post("/lemmatize", json={"text": "dogs"})
        health = client.get("/health").json()

    assert first.status_code == 503
    assert second.status_code == 503
    assert health["components"]["analyzer"] == "degraded"
    assert len(spawn_log.read_text(encoding="utf-8").splitlines()) == 1


def test_unresponsive_analyzer_maps_to_gateway_timeout(tmp_path) -> None:
    settings = make_settings(
        tmp_path / "vocabulary.sqlite3",
        "--mode", "hang",
        analyzer_read_timeout_seconds=0.5,
    )

    app = create_app(settings)
    with TestClient(app) as client:
        response = client.post("/lemmatize", json={"text": "cats"})

    assert response.status_code == 504
    assert "Analyzer unresponsive" in response.json()["detail"]
