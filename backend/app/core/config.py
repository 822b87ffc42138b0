from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os


BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"
DEFAULT_CORS_ORIGINS = ("http://127.0.0.1:3000", "http://localhost:3000")
DEFAULT_ANALYZER_ARTIFACT = "dist/farasaSeg.jar"
DEFAULT_READY_MARKER = "System ready!"
FALSE_VALUES = {"0", "false", "no"}


@dataclass(frozen=True)
class Settings:
    environment: str
    app_name: str
    host: str
    port: int
    db_path: Path
    analyzer_artifact: str = DEFAULT_ANALYZER_ARTIFACT
    analyzer_interpreter: str = "java"
    analyzer_launcher_args: tuple[str, ...] = ("-jar",)
    analyzer_extra_args: tuple[str, ...] = ()
    analyzer_ready_marker: str = DEFAULT_READY_MARKER
    # 0 disables the timeout.
    analyzer_read_timeout_seconds: float = 30.0
    analyzer_startup_timeout_seconds: float = 300.0
    analyzer_eager_start: bool = False
    analyzer_keep_digits: bool = False
    analyzer_stream_limit_bytes: int = 1024 * 1024
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in FALSE_VALUES


def _env_args(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item for item in raw.replace(",", " ").split() if item)


def load_settings() -> Settings:
    db_path = Path(os.getenv("MUFRADAT_DB_PATH", DATA_DIR / "vocabulary.sqlite3"))
    raw_cors_origins = os.getenv("MUFRADAT_CORS_ORIGINS", "")
    parsed_cors_origins = tuple(
        origin.strip()
        for origin in raw_cors_origins.split(",")
        if origin.strip()
    )
    return Settings(
        environment=os.getenv("MUFRADAT_ENV", "development"),
        app_name=os.getenv("MUFRADAT_APP_NAME", "mufradat-backend"),
        host=os.getenv("MUFRADAT_HOST", "127.0.0.1"),
        port=int(os.getenv("MUFRADAT_PORT") or os.getenv("PORT") or "8000"),
        db_path=db_path,
        analyzer_artifact=os.getenv("MUFRADAT_ANALYZER_ARTIFACT")
        or os.getenv("FARASA_JAR_PATH")
        or DEFAULT_ANALYZER_ARTIFACT,
        analyzer_interpreter=os.getenv("MUFRADAT_ANALYZER_INTERPRETER", "java"),
        analyzer_launcher_args=_env_args("MUFRADAT_ANALYZER_LAUNCHER_ARGS", ("-jar",)),
        analyzer_extra_args=_env_args("MUFRADAT_ANALYZER_EXTRA_ARGS", ()),
        analyzer_ready_marker=os.getenv("MUFRADAT_ANALYZER_READY_MARKER", DEFAULT_READY_MARKER),
        analyzer_read_timeout_seconds=float(
            os.getenv("MUFRADAT_ANALYZER_READ_TIMEOUT_SECONDS", "30")
        ),
        analyzer_startup_timeout_seconds=float(
            os.getenv("MUFRADAT_ANALYZER_STARTUP_TIMEOUT_SECONDS", "300")
        ),
        analyzer_eager_start=_env_flag("MUFRADAT_ANALYZER_EAGER_START", "0"),
        analyzer_keep_digits=_env_flag("MUFRADAT_ANALYZER_KEEP_DIGITS", "0"),
        analyzer_stream_limit_bytes=int(
            os.getenv("MUFRADAT_ANALYZER_STREAM_LIMIT_BYTES", str(1024 * 1024))
        ),
        cors_origins=parsed_cors_origins or DEFAULT_CORS_ORIGINS,
        log_level=os.getenv("MUFRADAT_LOG_LEVEL", "INFO").upper(),
    )
