from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from app.core.config import Settings
from app.nlp.adapter import LemmatizeResult, Lemmatizer
from app.nlp.alignment import build_alignment
from app.nlp.errors import InvalidConfiguration, ProcessUnresponsive, ProtocolViolation
from app.nlp.protocol import exchange
from app.nlp.serializer import RequestSerializer
from app.nlp.supervisor import READY_MARKER, ProcessSupervisor
from app.nlp.token_filter import filter_text


logger = logging.getLogger(__name__)


class SubprocessLemmatizer(Lemmatizer):
    def __init__(
        self,
        supervisor: ProcessSupervisor,
        keep_digits: bool = False,
        read_timeout: float | None = None,
    ):
        self.supervisor = supervisor
        self.keep_digits = keep_digits
        self.read_timeout = read_timeout or None
        self._serializer = RequestSerializer(supervisor)

    async def ensure_ready(self) -> None:
        await self.supervisor.ensure_ready()

    async def lemmatize(self, text: str) -> LemmatizeResult:
        filtered_text = filter_text(text, keep_digits=self.keep_digits)
        if not filtered_text.strip():
            # An empty line gets no answer from the analyzer.
            return LemmatizeResult(normalized_text="")

        async def _exchange(handle) -> str:
            try:
                return await exchange(
                    handle,
                    filtered_text,
                    ready_marker=self.supervisor.ready_marker,
                    timeout=self.read_timeout,
                )
            except (ProcessUnresponsive, ProtocolViolation, asyncio.CancelledError):
                # A late or partly read answer would be paired with the next request.
                await self.supervisor.kill()
                raise

        response_line = await self._serializer.with_exclusive_access(_exchange)
        return build_alignment(filtered_text, response_line)

    async def aclose(self) -> None:
        await self.supervisor.aclose()

    def metadata(self) -> dict[str, object]:
        return {
            "adapter": self.__class__.__name__,
            "keep_digits": self.keep_digits,
            "read_timeout_seconds": self.read_timeout,
            "busy": self._serializer.busy,
            **self.supervisor.metadata(),
        }


def resolve_artifact_path(raw_path: str) -> Path:
    if not raw_path.strip():
        raise InvalidConfiguration("Analyzer artifact path is not configured")
    try:
        resolved = Path(raw_path).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise InvalidConfiguration(f"Failed to find analyzer artifact at {raw_path}: {exc}") from exc
    if not resolved.is_file():
        raise InvalidConfiguration(f"Analyzer artifact at {resolved} is not a file")
    return resolved


def build_analyzer_command(settings: Settings) -> list[str]:
    artifact = resolve_artifact_path(settings.analyzer_artifact)
    return [
        settings.analyzer_interpreter,
        *settings.analyzer_launcher_args,
        str(artifact),
        *settings.analyzer_extra_args,
    ]


def load_subprocess_lemmatizer(settings: Settings) -> SubprocessLemmatizer:
    command = build_analyzer_command(settings)
    logger.info("analyzer_configured", extra={"command": command})
    supervisor = ProcessSupervisor(
        command,
        ready_marker=settings.analyzer_ready_marker or READY_MARKER,
        startup_timeout=settings.analyzer_startup_timeout_seconds,
        stream_limit=settings.analyzer_stream_limit_bytes,
    )
    return SubprocessLemmatizer(
        supervisor,
        keep_digits=settings.analyzer_keep_digits,
        read_timeout=settings.analyzer_read_timeout_seconds,
    )
