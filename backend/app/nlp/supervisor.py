from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from app.nlp.errors import (
    LaunchFailure,
    ProcessTerminatedEarly,
    ProcessUnresponsive,
    ProtocolViolation,
)


logger = logging.getLogger(__name__)

READY_MARKER = "System ready!"


class AnalyzerState(str, Enum):
    STARTING = "starting"
    READY = "ready"


@dataclass
class AnalyzerHandle:
    process: asyncio.subprocess.Process
    stdin: asyncio.StreamWriter
    stdout: asyncio.StreamReader
    stderr: asyncio.StreamReader

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def alive(self) -> bool:
        return self.process.returncode is None


def _decode(line: bytes) -> str:
    return line.decode("utf-8", errors="replace").strip()


async def read_line(reader: asyncio.StreamReader) -> bytes:
    """Read one line, reporting lines over the stream limit as ``ProtocolViolation``."""
    try:
        return await reader.readline()
    except ValueError as exc:
        raise ProtocolViolation(f"Analyzer wrote a line longer than the stream limit: {exc}") from exc


class ProcessSupervisor:
    """Owns the single analyzer process for the lifetime of the service.

    The process is spawned at most once. Concurrent ``ensure_ready`` callers
    all await the same startup task, so they see the same handle or the same
    startup error. A process that dies later is never respawned.
    """

    def __init__(
        self,
        command: Sequence[str],
        ready_marker: str = READY_MARKER,
        startup_timeout: float | None = None,
        stream_limit: int = 1024 * 1024,
    ):
        if not command:
            raise ValueError("analyzer command must not be empty")
        self.command = tuple(command)
        self.ready_marker = ready_marker
        self._startup_timeout = startup_timeout or None
        self._stream_limit = stream_limit
        self._startup: asyncio.Future[AnalyzerHandle] | None = None
        self._stderr_drain: asyncio.Task[None] | None = None
        self._handle: AnalyzerHandle | None = None
        self.state: AnalyzerState | None = None

    @property
    def started(self) -> bool:
        return self._startup is not None

    async def ensure_ready(self) -> AnalyzerHandle:
        # No await between the check and the assignment: the first caller
        # creates the task, everyone else joins it.
        if self._startup is None:
            self._startup = asyncio.ensure_future(self._start())
        # A cancelled caller must not cancel the startup others are waiting on.
        return await asyncio.shield(self._startup)

    async def _start(self) -> AnalyzerHandle:
        logger.info("analyzer_starting", extra={"command": list(self.command)})
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=self._stream_limit,
            )
        except OSError as exc:
            logger.error(
                "analyzer_launch_failed",
                extra={"command": list(self.command), "error": str(exc)},
            )
            raise LaunchFailure(
                f"Failed to start analyzer process '{self.command[0]}': {exc.strerror or exc}"
            ) from exc

        self.state = AnalyzerState.STARTING
        handle = AnalyzerHandle(
            process=process,
            stdin=process.stdin,
            stdout=process.stdout,
            stderr=process.stderr,
        )
        self._handle = handle

        try:
            await asyncio.wait_for(
                self._wait_for_ready_marker(handle.stderr),
                timeout=self._startup_timeout,
            )
        except TimeoutError as exc:
            await self._kill(handle)
            raise ProcessUnresponsive(
                f"Analyzer did not report '{self.ready_marker}' within "
                f"{self._startup_timeout:g}s"
            ) from exc
        except (ProcessTerminatedEarly, ProtocolViolation):
            await self._kill(handle)
            raise

        self.state = AnalyzerState.READY
        self._stderr_drain = asyncio.ensure_future(self._drain_stderr(handle.stderr))
        logger.info("analyzer_ready", extra={"pid": handle.pid})
        return handle

    async def _wait_for_ready_marker(self, stderr: asyncio.StreamReader) -> None:
        while True:
            line = await read_line(stderr)
            if not line:
                raise ProcessTerminatedEarly(
                    "Analyzer process exited before it reported readiness"
                )
            text = _decode(line)
            logger.info("analyzer_stderr", extra={"line": text})
            if self.ready_marker in text:
                return

    async def _drain_stderr(self, stderr: asyncio.StreamReader) -> None:
        while True:
            try:
                line = await read_line(stderr)
            except ProtocolViolation as exc:
                logger.warning("analyzer_stderr_line_dropped", extra={"error": str(exc)})
                continue
            if not line:
                logger.info("analyzer_stderr_closed")
                return
            logger.debug("analyzer_stderr", extra={"line": _decode(line)})

    async def kill(self) -> None:
        """Stop the process without allowing a respawn."""
        if self._handle is not None:
            await self._kill(self._handle)

    async def _kill(self, handle: AnalyzerHandle) -> None:
        if handle.alive:
            logger.warning("analyzer_killed", extra={"pid": handle.pid})
            try:
                handle.process.kill()
            except ProcessLookupError:
                pass
        await handle.process.wait()

    async def aclose(self) -> None:
        if self._startup is not None and not self._startup.done():
            self._startup.cancel()
        handle = self._handle
        if handle is None:
            return
        if handle.alive:
            handle.stdin.close()
            try:
                await asyncio.wait_for(handle.process.wait(), timeout=5)
            except TimeoutError:
                await self._kill(handle)
        if self._stderr_drain is not None:
            await self._stderr_drain
        logger.info(
            "analyzer_stopped",
            extra={"pid": handle.pid, "returncode": handle.process.returncode},
        )

    def status(self) -> str:
        startup = self._startup
        if startup is None:
            return "not_started"
        if startup.done() and (startup.cancelled() or startup.exception() is not None):
            return "failed"
        if self._handle is not None and not self._handle.alive:
            return "exited"
        return self.state.value if self.state else AnalyzerState.STARTING.value

    def metadata(self) -> dict[str, object]:
        handle = self._handle
        return {
            "command": list(self.command),
            "state": self.status(),
            "pid": handle.pid if handle else None,
        }
