from __future__ import annotations

import asyncio
import logging

from app.nlp.errors import ProcessTerminatedEarly, ProcessUnresponsive
from app.nlp.supervisor import READY_MARKER, AnalyzerHandle, read_line


logger = logging.getLogger(__name__)


async def send_line(writer: asyncio.StreamWriter, text: str) -> None:
    logger.info("analyzer_request_sent", extra={"text": text})
    try:
        writer.write(f"{text}\n".encode("utf-8"))
        # The analyzer reads line-buffered and will not answer until flushed.
        await writer.drain()
    except (BrokenPipeError, ConnectionResetError) as exc:
        raise ProcessTerminatedEarly("Analyzer process closed its input stream") from exc


async def read_response(reader: asyncio.StreamReader, ready_marker: str = READY_MARKER) -> str:
    while True:
        line = await read_line(reader)
        if not line:
            raise ProcessTerminatedEarly("Analyzer process exited before answering")

        text = line.decode("utf-8", errors="replace").strip()
        logger.info("analyzer_response_line", extra={"line": text})
        if text and text != ready_marker:
            return text


async def exchange(
    handle: AnalyzerHandle,
    text: str,
    ready_marker: str = READY_MARKER,
    timeout: float | None = None,
) -> str:
    """Send one request line and return the analyzer's one response line.

    Callers must hold the admission token; the protocol has no request ids.
    """
    await send_line(handle.stdin, text)
    try:
        return await asyncio.wait_for(
            read_response(handle.stdout, ready_marker),
            timeout=timeout or None,
        )
    except TimeoutError as exc:
        raise ProcessUnresponsive(f"Analyzer did not answer within {timeout:g}s") from exc
