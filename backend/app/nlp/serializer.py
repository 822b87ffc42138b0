from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from app.nlp.supervisor import AnalyzerHandle, ProcessSupervisor


T = TypeVar("T")


class RequestSerializer:
    """Admits one exchange at a time against the supervised process.

    ``asyncio.Lock`` wakes waiters in FIFO order, so no caller starves.
    """

    def __init__(self, supervisor: ProcessSupervisor):
        self._supervisor = supervisor
        self._admission = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._admission.locked()

    async def with_exclusive_access(self, fn: Callable[[AnalyzerHandle], Awaitable[T]]) -> T:
        async with self._admission:
            handle = await self._supervisor.ensure_ready()
            return await fn(handle)
