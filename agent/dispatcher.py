from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Set

from agent.core.records import MilestonePayload, Record, TransactionPayload


logger = logging.getLogger("pockit.dispatcher")

Recorder = Callable[[Dict[str, Any]], Any]


class Dispatcher:
    """Hands a classified record to the matching recorder.

    Recorders may be plain functions or coroutine functions. They are
    fire-and-forget: coroutine recorders run as background tasks, and a
    failing recorder is logged while the chat turn goes on.
    """

    def __init__(self, record_milestone: Recorder, record_transaction: Recorder) -> None:
        self.record_milestone = record_milestone
        self.record_transaction = record_transaction
        self._pending: Set[asyncio.Future] = set()

    async def dispatch(self, record: Optional[Record]) -> Optional[str]:
        if record is None:
            return None
        if isinstance(record, MilestonePayload):
            recorder = self.record_milestone
        elif isinstance(record, TransactionPayload):
            recorder = self.record_transaction
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

        payload = record.to_payload()
        try:
            result = recorder(payload)
        except Exception:
            logger.exception("Recording %s failed: %s", record.kind, payload)
            return record.kind

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._pending.add(task)
            task.add_done_callback(
                lambda done, kind=record.kind: self._finished(done, kind, payload)
            )
        else:
            logger.info("Recorded %s: %s", record.kind, payload)
        return record.kind

    def _finished(self, task: asyncio.Future, kind: str, payload: Dict[str, Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Recording %s was cancelled: %s", kind, payload)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Recording %s failed: %s", kind, payload, exc_info=exc)
        else:
            logger.info("Recorded %s: %s", kind, payload)

    async def drain(self) -> None:
        """Wait for recorders still running in the background."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
