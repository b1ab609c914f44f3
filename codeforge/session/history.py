"""
Bounded log of finished runs.

Entries are immutable, newest first, and held in a fixed-capacity deque
so that recording a run never grows storage past the cap: once the log is
full the oldest entry falls off the end.

Each entry is labelled by a separate summarizer call. That call is best
effort: on failure or timeout the entry is labelled "Untitled", and
nothing about it is reported back to the run that produced the entry.
"""

import asyncio
import logging
import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterator

from codeforge import config
from codeforge.session.state import Run

logger = logging.getLogger("codeforge")

FALLBACK_LABEL = "Untitled"

Summarizer = Callable[[str, str], Awaitable[str]]


@dataclass(frozen=True)
class HistoryEntry:
    entry_id: str
    source_code: str
    language_id: str
    label: str
    status: str
    recorded_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entry_id,
            "label": self.label,
            "code": self.source_code,
            "language": self.language_id,
            "status": self.status,
            "recordedAt": self.recorded_at,
        }


class HistoryLog:
    def __init__(self, capacity: int | None = None, summary_timeout: float | None = None):
        self.capacity = capacity or config.history_limit()
        self.summary_timeout = summary_timeout if summary_timeout is not None else config.summary_timeout()
        self._entries: deque[HistoryEntry] = deque(maxlen=self.capacity)
        self._pending: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def entries(self, limit: int | None = None) -> list[HistoryEntry]:
        """Entries newest first, optionally truncated to `limit`."""
        items = list(self._entries)
        return items[:limit] if limit is not None else items

    def add(self, entry: HistoryEntry) -> None:
        self._entries.appendleft(entry)

    async def record(self, run: Run, summarizer: Summarizer) -> HistoryEntry | None:
        """Label `run` and insert it. Never raises; returns None if nothing was recorded."""
        try:
            label = await self._label(run, summarizer)
            entry = HistoryEntry(
                entry_id=uuid.uuid4().hex,
                source_code=run.source_code,
                language_id=run.language_id,
                label=label,
                status=run.status.value,
                recorded_at=datetime.now(timezone.utc).isoformat(),
            )
            self.add(entry)
            logger.info("History: recorded %r (%d entries)", label, len(self._entries))
            return entry
        except Exception as e:
            logger.warning("History: failed to record run %s: %s", run.run_id, e)
            return None

    def schedule(self, run: Run, summarizer: Summarizer) -> asyncio.Task | None:
        """Record `run` in the background without blocking the caller.

        Needs a running event loop; without one the run is not recorded.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("History: no running event loop, run %s not recorded", run.run_id)
            return None
        task = loop.create_task(self.record(run, summarizer))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for background recordings to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def restore(self, entry_id: str) -> dict[str, str]:
        """Return the code and language of an entry, ready for a fresh run.

        Raises KeyError for an unknown id.
        """
        for entry in self._entries:
            if entry.entry_id == entry_id:
                return {"source_code": entry.source_code, "language_id": entry.language_id}
        raise KeyError(entry_id)

    def clear(self) -> None:
        self._entries.clear()

    async def _label(self, run: Run, summarizer: Summarizer) -> str:
        if not run.source_code.strip():
            return FALLBACK_LABEL
        try:
            label = await asyncio.wait_for(
                summarizer(run.source_code, run.language_id),
                timeout=self.summary_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("History: summarizer timed out after %ss", self.summary_timeout)
            return FALLBACK_LABEL
        except Exception as e:
            logger.warning("History: summarizer failed: %s", e)
            return FALLBACK_LABEL
        if not isinstance(label, str) or not label.strip():
            return FALLBACK_LABEL
        return label.strip()
