"""Background writer for best-effort debug dumps (AST and HTML).

Writes are scheduled as asyncio tasks and never awaited by the article
loop.  :meth:`DumpWriter.join` is the single barrier at the end of a run;
it collects failures instead of raising.

INVARIANT: A failed dump never aborts collection.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from kleinboy.infrastructure.filesystem import write_text_async

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DumpFailure:
    path: Path
    error: str


class DumpWriter:
    """Track fire-and-forget file writes so they can be joined at exit."""

    def __init__(self) -> None:
        self._tasks: dict[asyncio.Task[None], Path] = {}
        self._failures: list[DumpFailure] = []

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    def schedule(self, path: Path, text: str) -> None:
        """Start writing *text* to *path* in the background.

        Must be called from inside a running event loop.
        """
        task = asyncio.create_task(write_text_async(path, text))
        self._tasks[task] = path

    def record_failure(self, path: Path, error: str) -> None:
        """Note a dump for *path* that failed before it could be scheduled."""
        logger.warning("Debug dump failed for %s: %s", path, error)
        self._failures.append(DumpFailure(path=path, error=error))

    async def join(self) -> list[DumpFailure]:
        """Wait for every scheduled write; return the ones that failed."""
        failures = list(self._failures)
        self._failures.clear()
        if not self._tasks:
            return failures
        tasks = list(self._tasks)
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for task, outcome in zip(tasks, results, strict=True):
            if isinstance(outcome, BaseException):
                path = self._tasks[task]
                logger.warning("Debug dump failed for %s: %s", path, outcome)
                failures.append(DumpFailure(path=path, error=str(outcome)))
        self._tasks.clear()
        return failures
