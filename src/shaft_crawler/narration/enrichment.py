"""EnrichmentQueue -- background narration jobs keyed by entity id.

Narration calls run on a worker pool so a slow API never stalls the tick
loop.  Their results are *not* written from the worker threads: the
session calls :meth:`EnrichmentQueue.poll` on its own thread (before every
tick and action), and only then are completed results applied.  All game
state mutation therefore stays single-threaded.

At most one job is in flight per key.  :meth:`discard` drops a job; if it
is already running, its result is thrown away when it arrives.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    """Internal record for one submitted job."""

    key: str
    future: Future
    on_result: Callable[[Any], None]
    on_abandon: Callable[[], None] | None = None


class EnrichmentQueue:
    """Cancellable, keyed background jobs whose results are applied on poll.

    Parameters
    ----------
    executor:
        Executor to run jobs on.  Defaults to a private thread pool.
    max_workers:
        Size of the private thread pool.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        max_workers: int = 2,
    ) -> None:
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="narration",
        )
        self._jobs: dict[str, _Job] = {}

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(
        self,
        key: str,
        fn: Callable[..., Any],
        *args: Any,
        on_result: Callable[[Any], None],
        on_abandon: Callable[[], None] | None = None,
    ) -> bool:
        """Start ``fn(*args)`` in the background under *key*.

        *on_result* receives a non-empty result during a later
        :meth:`poll`.  *on_abandon* runs instead when the job fails,
        returns nothing, or is discarded.  Returns ``False`` without
        submitting if a job for *key* is already pending.
        """
        if key in self._jobs:
            return False
        future = self._executor.submit(fn, *args)
        self._jobs[key] = _Job(
            key=key, future=future, on_result=on_result, on_abandon=on_abandon,
        )
        return True

    def is_pending(self, key: str) -> bool:
        return key in self._jobs

    @property
    def pending_keys(self) -> list[str]:
        return list(self._jobs)

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def discard(self, key: str) -> bool:
        """Drop the job for *key*; its result will be ignored on arrival."""
        job = self._jobs.pop(key, None)
        if job is None:
            return False
        job.future.cancel()
        if job.on_abandon is not None:
            job.on_abandon()
        logger.debug("Discarded narration job %s", key)
        return True

    def discard_all(self) -> None:
        for key in list(self._jobs):
            self.discard(key)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def poll(self) -> int:
        """Apply every finished job.  Returns how many results were applied."""
        applied = 0
        for key, job in list(self._jobs.items()):
            if not job.future.done():
                continue
            del self._jobs[key]

            if job.future.cancelled():
                continue

            exc = job.future.exception()
            if exc is not None:
                logger.warning("Narration job %s failed: %s", key, exc)
                if job.on_abandon is not None:
                    job.on_abandon()
                continue

            result = job.future.result()
            if not result:
                logger.warning("Narration job %s returned nothing", key)
                if job.on_abandon is not None:
                    job.on_abandon()
                continue

            job.on_result(result)
            applied += 1
        return applied

    def wait(self, timeout: float | None = None) -> None:
        """Block until every pending job has finished (or *timeout*)."""
        futures = [job.future for job in self._jobs.values()]
        if futures:
            wait(futures, timeout=timeout)

    def shutdown(self) -> None:
        """Drop all jobs and stop the private pool, if any."""
        self.discard_all()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
