"""Trailing debounce of progress writes, one timer per key."""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from functools import partial

import structlog

logger = structlog.get_logger(__name__)


class ProgressSyncDebouncer[K: Hashable, V]:
    """Coalesces rapid writes for the same key into one delayed write.

    Each `schedule` call cancels the pending timer for its key and starts a
    new one, so only the last value supplied within the quiet period is
    written. Writes for one key run one after another in firing order, so a
    slow earlier write can never land after a later one. Keys are
    independent of each other. A failing write is logged and dropped; the
    caller's in-memory state is unaffected.

    Must be used from within a running event loop.
    """

    def __init__(self, write: Callable[[K, V], Awaitable[None]], delay: float = 1.0) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self._write = write
        self._delay = delay
        self._handles: dict[K, asyncio.TimerHandle] = {}
        self._values: dict[K, V] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._last_task: dict[K, asyncio.Task[None]] = {}

    @property
    def delay(self) -> float:
        return self._delay

    def schedule(self, key: K, value: V) -> None:
        """Replace any pending write for `key` with a write of `value` after the delay."""
        loop = asyncio.get_running_loop()
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()
        self._values[key] = value
        self._handles[key] = loop.call_later(self._delay, self._fire, key)

    def pending_keys(self) -> list[K]:
        return list(self._handles)

    def in_flight_keys(self) -> list[K]:
        return list(self._last_task)

    def cancel_all(self) -> None:
        """Drop every pending write without running it."""
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._values.clear()

    async def flush(self) -> None:
        """Run all pending writes now and wait for in-flight ones to finish."""
        for key in list(self._handles):
            self._handles.pop(key).cancel()
            self._start(key, self._values.pop(key))
        await self.wait_idle()

    async def wait_idle(self) -> None:
        """Wait until writes already started have completed."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def _fire(self, key: K) -> None:
        self._handles.pop(key, None)
        self._start(key, self._values.pop(key))

    def _start(self, key: K, value: V) -> None:
        previous = self._last_task.get(key)
        task = asyncio.get_running_loop().create_task(self._write_after(previous, key, value))
        self._last_task[key] = task
        self._tasks.add(task)
        task.add_done_callback(partial(self._task_done, key))

    def _task_done(self, key: K, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if self._last_task.get(key) is task:
            del self._last_task[key]

    async def _write_after(self, previous: asyncio.Task[None] | None, key: K, value: V) -> None:
        if previous is not None:
            await asyncio.wait([previous])
        await self._write_safely(key, value)

    async def _write_safely(self, key: K, value: V) -> None:
        try:
            await self._write(key, value)
        except Exception:
            logger.exception("progress_sync_failed", key=key)
        else:
            logger.debug("progress_synced", key=key)
