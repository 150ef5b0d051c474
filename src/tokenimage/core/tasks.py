"""Detached background tasks whose failures are only logged."""

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

log = structlog.get_logger(__name__)

# Strong references so pending tasks are not garbage collected
_background_tasks: set[asyncio.Task[Any]] = set()


def _log_task_done(task: asyncio.Task[Any]) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        log.debug("background_task_cancelled", task=task.get_name())
        return
    exc = task.exception()
    if exc is not None:
        log.warning("background_task_failed", task=task.get_name(), error=str(exc))


def spawn_background(coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
    """Schedule a coroutine without awaiting it.

    The caller never joins the task. An exception raised by the coroutine
    is logged as a warning and otherwise dropped.

    Args:
        coro: Coroutine to run.
        name: Task name used in log events.

    Returns:
        The scheduled task (for tests that need to await it).
    """
    task = asyncio.get_running_loop().create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_log_task_done)
    return task


async def drain_background_tasks() -> None:
    """Wait for every pending background task to finish.

    Used on shutdown so in-flight cache writes are not cut off.
    """
    loop = asyncio.get_running_loop()
    pending = [task for task in _background_tasks if task.get_loop() is loop]
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
