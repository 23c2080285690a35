"""
gradebook/services/upstream.py
Guarded calls into collaborators.

Every store/catalog/provider call goes through call_upstream so that:
- each call gets its own timeout
- timeouts and collaborator exceptions become UpstreamUnavailableError
  with collaborator/operation/course context (never a silent zero)

gather_fail_fast runs independent per-course work concurrently and cancels
the siblings as soon as one of them fails.
"""
import asyncio
import logging
from typing import Any, Awaitable, Iterable, List, Optional

from gradebook.exceptions import GradebookException, UpstreamUnavailableError

logger = logging.getLogger(__name__)


async def call_upstream(
    collaborator: str,
    operation: str,
    awaitable: Awaitable[Any],
    timeout: Optional[float],
    course_id: Optional[int] = None,
) -> Any:
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(
            f"{collaborator}.{operation} timed out after {timeout}s (course={course_id})"
        )
        raise UpstreamUnavailableError(
            collaborator, operation, course_id=course_id, timed_out=True
        ) from e
    except GradebookException:
        raise
    except Exception as e:
        logger.error(
            f"{collaborator}.{operation} failed (course={course_id}): "
            f"{type(e).__name__}: {e}"
        )
        raise UpstreamUnavailableError(
            collaborator, operation, course_id=course_id, reason=type(e).__name__
        ) from e


async def gather_fail_fast(awaitables: Iterable[Awaitable[Any]]) -> List[Any]:
    """Await all, preserving order; the first failure cancels the rest and propagates."""
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        return []
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
