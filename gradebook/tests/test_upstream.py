"""Identifier validation and the guarded collaborator calls."""
import asyncio

import pytest

from gradebook.exceptions import InvalidIdentifierError, UpstreamUnavailableError
from gradebook.services.upstream import call_upstream, gather_fail_fast
from gradebook.utils.identifiers import validate_identifier
from gradebook.utils.rounding import round_half_up


@pytest.mark.parametrize("value, expected", [(1, 1), (42, 42), ("42", 42), (" 7 ", 7)])
def test_valid_identifiers(value, expected):
    assert validate_identifier(value, "learner_id") == expected


@pytest.mark.parametrize("value", [0, -3, "0", "-3", "4.2", "abc", "", "²", True, False, None, 4.0, [1]])
def test_invalid_identifiers(value):
    with pytest.raises(InvalidIdentifierError) as exc_info:
        validate_identifier(value, "course_id")
    assert exc_info.value.field == "course_id"
    assert exc_info.value.status_code == 400


def test_round_half_up():
    assert round_half_up(77.5) == 78
    assert round_half_up(2.5) == 3
    assert round_half_up(7.25, 1) == 7.3
    assert round_half_up(3.0) == 3


@pytest.mark.asyncio
async def test_call_upstream_passes_result_through():
    async def ok():
        return {1: 80.0}

    assert await call_upstream("SubmissionStore", "best", ok(), timeout=1.0) == {1: 80.0}


@pytest.mark.asyncio
async def test_call_upstream_wraps_failures():
    async def broken():
        raise ConnectionError("refused")

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await call_upstream("CourseCatalog", "get_course", broken(), timeout=1.0, course_id=9)

    error = exc_info.value
    assert error.collaborator == "CourseCatalog"
    assert error.operation == "get_course"
    assert error.course_id == 9
    assert error.timed_out is False
    assert error.reason == "ConnectionError"
    assert isinstance(error.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_call_upstream_times_out():
    async def slow():
        await asyncio.sleep(1)

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await call_upstream("SubmissionStore", "recent_submission_timestamps", slow(), timeout=0.01)
    assert exc_info.value.timed_out is True
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_gather_fail_fast_keeps_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_fail_fast([value("a", 0.02), value("b", 0.0)]) == ["a", "b"]
    assert await gather_fail_fast([]) == []


@pytest.mark.asyncio
async def test_gather_fail_fast_cancels_siblings():
    cancelled = asyncio.Event()

    async def long_running():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def failing():
        await asyncio.sleep(0.01)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await gather_fail_fast([long_running(), failing()])
    assert cancelled.is_set()
