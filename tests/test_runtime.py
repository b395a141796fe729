import asyncio

import pytest

from fakes import RecordingRuntime
from taskwire import (
    AsyncioRuntime,
    Trace,
    get_runtime,
    parallel,
    single,
    use_runtime,
    wait,
)


def test_use_runtime_restores_previous_runtime() -> None:
    before = get_runtime()
    runtime = RecordingRuntime()
    with use_runtime(runtime):
        assert get_runtime() is runtime
    assert get_runtime() is before


def test_wait_sleeps_through_runtime() -> None:
    runtime = RecordingRuntime()
    with use_runtime(runtime):
        assert asyncio.run(wait(0.01)("X")) == "X"
    assert runtime.sleeps == [0.01]


@pytest.mark.asyncio
async def test_single_polls_through_runtime() -> None:
    runtime = RecordingRuntime()
    with use_runtime(runtime):
        guarded = single(wait(0.05), 5.0, 0.01)
        await asyncio.gather(guarded("a"), guarded("b"))
    polls = [s for s in runtime.sleeps if s == 0.01]
    assert polls


@pytest.mark.asyncio
async def test_parallel_records_branches() -> None:
    trace = Trace()
    with use_runtime(AsyncioRuntime(trace=trace)):
        assert await parallel([1, 2])(None) == [1, 2]

    assert trace.actions() == ["parallel_begin", "branch_0", "branch_1", "parallel_end"]
    begin = trace.get_events()[0]
    assert begin.info == {"branches": 2}
    assert trace.as_tree()[begin.id] == [1, 2, 3]


@pytest.mark.asyncio
async def test_parallel_closes_trace_when_a_branch_fails() -> None:
    trace = Trace()

    def failing(value):
        raise ValueError("branch failed")

    with use_runtime(AsyncioRuntime(trace=trace)):
        with pytest.raises(ValueError, match="branch failed"):
            await parallel([1, failing])(None)

    assert trace.actions() == ["parallel_begin", "parallel_end"]
    end = trace.get_events()[-1]
    assert end.parent_id == 0
    assert end.info == {"failed": True}


@pytest.mark.asyncio
async def test_single_records_lock_events() -> None:
    trace = Trace()
    with use_runtime(AsyncioRuntime(trace=trace)):
        await single(lambda v: v, name="job")("X")

    assert trace.actions() == ["lock_acquire", "lock_release"]
    assert trace.get_events()[0].info == {"task": "job"}
    assert trace.get_events()[1].duration_ms is not None


@pytest.mark.asyncio
async def test_single_records_timeout() -> None:
    trace = Trace()
    with use_runtime(AsyncioRuntime(trace=trace)):
        guarded = single(wait(0.2), 0.05, name="job")
        first = asyncio.create_task(guarded(None))
        await asyncio.sleep(0)
        with pytest.raises(TimeoutError):
            await guarded(None)
        await first

    assert "lock_timeout" in trace.actions()


@pytest.mark.asyncio
async def test_disabled_trace_records_nothing() -> None:
    trace = Trace(enabled=False)
    with use_runtime(AsyncioRuntime(trace=trace)):
        await parallel([1])(None)
    assert len(trace) == 0


def test_trace_clear() -> None:
    trace = Trace()
    trace.record("one")
    trace.record("two", parent_id=0)
    assert trace.as_tree() == {None: [0], 0: [1]}
    trace.clear()
    assert len(trace) == 0
    assert trace.record("again") == 0
