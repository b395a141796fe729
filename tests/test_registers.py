import asyncio

import pytest

from taskwire import Counter, Stack, number, waterfall

OBJECT = {}


def test_counter_tasks_resolve() -> None:
    async def run():
        counter = Counter()
        return [
            await counter.incr(),
            await counter.decr(),
            await counter.get(),
            await counter.set(),
        ]

    assert asyncio.run(run()) == [None, None, 0, None]


def test_counter_get_and_set() -> None:
    assert asyncio.run(Counter(10).get()) == 10

    counter = Counter()
    assert asyncio.run(counter.set(20)) == 20
    assert int(counter) == 20


@pytest.mark.parametrize(
    ("start", "step", "after_incr"),
    [(0, 1, 1), (10, 1, 11), (20, 10, 30), (0, -2, -2)],
)
def test_counter_incr_decr(start, step, after_incr) -> None:
    counter = Counter(start, step)
    assert int(counter) == start
    asyncio.run(counter.incr())
    assert int(counter) == after_incr
    asyncio.run(counter.decr())
    assert int(counter) == start
    assert asyncio.run(counter.get()) == start


def test_counter_incr_decr_pass_payload_through() -> None:
    assert asyncio.run(Counter().incr(OBJECT)) is OBJECT
    assert asyncio.run(Counter().decr(OBJECT)) is OBJECT


def test_counter_set_coerces_to_number() -> None:
    counter = Counter()
    asyncio.run(counter.set("7"))
    assert int(counter) == 7
    asyncio.run(counter.set("1.5"))
    assert float(counter) == 1.5
    asyncio.run(counter.set("abc"))
    assert int(counter) == 0


def test_counter_zero_step_falls_back_to_one() -> None:
    assert Counter(step=0).step == 1


def test_number_resolves_updated_count() -> None:
    counter = number(5)
    assert asyncio.run(counter.decr("ignored")) == 4
    assert asyncio.run(counter.incr("ignored")) == 5


def test_stack_push_pop() -> None:
    async def run():
        stack = Stack()
        assert len(stack) == 0
        await stack.push("X")
        await stack.push("Y")
        await stack.push("Z")
        assert len(stack) == 3
        assert list(stack) == ["X", "Y", "Z"]
        assert stack[0] == "X"
        await stack.pop()
        await stack.pop()
        assert len(stack) == 1
        value = await stack.pop()
        assert len(stack) == 0
        return value

    assert asyncio.run(run()) == "X"


def test_stack_push_passes_payload_through() -> None:
    assert asyncio.run(Stack().push(OBJECT)) is OBJECT


def test_stack_pop_when_empty() -> None:
    assert asyncio.run(Stack().pop()) is None


def test_registers_splice_into_combinators() -> None:
    counter = Counter()
    stack = Stack(["seed"])
    result = asyncio.run(waterfall([counter.incr, stack.push, counter.get])("v"))
    assert result == 1
    assert list(stack) == ["seed", "v"]
