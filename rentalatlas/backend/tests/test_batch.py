import asyncio

import pytest

from app.service_layer.batch import BatchResult, BatchRunner, BatchStrategy, ItemFailed, ItemOutcome


class SleepRecorder:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.mark.asyncio
async def test_sequential_counts_and_error_labels():
    async def handler(n: int) -> ItemOutcome:
        if n == 2:
            raise ItemFailed("bad item " + "x" * 200)
        return ItemOutcome.skipped if n == 3 else ItemOutcome.success

    runner = BatchRunner(strategy=BatchStrategy.sequential(), label=lambda n: f"item-{n}", max_error_len=20)
    res = await runner.run([1, 2, 3, 4], handler)

    assert (res.success, res.failed, res.skipped) == (2, 1, 1)
    assert res.errors == ["item-2: bad item xxxxxxxxxxx"]
    assert res.success + res.failed + res.skipped == 4


@pytest.mark.asyncio
async def test_bounded_groups_sleep_between_groups_only():
    sleep = SleepRecorder()
    in_flight = 0
    peak = 0

    async def handler(n: int) -> ItemOutcome:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0)
        in_flight -= 1
        return ItemOutcome.success

    runner = BatchRunner(strategy=BatchStrategy.bounded(3, 0.5), label=str, sleep=sleep)
    res = await runner.run(list(range(7)), handler)

    assert res.success == 7
    assert peak <= 3
    # 3 groups -> 2 pauses, none after the last group
    assert sleep.calls == [0.5, 0.5]


@pytest.mark.asyncio
async def test_errors_fold_in_input_order_within_group():
    async def handler(n: int) -> ItemOutcome:
        await asyncio.sleep(0.01 * (5 - n))
        raise RuntimeError(f"fail {n}")

    runner = BatchRunner(strategy=BatchStrategy.bounded(5), label=str)
    res = await runner.run([1, 2, 3, 4], handler)

    assert res.failed == 4
    assert res.errors == ["1: fail 1", "2: fail 2", "3: fail 3", "4: fail 4"]


@pytest.mark.asyncio
async def test_exception_without_message_uses_type_name():
    async def handler(n: int) -> ItemOutcome:
        raise KeyError()

    res = await BatchRunner(strategy=BatchStrategy.sequential(), label=str).run([1], handler)
    assert res.errors == ["1: KeyError"]


def test_bounded_rejects_zero_and_fatal_shape():
    with pytest.raises(ValueError):
        BatchStrategy.bounded(0)

    assert BatchResult.fatal("db down").as_dict() == {"success": 0, "failed": 0, "skipped": 0, "errors": ["db down"]}
