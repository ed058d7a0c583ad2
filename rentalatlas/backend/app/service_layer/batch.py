# app/service_layer/batch.py
"""
Batch execution shared by every importer.

One strategy object decides how items are scheduled:

  * sequential()          - one item at a time, strict input order
  * bounded(n, delay_s)   - groups of n run concurrently; the whole group is
                            awaited, then delay_s, then the next group

Per-item exceptions never escape: each becomes a bounded error string and a
`failed` tick. Totals are folded in input order regardless of strategy.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class ItemOutcome(str, enum.Enum):
    success = "success"
    skipped = "skipped"


class ItemFailed(Exception):
    """Raised by a handler for an expected, descriptive per-item failure."""


@dataclass
class BatchResult:
    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def record_failure(self, label: str, message: str, max_len: int = 80) -> None:
        self.failed += 1
        self.errors.append(f"{label}: {message[:max_len]}")

    def as_dict(self) -> dict[str, Any]:
        return {"success": self.success, "failed": self.failed, "skipped": self.skipped, "errors": list(self.errors)}

    @classmethod
    def fatal(cls, message: str) -> "BatchResult":
        """Nothing processed; one top-level error."""
        return cls(errors=[message])


def _error_text(e: BaseException) -> str:
    return str(e) or type(e).__name__


@dataclass(frozen=True)
class BatchStrategy:
    concurrency: int = 1
    group_delay_s: float = 0.0

    @classmethod
    def sequential(cls) -> "BatchStrategy":
        return cls(concurrency=1, group_delay_s=0.0)

    @classmethod
    def bounded(cls, n: int, delay_s: float = 0.0) -> "BatchStrategy":
        if n < 1:
            raise ValueError("concurrency must be >= 1")
        return cls(concurrency=n, group_delay_s=delay_s)

    def groups(self, items: Sequence[T]) -> list[Sequence[T]]:
        n = self.concurrency
        return [items[i : i + n] for i in range(0, len(items), n)]


@dataclass
class BatchRunner(Generic[T]):
    strategy: BatchStrategy
    label: Callable[[T], str]
    max_error_len: int = 80
    sleep: Sleep = asyncio.sleep

    async def _guarded(self, item: T, handler: Callable[[T], Awaitable[ItemOutcome]]) -> ItemOutcome | BaseException:
        try:
            return await handler(item)
        except Exception as e:
            log.warning("batch item failed item=%r err=%s", self.label(item), _error_text(e))
            return e

    def _fold(self, result: BatchResult, item: T, outcome: ItemOutcome | BaseException) -> None:
        if isinstance(outcome, BaseException):
            result.record_failure(self.label(item), _error_text(outcome), self.max_error_len)
        elif outcome == ItemOutcome.skipped:
            result.skipped += 1
        else:
            result.success += 1

    async def run(self, items: Sequence[T], handler: Callable[[T], Awaitable[ItemOutcome]]) -> BatchResult:
        result = BatchResult()
        groups = self.strategy.groups(list(items))

        for idx, group in enumerate(groups):
            if len(group) == 1:
                outcomes = [await self._guarded(group[0], handler)]
            else:
                outcomes = await asyncio.gather(*(self._guarded(it, handler) for it in group))

            for item, outcome in zip(group, outcomes):
                self._fold(result, item, outcome)

            if self.strategy.group_delay_s > 0 and idx < len(groups) - 1:
                await self.sleep(self.strategy.group_delay_s)

        log.info(
            "batch done items=%s success=%s failed=%s skipped=%s",
            len(items),
            result.success,
            result.failed,
            result.skipped,
        )
        return result
