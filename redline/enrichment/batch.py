"""Grouped, rate-limited processing of enrichment work items."""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple, TypeVar

from rich.console import Console

from .models import BatchItemError, BatchProgress, BatchReport

console = Console()

T = TypeVar("T")

Worker = Callable[[T], Awaitable[Any]]
ProgressCallback = Callable[[BatchProgress], None]


def _default_key(item: Any) -> Any:
    return getattr(item, "id", None)


class BatchRunner:
    """
    Run a worker over items in fixed-size groups.

    Items in a group run concurrently or one after another. The runner
    sleeps ``delay`` seconds between groups, never after the last one.
    A failing item is recorded in the report and does not stop the run.
    """

    def __init__(
        self,
        batch_size: int = 5,
        delay: float = 1.0,
        concurrent: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self.delay = delay
        self.concurrent = concurrent
        self.on_progress = on_progress

    async def _attempt(self, worker: Worker, item: Any) -> Tuple[bool, Any]:
        try:
            return True, await worker(item)
        except Exception as e:
            return False, e

    async def run(
        self,
        items: Sequence[T],
        worker: Worker,
        key: Callable[[T], Any] = _default_key,
    ) -> BatchReport:
        report = BatchReport(total=len(items))

        for start in range(0, len(items), self.batch_size):
            group = items[start : start + self.batch_size]

            if self.concurrent:
                outcomes = await asyncio.gather(*(self._attempt(worker, item) for item in group))
            else:
                outcomes = [await self._attempt(worker, item) for item in group]

            for item, (ok, value) in zip(group, outcomes):
                if ok:
                    report.successful += 1
                    report.results.append(value)
                else:
                    report.failed += 1
                    report.errors.append(BatchItemError(item_id=key(item), error=str(value)))
                    console.print(f"[red]Failed to process item {key(item)}: {value}[/red]")

            if self.on_progress:
                self.on_progress(
                    BatchProgress(
                        processed=min(start + self.batch_size, len(items)),
                        total=len(items),
                        successful=report.successful,
                        failed=report.failed,
                    )
                )

            if start + self.batch_size < len(items) and self.delay > 0:
                await asyncio.sleep(self.delay)

        return report
