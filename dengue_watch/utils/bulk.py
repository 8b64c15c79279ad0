"""
Bulk snapshot aggregation across many areas.

A fixed pool of asyncio workers drains a queue of PSGC codes. Each worker
owns one database session for its whole lifetime (AsyncSession objects are
not safe to share between concurrent tasks) and aggregates one area at a
time. Per-area results are merged once every worker has finished.

A run is all-or-nothing: the first worker failure or a cancellation
request stops the remaining workers and no partial result is returned.
"""

import asyncio
from typing import Callable, Iterable, List, Optional, Sequence

from dengue_watch.config import settings
from dengue_watch.crud.weather import daily_weather, weekly_dengue_case
from dengue_watch.exceptions import AggregationCancelled
from dengue_watch.schemas.training_data import AggregationResult
from dengue_watch.utils.iso_calendar import WeekFilter
from dengue_watch.utils.logging_config import get_logger
from dengue_watch.utils.snapshots import (
    load_weekly_snapshots,
    validate_area_code,
    validate_week_filter,
    validate_years,
)

logger = get_logger(__name__)


def merge_results(results: Iterable[AggregationResult]) -> AggregationResult:
    """
    Merge per-area results into one.

    Snapshots are ordered by (area_code, dengue_year, dengue_week); missing
    markers are de-duplicated and sorted.
    """
    snapshots = []
    missing = set()
    for result in results:
        snapshots.extend(result.snapshots)
        missing.update(result.missing_lag_weeks)

    snapshots.sort(key=lambda s: (s.area_code, s.dengue_year, s.dengue_week))
    return AggregationResult(snapshots=tuple(snapshots), missing_lag_weeks=tuple(sorted(missing)))


class BulkSnapshotCoordinator:
    """
    Runs single-area aggregation for many areas with bounded concurrency.

    Args:
        session_factory: Callable returning an async context manager that
            yields a database session (e.g. ``dengue_watch.database.async_session``)
        worker_count: Maximum number of areas processed concurrently
        case_source: Provider of ``get_weekly_cases``
        weather_source: Provider of ``get_daily_weather``
    """

    def __init__(
        self,
        session_factory: Callable,
        worker_count: Optional[int] = None,
        *,
        case_source=weekly_dengue_case,
        weather_source=daily_weather
    ):
        worker_count = settings.BULK_WORKER_COUNT if worker_count is None else worker_count
        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")

        self.session_factory = session_factory
        self.worker_count = worker_count
        self.case_source = case_source
        self.weather_source = weather_source

    async def run(
        self,
        area_codes: Sequence[str],
        years: Iterable[int],
        week_filter: Optional[WeekFilter] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> AggregationResult:
        """
        Aggregate snapshots for every area.

        Args:
            area_codes: PSGC codes to process
            years: Dengue ISO years
            week_filter: Optional dengue week number or week range
            cancel_event: Setting this event aborts the run

        Returns:
            Merged AggregationResult

        Raises:
            ValidationError: for malformed years, week filters or area codes
            AggregationCancelled: if cancel_event was set before completion
        """
        valid_years = validate_years(years)
        valid_filter = validate_week_filter(week_filter)
        codes = list(dict.fromkeys(validate_area_code(code) for code in area_codes))

        if not codes:
            logger.info("Bulk aggregation requested for zero areas")
            return AggregationResult()

        if cancel_event is not None and cancel_event.is_set():
            raise AggregationCancelled("Bulk aggregation was cancelled before it started.")

        queue: asyncio.Queue = asyncio.Queue()
        for code in codes:
            queue.put_nowait(code)

        worker_total = min(self.worker_count, len(codes))
        logger.info(
            f"Bulk aggregation started: {len(codes)} areas, {worker_total} workers, years {valid_years}"
        )

        partials: List[AggregationResult] = []
        tasks = {
            asyncio.create_task(self._worker(queue, valid_years, valid_filter, partials))
            for _ in range(worker_total)
        }
        canceller = asyncio.create_task(cancel_event.wait()) if cancel_event is not None else None

        try:
            while tasks:
                waiting = tasks | {canceller} if canceller is not None else tasks
                done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)

                if canceller is not None and canceller in done:
                    logger.warning(
                        f"Bulk aggregation cancelled with {queue.qsize()} areas still queued"
                    )
                    raise AggregationCancelled("Bulk aggregation was cancelled.")

                for task in done:
                    tasks.discard(task)
                    task.result()
        finally:
            pending = list(tasks)
            if canceller is not None:
                pending.append(canceller)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        merged = merge_results(partials)
        logger.info(
            f"Bulk aggregation finished: {len(merged.snapshots)} snapshots, "
            f"{len(merged.missing_lag_weeks)} missing markers"
        )
        return merged

    async def _worker(
        self,
        queue: asyncio.Queue,
        years: List[int],
        week_filter: WeekFilter,
        partials: List[AggregationResult]
    ) -> None:
        async with self.session_factory() as db:
            while True:
                try:
                    area_code = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return

                try:
                    result = await load_weekly_snapshots(
                        db, area_code, years, week_filter,
                        case_source=self.case_source,
                        weather_source=self.weather_source
                    )
                except Exception as e:
                    logger.error(f"Bulk aggregation failed for {area_code}: {e}")
                    raise
                partials.append(result)
