"""Scan manager — schedules scans and drives them to a terminal outcome."""

from __future__ import annotations

import asyncio
import logging

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.errors import AcquisitionError, InvalidInputError, NotFoundError
from accessaudit.fetcher import MarkupFetcher
from accessaudit.scanner.engine import RuleEvaluator
from accessaudit.scans.models import Completed, Failed, Scan, ScanOutcome
from accessaudit.storage.base import ScanStore

logger = logging.getLogger(__name__)

INTERNAL_FAILURE_MESSAGE = "Internal error while evaluating the page"


class ScanManager:
    """Starts scans without blocking the caller; each runs in its own task."""

    def __init__(
        self,
        store: ScanStore,
        fetcher: MarkupFetcher,
        evaluator: RuleEvaluator | None = None,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._evaluator = evaluator or RuleEvaluator()
        self._tasks: set[asyncio.Task[None]] = set()

    async def start_scan(
        self,
        target: str,
        level: ConformanceLevel | str = ConformanceLevel.AA,
    ) -> Scan:
        """Persist a pending scan and schedule its evaluation."""
        target = (target or "").strip()
        if not target:
            raise InvalidInputError("Scan target must not be empty")
        if not self._fetcher.accepts(target):
            raise InvalidInputError(f"Unsupported scan target: {target}")
        level = ConformanceLevel.parse(level)

        scan = Scan(target=target, level=level)
        await self._store.create(scan)
        logger.info("Scan %s started for %s at level %s", scan.id, target, level.value)

        task = asyncio.create_task(self._run(scan))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return scan

    async def get_scan(self, scan_id: str) -> Scan:
        scan = await self._store.get(scan_id)
        if scan is None:
            raise NotFoundError("scan", scan_id)
        return scan

    async def list_scans(self, limit: int = 50, offset: int = 0) -> list[Scan]:
        return await self._store.list_all(limit=limit, offset=offset)

    async def drain(self) -> None:
        """Wait for every scheduled scan to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, scan: Scan) -> None:
        outcome: ScanOutcome
        try:
            markup = await self._fetcher.fetch(scan.target)
            findings, metrics = await asyncio.to_thread(
                self._evaluator.assess, markup, scan.level
            )
            outcome = Completed(findings=tuple(findings), metrics=metrics)
        except AcquisitionError as e:
            logger.warning("Scan %s could not fetch %s: %s", scan.id, scan.target, e)
            outcome = Failed(error_message=str(e))
        except Exception:
            logger.exception("Scan %s failed during evaluation", scan.id)
            outcome = Failed(error_message=INTERNAL_FAILURE_MESSAGE)

        try:
            written = await self._store.update_outcome(scan.id, outcome)
        except Exception:
            logger.exception("Could not record outcome of scan %s", scan.id)
            return
        if not written:
            logger.warning("Scan %s was already terminal; outcome discarded", scan.id)
            return
        if isinstance(outcome, Completed):
            logger.info(
                "Scan %s completed: %d finding(s), score %d",
                scan.id,
                len(outcome.findings),
                outcome.metrics.compliance_score,
            )
        else:
            logger.info("Scan %s failed: %s", scan.id, outcome.error_message)
