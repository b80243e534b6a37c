"""Tests for the scan manager."""

from __future__ import annotations

import asyncio

import pytest

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.errors import InvalidInputError, NotFoundError
from accessaudit.scanner.checks import AltTextRule
from accessaudit.scanner.engine import RuleEvaluator
from accessaudit.scans.manager import INTERNAL_FAILURE_MESSAGE, ScanManager
from accessaudit.scans.models import ScanStatus
from accessaudit.storage.db import get_db
from accessaudit.storage.repos import ScanRepo


def run_async(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class ExplodingRule(AltTextRule):
    def evaluate(self, markup):
        raise RuntimeError("rule bug")


async def _with_manager(db_path, fetcher, body, evaluator=None):
    db = await get_db(db_path)
    try:
        manager = ScanManager(ScanRepo(db), fetcher, evaluator=evaluator)
        result = await body(manager)
        await manager.drain()
        return result
    finally:
        await db.close()


def test_start_scan_returns_pending_then_completes(db_path, fetcher):
    async def body(manager):
        started = await manager.start_scan("https://example.com/img", "A")
        await manager.drain()
        return started, await manager.get_scan(started.id)

    started, finished = run_async(_with_manager(db_path, fetcher, body))
    assert started.status == ScanStatus.PENDING
    assert finished.id == started.id
    assert finished.status == ScanStatus.COMPLETED
    assert finished.level == ConformanceLevel.A
    assert [f.rule_id for f in finished.findings].count("missing-alt-text") == 1
    assert finished.metrics.elements_scanned == 3
    assert fetcher.fetched == ["https://example.com/img"]


def test_accessible_page_scores_100(db_path, fetcher):
    async def body(manager):
        scan = await manager.start_scan("https://example.com/", ConformanceLevel.AAA)
        await manager.drain()
        return await manager.get_scan(scan.id)

    scan = run_async(_with_manager(db_path, fetcher, body))
    assert scan.findings == ()
    assert scan.metrics.compliance_score == 100


def test_acquisition_failure_marks_scan_failed(db_path, fetcher):
    async def body(manager):
        scan = await manager.start_scan("https://unreachable.invalid/")
        await manager.drain()
        return await manager.get_scan(scan.id)

    scan = run_async(_with_manager(db_path, fetcher, body))
    assert scan.status == ScanStatus.FAILED
    assert "unreachable.invalid" in scan.error_message
    assert scan.metrics is None


def test_unexpected_fetch_error_is_generic(db_path, fetcher):
    fetcher.pages["https://example.com/broken"] = RuntimeError("socket exploded")

    async def body(manager):
        scan = await manager.start_scan("https://example.com/broken")
        await manager.drain()
        return await manager.get_scan(scan.id)

    scan = run_async(_with_manager(db_path, fetcher, body))
    assert scan.status == ScanStatus.FAILED
    assert scan.error_message == INTERNAL_FAILURE_MESSAGE


def test_rule_fault_marks_scan_failed(db_path, fetcher):
    evaluator = RuleEvaluator([ExplodingRule()])

    async def body(manager):
        scan = await manager.start_scan("https://example.com/img", "A")
        await manager.drain()
        return await manager.get_scan(scan.id)

    scan = run_async(_with_manager(db_path, fetcher, body, evaluator=evaluator))
    assert scan.status == ScanStatus.FAILED
    assert scan.error_message == INTERNAL_FAILURE_MESSAGE


@pytest.mark.parametrize(
    "target,level",
    [
        ("", "AA"),
        ("   ", "AA"),
        ("ftp://example.com/", "AA"),
        ("https://example.com/", "B"),
    ],
)
def test_invalid_input_rejected_without_writing(db_path, fetcher, target, level):
    async def body(manager):
        with pytest.raises(InvalidInputError):
            await manager.start_scan(target, level)
        return await manager.list_scans()

    assert run_async(_with_manager(db_path, fetcher, body)) == []


def test_get_unknown_scan(db_path, fetcher):
    async def body(manager):
        with pytest.raises(NotFoundError) as excinfo:
            await manager.get_scan("missing")
        return excinfo.value

    error = run_async(_with_manager(db_path, fetcher, body))
    assert error.kind == "scan"
    assert error.identifier == "missing"


def test_rescanning_creates_a_new_scan(db_path, fetcher):
    async def body(manager):
        first = await manager.start_scan("https://example.com/img")
        await manager.drain()
        fetcher.pages["https://example.com/img"] = '<img src="x.png" alt="X">'
        second = await manager.start_scan("https://example.com/img")
        await manager.drain()
        return await manager.get_scan(first.id), await manager.get_scan(second.id)

    first, second = run_async(_with_manager(db_path, fetcher, body))
    assert first.id != second.id
    assert "missing-alt-text" in [f.rule_id for f in first.findings]
    assert "missing-alt-text" not in [f.rule_id for f in second.findings]


def test_concurrent_scans(db_path, fetcher):
    async def body(manager):
        scans = [
            await manager.start_scan(target)
            for target in (
                "https://example.com/",
                "https://example.com/img",
                "https://example.com/missing",
            )
        ]
        await manager.drain()
        return [await manager.get_scan(s.id) for s in scans]

    results = run_async(_with_manager(db_path, fetcher, body))
    assert [s.status for s in results] == [
        ScanStatus.COMPLETED,
        ScanStatus.COMPLETED,
        ScanStatus.FAILED,
    ]
