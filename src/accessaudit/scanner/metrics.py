"""Metrics calculator — element count, estimated passed checks, compliance score.

The compliance score is an approximation built from pattern matching. It
is not a certified conformance percentage and should never be presented
as one.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.checks.base import TAG_BODY
from accessaudit.scanner.models import Finding, ScanMetrics

_OPENING_TAG_RE = re.compile(r"<[a-zA-Z]" + TAG_BODY + ">")

BASELINE_POINTS = 15
LEVEL_BONUS = {
    ConformanceLevel.A: 0,
    ConformanceLevel.AA: 3,
    ConformanceLevel.AAA: 5,
}

# (points, pattern): awarded once if the pattern appears anywhere in the markup
_SIGNALS: list[tuple[int, re.Pattern[str]]] = [
    (2, re.compile(r"<!doctype\b", re.IGNORECASE)),
    (5, re.compile(r"<html\b[^<>]*\blang\s*=\s*[\"']?[^\s\"'>]", re.IGNORECASE)),
    (3, re.compile(r"<meta\b[^<>]*\bcharset\s*=", re.IGNORECASE)),
    (3, re.compile(r"<h1\b", re.IGNORECASE)),
    (5, re.compile(r"<nav\b|role\s*=\s*[\"']?navigation", re.IGNORECASE)),
    (5, re.compile(r"<main\b|role\s*=\s*[\"']?main", re.IGNORECASE)),
]
_HEADER_RE = re.compile(r"<header\b", re.IGNORECASE)
_FOOTER_RE = re.compile(r"<footer\b", re.IGNORECASE)
HEADER_FOOTER_POINTS = 4


def count_elements(markup: str) -> int:
    """Count opening tags. A coarse size proxy, not a DOM node count."""
    return len(_OPENING_TAG_RE.findall(markup))


def estimate_passed_checks(markup: str, level: ConformanceLevel) -> int:
    points = BASELINE_POINTS + LEVEL_BONUS[level]
    for bonus, pattern in _SIGNALS:
        if pattern.search(markup):
            points += bonus
    if _HEADER_RE.search(markup) and _FOOTER_RE.search(markup):
        points += HEADER_FOOTER_POINTS
    return points


def compliance_score(passed: int, findings_count: int) -> int:
    """Integer in [0, 100]; 100 with no findings, 0 when both terms are zero."""
    total = passed + findings_count
    if total <= 0:
        return 0
    if findings_count == 0:
        return 100
    # round half up
    score = math.floor(100 * passed / total + 0.5)
    return max(0, min(100, score))


def compute_metrics(
    markup: str,
    findings: Sequence[Finding],
    level: ConformanceLevel,
) -> ScanMetrics:
    passed = estimate_passed_checks(markup, level)
    return ScanMetrics(
        estimated_passed_checks=passed,
        elements_scanned=count_elements(markup),
        compliance_score=compliance_score(passed, len(findings)),
    )
