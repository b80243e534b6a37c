"""Heading hierarchy checks."""

from __future__ import annotations

import re

from accessaudit.scanner.checks.base import TAG_BODY, MarkupRule, ordinal
from accessaudit.scanner.models import Finding

_HEADING_RE = re.compile(r"<h([1-6])\b" + TAG_BODY + ">", re.IGNORECASE)


def _headings(markup: str) -> list[tuple[int, str]]:
    return [(int(m.group(1)), m.group(0)) for m in _HEADING_RE.finditer(markup)]


class HeadingOrderRule(MarkupRule):
    """Flags headings whose level jumps more than one past the previous heading."""

    rule_id = "heading-skip"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        previous = 0
        for index, (level, tag) in enumerate(_headings(markup), start=1):
            if previous and level > previous + 1:
                findings.append(
                    self.finding(
                        tag,
                        f"{ordinal(index)} heading element (h{level})",
                        f"h{level} follows h{previous}, skipping intermediate levels",
                    )
                )
            previous = level
        return findings


class TopLevelHeadingRule(MarkupRule):
    """Flags pages that use headings but have no h1."""

    rule_id = "missing-top-level-heading"

    def evaluate(self, markup: str) -> list[Finding]:
        headings = _headings(markup)
        if not headings or any(level == 1 for level, _ in headings):
            return []
        level, tag = headings[0]
        return [
            self.finding(
                tag,
                f"{ordinal(1)} heading element (h{level})",
                "Headings are present but none of them is an h1",
            )
        ]
