"""Rule evaluator — runs the markup checks active at a conformance level."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.checks import (
    AltTextRule,
    AnchorHrefRule,
    AriaAttributeRule,
    ClickHandlerRule,
    ContrastRule,
    DoctypeRule,
    FocusIndicatorRule,
    FormLabelRule,
    HeadingOrderRule,
    LangAttributeRule,
    MainLandmarkRule,
    PageTitleRule,
    Rule,
    TopLevelHeadingRule,
)
from accessaudit.scanner.metrics import compute_metrics
from accessaudit.scanner.models import Finding, ScanMetrics

logger = logging.getLogger(__name__)

# Evaluation order is part of the output contract: findings come out
# grouped by rule in this order, then in document order.
DEFAULT_RULES: tuple[Rule, ...] = (
    DoctypeRule(),
    LangAttributeRule(),
    PageTitleRule(),
    AltTextRule(),
    HeadingOrderRule(),
    TopLevelHeadingRule(),
    MainLandmarkRule(),
    FormLabelRule(),
    AriaAttributeRule(),
    ClickHandlerRule(),
    AnchorHrefRule(),
    ContrastRule(),
    FocusIndicatorRule(),
)


def normalize_markup(markup: str | bytes) -> str:
    """Coerce raw page content to text without ever failing."""
    if isinstance(markup, bytes):
        return markup.decode("utf-8", errors="replace")
    return markup


class RuleEvaluator:
    """Applies a fixed, ordered set of rules to page markup."""

    def __init__(self, rules: Sequence[Rule] | None = None) -> None:
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def active_rules(self, level: ConformanceLevel) -> list[Rule]:
        """Rules that run at ``level``. Higher levels run a superset."""
        return [r for r in self._rules if level.includes(r.level)]

    def evaluate(
        self,
        markup: str | bytes,
        level: ConformanceLevel = ConformanceLevel.AA,
    ) -> list[Finding]:
        """Evaluate markup. Deterministic: same input, same findings, same order."""
        text = normalize_markup(markup)
        findings: list[Finding] = []
        for rule in self.active_rules(level):
            found = rule.evaluate(text)
            if found:
                logger.debug("%s: %d finding(s)", rule.rule_id, len(found))
            findings.extend(found)
        return findings

    def assess(
        self,
        markup: str | bytes,
        level: ConformanceLevel = ConformanceLevel.AA,
    ) -> tuple[list[Finding], ScanMetrics]:
        """Evaluate markup and derive metrics from the findings."""
        text = normalize_markup(markup)
        findings = self.evaluate(text, level)
        return findings, compute_metrics(text, findings, level)


_default_evaluator = RuleEvaluator()


def evaluate_markup(
    markup: str | bytes,
    level: ConformanceLevel = ConformanceLevel.AA,
) -> list[Finding]:
    return _default_evaluator.evaluate(markup, level)


def assess_markup(
    markup: str | bytes,
    level: ConformanceLevel = ConformanceLevel.AA,
) -> tuple[list[Finding], ScanMetrics]:
    return _default_evaluator.assess(markup, level)
