"""Criterion mapper — decides whether findings implicate a success criterion.

Two paths are OR'd together:

1. the rule table: every rule id maps to a fixed set of criterion ids;
2. the finding's own tags: either the dotted id itself (``"1.1.1"``) or a
   compact fragment such as ``"wcag111"`` / ``"wcag2a111"``. This keeps
   findings from unknown rules (e.g. imported from another tool) mappable.

The mapper only ever answers Failed or Passed. Not applicable and not
evaluated are auditor decisions.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from accessaudit.audit.models import EvaluationStatus
from accessaudit.catalog.models import Criterion
from accessaudit.scanner.definitions import RULE_DEFINITIONS
from accessaudit.scanner.models import Finding

RULE_CRITERIA: dict[str, frozenset[str]] = {
    rule_id: frozenset(d.criteria) for rule_id, d in RULE_DEFINITIONS.items()
}

_MAPPED_CRITERIA: frozenset[str] = frozenset().union(*RULE_CRITERIA.values())

_TAG_FRAGMENT_RE = re.compile(r"wcag(?:2a{1,3})?(\d+)")


def _tag_matches(tag: str, criterion_id: str) -> bool:
    tag = tag.strip().lower()
    if tag == criterion_id:
        return True
    m = _TAG_FRAGMENT_RE.fullmatch(tag)
    return m is not None and m.group(1) == criterion_id.replace(".", "")


def criterion_violated(criterion_id: str, findings: Iterable[Finding]) -> bool:
    """True if any finding is evidence against ``criterion_id``."""
    for finding in findings:
        if criterion_id in RULE_CRITERIA.get(finding.rule_id, ()):
            return True
        if any(_tag_matches(tag, criterion_id) for tag in finding.criterion_tags):
            return True
    return False


def seed_status(criterion_id: str, findings: Sequence[Finding]) -> EvaluationStatus:
    """Initial checklist status: Failed when implicated, Passed otherwise."""
    if criterion_violated(criterion_id, findings):
        return EvaluationStatus.FAILED
    return EvaluationStatus.PASSED


def has_automated_signal(criterion_id: str) -> bool:
    """Whether at least one rule can produce evidence against the criterion."""
    return criterion_id in _MAPPED_CRITERIA


def map_findings(
    criteria: Iterable[Criterion],
    findings: Sequence[Finding],
) -> dict[str, EvaluationStatus]:
    """Seed status for every criterion, keyed by criterion id."""
    return {c.id: seed_status(c.id, findings) for c in criteria}


def manual_only(criteria: Iterable[Criterion]) -> list[Criterion]:
    """Criteria with no automated signal; they need a human to judge them."""
    return [c for c in criteria if not has_automated_signal(c.id)]
