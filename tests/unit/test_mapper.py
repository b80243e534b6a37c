"""Tests for the criterion mapper."""

from __future__ import annotations

from accessaudit.audit.mapper import (
    RULE_CRITERIA,
    criterion_violated,
    has_automated_signal,
    manual_only,
    map_findings,
    seed_status,
)
from accessaudit.audit.models import EvaluationStatus
from accessaudit.catalog import ConformanceLevel, load_catalog
from accessaudit.scanner.engine import evaluate_markup
from accessaudit.scanner.models import Finding, Severity


def _external_finding(*tags: str) -> Finding:
    return Finding(
        rule_id="imported-rule",
        severity=Severity.MODERATE,
        criterion_tags=tags,
        description="From another tool",
        remediation="",
        reference_url="",
    )


def test_rule_table_path(img_only_page):
    findings = evaluate_markup(img_only_page, ConformanceLevel.A)
    assert criterion_violated("1.1.1", findings)
    assert criterion_violated("3.1.1", findings)
    assert not criterion_violated("2.4.4", findings)


def test_multi_criteria_rule():
    findings = evaluate_markup('<input type="text">', ConformanceLevel.A)
    for criterion_id in ("1.3.1", "3.3.2", "4.1.2"):
        assert seed_status(criterion_id, findings) == EvaluationStatus.FAILED


def test_tag_path_for_unknown_rule():
    assert criterion_violated("1.1.1", [_external_finding("wcag111")])
    assert criterion_violated("1.4.3", [_external_finding("WCAG2AA143")])
    assert criterion_violated("2.4.7", [_external_finding("2.4.7")])


def test_tag_path_matches_whole_fragment():
    findings = [_external_finding("wcag1410")]
    assert criterion_violated("1.4.10", findings)
    assert not criterion_violated("1.4.1", findings)


def test_default_is_passed():
    assert seed_status("1.1.1", []) == EvaluationStatus.PASSED


def test_mapper_never_returns_human_states(img_only_page):
    findings = evaluate_markup(img_only_page, ConformanceLevel.AAA)
    statuses = set(map_findings(load_catalog().criteria, findings).values())
    assert statuses <= {EvaluationStatus.PASSED, EvaluationStatus.FAILED}


def test_every_rule_maps_to_catalog_criteria():
    catalog = load_catalog()
    for rule_id, criteria in RULE_CRITERIA.items():
        assert criteria, rule_id
        for criterion_id in criteria:
            assert catalog.get(criterion_id) is not None, (rule_id, criterion_id)


def test_manual_only_criteria():
    catalog = load_catalog()
    manual = {c.id for c in manual_only(catalog.criteria)}
    assert "1.2.1" in manual
    assert "1.1.1" not in manual
    assert has_automated_signal("2.4.7")
    assert not has_automated_signal("1.2.1")
