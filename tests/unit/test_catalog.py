"""Tests for the success criteria catalog."""

from __future__ import annotations

import pytest

from accessaudit.catalog import ConformanceLevel, load_catalog, load_catalog_from_string
from accessaudit.errors import InvalidInputError


def test_bundled_catalog_counts():
    catalog = load_catalog()
    assert catalog.version == "wcag-2.1"
    assert len(catalog) == 78
    assert len(catalog.for_level(ConformanceLevel.A)) == 30
    assert len(catalog.for_level(ConformanceLevel.AA)) == 50
    assert len(catalog.for_level(ConformanceLevel.AAA)) == 78


def test_levels_are_nested():
    catalog = load_catalog()
    a = {c.id for c in catalog.for_level(ConformanceLevel.A)}
    aa = {c.id for c in catalog.for_level(ConformanceLevel.AA)}
    aaa = {c.id for c in catalog.for_level(ConformanceLevel.AAA)}
    assert a < aa < aaa


def test_get_criterion():
    criterion = load_catalog().get("1.1.1")
    assert criterion is not None
    assert criterion.title == "Non-text Content"
    assert criterion.level == ConformanceLevel.A
    assert criterion.guideline == "1.1 Text Alternatives"
    assert load_catalog().get("9.9.9") is None


def test_level_parse():
    assert ConformanceLevel.parse("aa") == ConformanceLevel.AA
    assert ConformanceLevel.parse(" AAA ") == ConformanceLevel.AAA
    assert ConformanceLevel.parse(ConformanceLevel.A) == ConformanceLevel.A
    with pytest.raises(InvalidInputError):
        ConformanceLevel.parse("B")


def test_level_includes():
    assert ConformanceLevel.AAA.includes(ConformanceLevel.A)
    assert ConformanceLevel.AA.includes(ConformanceLevel.AA)
    assert not ConformanceLevel.A.includes(ConformanceLevel.AA)


def test_load_from_string():
    catalog = load_catalog_from_string(
        """
version: test
guidelines:
  - id: "9.1"
    title: Example
    criteria:
      - {id: "9.1.1", title: First, level: A}
      - {id: "9.1.2", title: Second, level: AAA}
"""
    )
    assert catalog.version == "test"
    assert [c.id for c in catalog.criteria] == ["9.1.1", "9.1.2"]
    assert [c.id for c in catalog.for_level(ConformanceLevel.AA)] == ["9.1.1"]


def test_duplicate_criterion_rejected():
    text = """
guidelines:
  - id: "9.1"
    title: Example
    criteria:
      - {id: "9.1.1", title: First, level: A}
      - {id: "9.1.1", title: Again, level: A}
"""
    with pytest.raises(ValueError, match="Duplicate"):
        load_catalog_from_string(text)


def test_non_mapping_rejected():
    with pytest.raises(ValueError):
        load_catalog_from_string("- just\n- a list\n")
