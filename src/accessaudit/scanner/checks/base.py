"""Rule protocol and markup helpers shared by all checks.

Rules scan raw markup with regular expressions rather than a parsed tree.
Anything that does not match simply produces no finding, so truncated or
malformed documents never raise.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Collection, Iterator
from typing import Protocol, runtime_checkable

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.definitions import RULE_DEFINITIONS, RuleDefinition
from accessaudit.scanner.models import Evidence, Finding

SNIPPET_LIMIT = 100

# Quoted values may contain ">"; no part of a tag may contain "<".
TAG_BODY = r"""(?:[^<>"']|"[^"<]*"|'[^'<]*')*"""
TAG_RE = re.compile(r"<([a-zA-Z][a-zA-Z0-9:-]*)" + TAG_BODY + ">")

_TAG_NAME_RE = re.compile(r"<[a-zA-Z][a-zA-Z0-9:-]*")
_ATTR_RE = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)


@runtime_checkable
class Rule(Protocol):
    """A named, deterministic pattern check against markup."""

    rule_id: str

    @property
    def level(self) -> ConformanceLevel:
        """Lowest conformance level at which the rule runs."""
        ...

    def evaluate(self, markup: str) -> list[Finding]:
        """Return every violation of this rule found in ``markup``."""
        ...


class MarkupRule(ABC):
    """Base class binding a check to its entry in the rule table."""

    rule_id: str = ""

    def __init__(self) -> None:
        self.definition: RuleDefinition = RULE_DEFINITIONS[self.rule_id]

    @property
    def level(self) -> ConformanceLevel:
        return self.definition.level

    @abstractmethod
    def evaluate(self, markup: str) -> list[Finding]: ...

    def finding(self, snippet: str, locator: str, note: str) -> Finding:
        d = self.definition
        return Finding(
            rule_id=d.rule_id,
            severity=d.severity,
            criterion_tags=d.criteria,
            description=d.description,
            remediation=d.remediation,
            reference_url=d.reference_url,
            evidence=(Evidence(snippet=truncate(snippet), locator=locator, note=note),),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"


def iter_tags(
    markup: str,
    names: Collection[str] | None = None,
) -> Iterator[tuple[str, str, int]]:
    """Yield ``(tag_name, tag_text, offset)`` for opening tags in document order.

    Tag names are lower-cased. When ``names`` is given, only those tags are yielded.
    """
    for m in TAG_RE.finditer(markup):
        name = m.group(1).lower()
        if names is None or name in names:
            yield name, m.group(0), m.start()


def parse_attributes(tag: str) -> dict[str, str]:
    """Parse the attributes of a single opening tag. First occurrence wins."""
    m = _TAG_NAME_RE.match(tag)
    body = tag[m.end() :] if m else tag
    body = body.rstrip(">").rstrip("/")

    attrs: dict[str, str] = {}
    for am in _ATTR_RE.finditer(body):
        name = am.group(1).lower()
        value = next((g for g in am.group(2, 3, 4) if g is not None), "")
        attrs.setdefault(name, value)
    return attrs


def truncate(text: str, limit: int = SNIPPET_LIMIT) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


class TagCounter:
    """Counts tag occurrences by name to build ordinal locators."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def next(self, name: str) -> int:
        self._counts[name] += 1
        return self._counts[name]
