"""Form field labelling check."""

from __future__ import annotations

import re
from bisect import bisect_left

from accessaudit.scanner.checks.base import MarkupRule, iter_tags, ordinal, parse_attributes
from accessaudit.scanner.models import Finding

# An input without a type attribute is a text field.
_TEXT_LIKE_TYPES = {"", "text", "email", "password"}
_NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")

_LABEL_OPEN_RE = re.compile(r"<label\b", re.IGNORECASE)
_LABEL_CLOSE_RE = re.compile(r"</label\s*>", re.IGNORECASE)


def _label_targets(markup: str) -> set[str]:
    targets: set[str] = set()
    for _, tag, _ in iter_tags(markup, {"label"}):
        target = parse_attributes(tag).get("for", "").strip()
        if target:
            targets.add(target)
    return targets


class _LabelSpans:
    """Answers whether an offset sits inside an unclosed <label>."""

    def __init__(self, markup: str) -> None:
        self._opens = [m.start() for m in _LABEL_OPEN_RE.finditer(markup)]
        self._closes = [m.start() for m in _LABEL_CLOSE_RE.finditer(markup)]

    def contains(self, offset: int) -> bool:
        i = bisect_left(self._opens, offset)
        if i == 0:
            return False
        last_open = self._opens[i - 1]
        j = bisect_left(self._closes, offset)
        last_close = self._closes[j - 1] if j else -1
        return last_open > last_close


class FormLabelRule(MarkupRule):
    """Flags text, email and password inputs with no label or accessible name."""

    rule_id = "missing-form-label"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        targets: set[str] | None = None
        spans: _LabelSpans | None = None

        for index, (_, tag, offset) in enumerate(iter_tags(markup, {"input"}), start=1):
            attrs = parse_attributes(tag)
            if attrs.get("type", "").strip().lower() not in _TEXT_LIKE_TYPES:
                continue
            if any(attrs.get(a, "").strip() for a in _NAME_ATTRIBUTES):
                continue

            if targets is None:
                targets = _label_targets(markup)
                spans = _LabelSpans(markup)
            field_id = attrs.get("id", "").strip()
            if field_id and field_id in targets:
                continue
            if spans is not None and spans.contains(offset):
                continue

            note = (
                f'No <label for="{field_id}"> and no accessible name attribute'
                if field_id
                else "Field has no id for a <label> and no accessible name attribute"
            )
            findings.append(self.finding(tag, f"{ordinal(index)} input element", note))
        return findings
