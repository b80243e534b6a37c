"""Image alternative-text check."""

from __future__ import annotations

from accessaudit.scanner.checks.base import MarkupRule, iter_tags, ordinal, parse_attributes
from accessaudit.scanner.models import Finding


class AltTextRule(MarkupRule):
    """Flags image-like elements with a missing or empty alt attribute."""

    rule_id = "missing-alt-text"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        index = 0
        for name, tag, _ in iter_tags(markup, {"img", "input"}):
            attrs = parse_attributes(tag)
            if name == "input" and attrs.get("type", "").strip().lower() != "image":
                continue
            index += 1

            if "alt" not in attrs:
                note = "Image has no alt attribute"
            elif not attrs["alt"].strip():
                note = "Image has an empty alt attribute"
            else:
                continue
            findings.append(self.finding(tag, f"{ordinal(index)} image element", note))
        return findings
