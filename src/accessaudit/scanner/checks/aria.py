"""ARIA attribute name validation."""

from __future__ import annotations

from accessaudit.scanner.checks.base import (
    MarkupRule,
    TagCounter,
    iter_tags,
    ordinal,
    parse_attributes,
)
from accessaudit.scanner.models import Finding

# WAI-ARIA 1.2 states and properties
VALID_ARIA_ATTRIBUTES = frozenset(
    {
        "aria-activedescendant",
        "aria-atomic",
        "aria-autocomplete",
        "aria-braillelabel",
        "aria-brailleroledescription",
        "aria-busy",
        "aria-checked",
        "aria-colcount",
        "aria-colindex",
        "aria-colindextext",
        "aria-colspan",
        "aria-controls",
        "aria-current",
        "aria-describedby",
        "aria-description",
        "aria-details",
        "aria-disabled",
        "aria-dropeffect",
        "aria-errormessage",
        "aria-expanded",
        "aria-flowto",
        "aria-grabbed",
        "aria-haspopup",
        "aria-hidden",
        "aria-invalid",
        "aria-keyshortcuts",
        "aria-label",
        "aria-labelledby",
        "aria-level",
        "aria-live",
        "aria-modal",
        "aria-multiline",
        "aria-multiselectable",
        "aria-orientation",
        "aria-owns",
        "aria-placeholder",
        "aria-posinset",
        "aria-pressed",
        "aria-readonly",
        "aria-relevant",
        "aria-required",
        "aria-roledescription",
        "aria-rowcount",
        "aria-rowindex",
        "aria-rowindextext",
        "aria-rowspan",
        "aria-selected",
        "aria-setsize",
        "aria-sort",
        "aria-valuemax",
        "aria-valuemin",
        "aria-valuenow",
        "aria-valuetext",
    }
)


class AriaAttributeRule(MarkupRule):
    """Flags aria-* attributes whose name is not a recognized ARIA attribute."""

    rule_id = "invalid-aria-attribute"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        counter = TagCounter()
        for name, tag, _ in iter_tags(markup):
            position = counter.next(name)
            if "aria-" not in tag.lower():
                continue
            for attr in parse_attributes(tag):
                if attr.startswith("aria-") and attr not in VALID_ARIA_ATTRIBUTES:
                    findings.append(
                        self.finding(
                            tag,
                            f"{ordinal(position)} <{name}> element",
                            f"Unknown ARIA attribute: {attr}",
                        )
                    )
        return findings
