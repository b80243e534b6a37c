"""Keyboard reachability heuristics."""

from __future__ import annotations

from accessaudit.scanner.checks.base import (
    MarkupRule,
    TagCounter,
    iter_tags,
    ordinal,
    parse_attributes,
)
from accessaudit.scanner.models import Finding

NATIVELY_FOCUSABLE = frozenset(
    {"a", "area", "button", "input", "select", "summary", "textarea"}
)
_CLICK_HANDLERS = ("onclick", "onmousedown", "onmouseup")


def _tab_reachable(attrs: dict[str, str]) -> bool:
    try:
        return int(attrs.get("tabindex", "").strip()) >= 0
    except ValueError:
        return False


class ClickHandlerRule(MarkupRule):
    """Flags non-focusable elements that react to clicks without a tabindex."""

    rule_id = "click-handler-not-focusable"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        counter = TagCounter()
        for name, tag, _ in iter_tags(markup):
            position = counter.next(name)
            if name in NATIVELY_FOCUSABLE:
                continue
            attrs = parse_attributes(tag)
            handler = next((h for h in _CLICK_HANDLERS if h in attrs), None)
            if handler is None or _tab_reachable(attrs):
                continue
            findings.append(
                self.finding(
                    tag,
                    f"{ordinal(position)} <{name}> element",
                    f"<{name}> handles {handler} but cannot receive keyboard focus",
                )
            )
        return findings


class AnchorHrefRule(MarkupRule):
    """Flags anchors that have no href and therefore no navigable target."""

    rule_id = "anchor-missing-href"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        for index, (_, tag, _) in enumerate(iter_tags(markup, {"a"}), start=1):
            if "href" in parse_attributes(tag):
                continue
            findings.append(
                self.finding(
                    tag,
                    f"{ordinal(index)} anchor element",
                    "Link has no href attribute and is not reachable with the keyboard",
                )
            )
        return findings
