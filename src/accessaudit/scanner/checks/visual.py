"""Visual presentation heuristics: inline colors and focus styling.

Neither rule measures anything. Static markup cannot tell what a page
looks like, so these findings mark places an auditor has to check by eye.
"""

from __future__ import annotations

import re

from accessaudit.scanner.checks.base import (
    MarkupRule,
    TagCounter,
    iter_tags,
    ordinal,
    parse_attributes,
)
from accessaudit.scanner.checks.keyboard import NATIVELY_FOCUSABLE
from accessaudit.scanner.models import Finding

_BACKGROUND_PROPERTIES = ("background", "background-color")
_FOCUS_STYLE_RE = re.compile(r":focus|focus-visible", re.IGNORECASE)


def _style_declarations(style: str) -> dict[str, str]:
    declarations: dict[str, str] = {}
    for part in style.split(";"):
        prop, sep, value = part.partition(":")
        if not sep:
            continue
        declarations.setdefault(prop.strip().lower(), value.strip())
    return declarations


class ContrastRule(MarkupRule):
    """Flags inline text and background colors that need a manual contrast check."""

    rule_id = "ambiguous-contrast"

    def evaluate(self, markup: str) -> list[Finding]:
        findings: list[Finding] = []
        counter = TagCounter()
        for name, tag, _ in iter_tags(markup):
            position = counter.next(name)
            if "style" not in tag.lower():
                continue
            style = parse_attributes(tag).get("style")
            if not style:
                continue
            declarations = _style_declarations(style)
            color = declarations.get("color")
            background = next(
                (declarations[p] for p in _BACKGROUND_PROPERTIES if p in declarations),
                None,
            )
            if color is None or background is None:
                continue
            findings.append(
                self.finding(
                    tag,
                    f"{ordinal(position)} <{name}> element",
                    f"Text color {color!r} on background {background!r} "
                    "needs manual contrast verification",
                )
            )
        return findings


class FocusIndicatorRule(MarkupRule):
    """Flags once when interactive elements exist but no focus styling appears anywhere."""

    rule_id = "missing-focus-indicator"

    def evaluate(self, markup: str) -> list[Finding]:
        first_interactive: str | None = None
        for name, tag, _ in iter_tags(markup):
            if name in NATIVELY_FOCUSABLE or "tabindex" in parse_attributes(tag):
                first_interactive = tag
                break

        if first_interactive is None or _FOCUS_STYLE_RE.search(markup):
            return []
        return [
            self.finding(
                first_interactive,
                "document styles",
                "Interactive elements exist but no :focus or focus-visible styling was found",
            )
        ]
