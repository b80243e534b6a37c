"""Rule table — one entry per rule id with severity, criteria, and guidance text."""

from __future__ import annotations

from dataclasses import dataclass

from accessaudit.catalog.models import ConformanceLevel
from accessaudit.scanner.models import Severity

_UNDERSTANDING = "https://www.w3.org/WAI/WCAG21/Understanding/"


@dataclass(frozen=True)
class RuleDefinition:
    """Static metadata shared by every finding of one rule."""

    rule_id: str
    severity: Severity
    criteria: tuple[str, ...]
    description: str
    remediation: str
    reference_url: str
    level: ConformanceLevel = ConformanceLevel.A


_DEFINITIONS: list[RuleDefinition] = [
    RuleDefinition(
        rule_id="missing-doctype",
        severity=Severity.SERIOUS,
        criteria=("4.1.1",),
        description="Document must declare a document type",
        remediation="Add <!DOCTYPE html> as the first line of the document",
        reference_url=_UNDERSTANDING + "parsing.html",
    ),
    RuleDefinition(
        rule_id="missing-lang-attribute",
        severity=Severity.CRITICAL,
        criteria=("3.1.1",),
        description="The <html> element must have a lang attribute",
        remediation='Add a lang attribute to the <html> element, e.g. lang="en"',
        reference_url=_UNDERSTANDING + "language-of-page.html",
    ),
    RuleDefinition(
        rule_id="missing-page-title",
        severity=Severity.CRITICAL,
        criteria=("2.4.2",),
        description="Page must have a title that describes its topic or purpose",
        remediation="Add a descriptive, non-empty <title> element to the document head",
        reference_url=_UNDERSTANDING + "page-titled.html",
    ),
    RuleDefinition(
        rule_id="missing-alt-text",
        severity=Severity.CRITICAL,
        criteria=("1.1.1",),
        description="Images must have alternative text",
        remediation="Give every image a meaningful alt attribute",
        reference_url=_UNDERSTANDING + "non-text-content.html",
    ),
    RuleDefinition(
        rule_id="heading-skip",
        severity=Severity.MODERATE,
        criteria=("1.3.1", "2.4.6"),
        description="Heading levels should only increase by one",
        remediation="Do not skip heading levels; nest headings in sequence",
        reference_url=_UNDERSTANDING + "info-and-relationships.html",
    ),
    RuleDefinition(
        rule_id="missing-top-level-heading",
        severity=Severity.MODERATE,
        criteria=("1.3.1", "2.4.6"),
        description="Page should contain a level-one heading",
        remediation="Add an <h1> that describes the main content of the page",
        reference_url=_UNDERSTANDING + "headings-and-labels.html",
    ),
    RuleDefinition(
        rule_id="missing-landmark",
        severity=Severity.MODERATE,
        criteria=("1.3.1", "2.4.1"),
        description="Page should have exactly one main landmark",
        remediation='Wrap the primary content in a single <main> or role="main" region',
        reference_url=_UNDERSTANDING + "bypass-blocks.html",
    ),
    RuleDefinition(
        rule_id="missing-form-label",
        severity=Severity.CRITICAL,
        criteria=("1.3.1", "3.3.2", "4.1.2"),
        description="Form fields must have labels",
        remediation=(
            "Associate a <label for> with the field or give it an "
            "aria-label / aria-labelledby attribute"
        ),
        reference_url=_UNDERSTANDING + "labels-or-instructions.html",
    ),
    RuleDefinition(
        rule_id="invalid-aria-attribute",
        severity=Severity.CRITICAL,
        criteria=("4.1.2",),
        description="ARIA attributes must be valid",
        remediation="Use only ARIA attribute names defined by WAI-ARIA",
        reference_url=_UNDERSTANDING + "name-role-value.html",
    ),
    RuleDefinition(
        rule_id="click-handler-not-focusable",
        severity=Severity.SERIOUS,
        criteria=("2.1.1",),
        description="Interactive elements must be reachable with the keyboard",
        remediation='Use a native control or add tabindex="0" and key handlers',
        reference_url=_UNDERSTANDING + "keyboard.html",
    ),
    RuleDefinition(
        rule_id="anchor-missing-href",
        severity=Severity.SERIOUS,
        criteria=("2.1.1", "2.4.4"),
        description="Links must have a navigable target",
        remediation="Add an href to the link, or use a <button> for actions",
        reference_url=_UNDERSTANDING + "link-purpose-in-context.html",
    ),
    RuleDefinition(
        rule_id="ambiguous-contrast",
        severity=Severity.SERIOUS,
        criteria=("1.4.3",),
        description=(
            "Color contrast needs manual verification: inline text and "
            "background colors cannot be measured from static markup"
        ),
        remediation="Check the contrast ratio is at least 4.5:1 (3:1 for large text)",
        reference_url=_UNDERSTANDING + "contrast-minimum.html",
        level=ConformanceLevel.AA,
    ),
    RuleDefinition(
        rule_id="missing-focus-indicator",
        severity=Severity.SERIOUS,
        criteria=("2.4.7",),
        description="Interactive elements need a visible focus indicator",
        remediation="Add :focus or :focus-visible styles to interactive elements",
        reference_url=_UNDERSTANDING + "focus-visible.html",
        level=ConformanceLevel.AAA,
    ),
]

RULE_DEFINITIONS: dict[str, RuleDefinition] = {d.rule_id: d for d in _DEFINITIONS}
