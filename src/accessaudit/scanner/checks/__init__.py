"""Individual markup checks, grouped by concern."""

from accessaudit.scanner.checks.aria import AriaAttributeRule
from accessaudit.scanner.checks.base import MarkupRule, Rule
from accessaudit.scanner.checks.forms import FormLabelRule
from accessaudit.scanner.checks.headings import HeadingOrderRule, TopLevelHeadingRule
from accessaudit.scanner.checks.images import AltTextRule
from accessaudit.scanner.checks.keyboard import AnchorHrefRule, ClickHandlerRule
from accessaudit.scanner.checks.structure import (
    DoctypeRule,
    LangAttributeRule,
    MainLandmarkRule,
    PageTitleRule,
)
from accessaudit.scanner.checks.visual import ContrastRule, FocusIndicatorRule

__all__ = [
    "AltTextRule",
    "AnchorHrefRule",
    "AriaAttributeRule",
    "ClickHandlerRule",
    "ContrastRule",
    "DoctypeRule",
    "FocusIndicatorRule",
    "FormLabelRule",
    "HeadingOrderRule",
    "LangAttributeRule",
    "MainLandmarkRule",
    "MarkupRule",
    "PageTitleRule",
    "Rule",
    "TopLevelHeadingRule",
]
