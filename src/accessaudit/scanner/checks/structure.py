"""Document-level structure checks: doctype, language, title, main landmark."""

from __future__ import annotations

import re

from accessaudit.scanner.checks.base import (
    TAG_BODY,
    MarkupRule,
    iter_tags,
    ordinal,
    parse_attributes,
)
from accessaudit.scanner.models import Finding

_DOCTYPE_RE = re.compile(r"<!doctype\b", re.IGNORECASE)
_HTML_TAG_RE = re.compile(r"<html\b" + TAG_BODY + ">", re.IGNORECASE)
_TITLE_OPEN_RE = re.compile(r"<title\b" + TAG_BODY + ">", re.IGNORECASE)
_TITLE_CLOSE_RE = re.compile(r"</title\s*>", re.IGNORECASE)


def _root_tag(markup: str) -> str:
    m = _HTML_TAG_RE.search(markup)
    return m.group(0) if m else "<html>"


class DoctypeRule(MarkupRule):
    rule_id = "missing-doctype"

    def evaluate(self, markup: str) -> list[Finding]:
        if _DOCTYPE_RE.search(markup):
            return []
        return [
            self.finding(
                _root_tag(markup),
                "document start",
                "No <!DOCTYPE> declaration found in the document",
            )
        ]


class LangAttributeRule(MarkupRule):
    rule_id = "missing-lang-attribute"

    def evaluate(self, markup: str) -> list[Finding]:
        m = _HTML_TAG_RE.search(markup)
        if m is None:
            return [
                self.finding(
                    "<html>",
                    "root element",
                    "No <html> root element found, so no page language is declared",
                )
            ]

        attrs = parse_attributes(m.group(0))
        lang = attrs.get("lang") or attrs.get("xml:lang") or ""
        if lang.strip():
            return []
        note = (
            "The lang attribute on <html> is empty"
            if "lang" in attrs
            else "The <html> element has no lang attribute"
        )
        return [self.finding(m.group(0), "root element", note)]


class PageTitleRule(MarkupRule):
    rule_id = "missing-page-title"

    def evaluate(self, markup: str) -> list[Finding]:
        opening = _TITLE_OPEN_RE.search(markup)
        if opening is not None:
            closing = _TITLE_CLOSE_RE.search(markup, opening.end())
            # Truncated markup: an unclosed <title> followed by text counts as titled.
            end = closing.start() if closing else len(markup)
            if markup[opening.end() : end].strip():
                return []
            if closing is not None:
                snippet = markup[opening.start() : closing.end()]
                return [self.finding(snippet, "document title", "The <title> element is empty")]
        return [self.finding("<title></title>", "document head", "No <title> element found")]


class MainLandmarkRule(MarkupRule):
    rule_id = "missing-landmark"

    def evaluate(self, markup: str) -> list[Finding]:
        mains: list[str] = []
        body_tag = "<body>"
        for name, tag, _ in iter_tags(markup):
            if name == "body" and body_tag == "<body>":
                body_tag = tag
            if name == "main":
                mains.append(tag)
                continue
            role = parse_attributes(tag).get("role", "")
            if role.strip().lower() == "main":
                mains.append(tag)

        if not mains:
            return [
                self.finding(
                    body_tag,
                    "document body",
                    'No <main> element or role="main" region found',
                )
            ]
        if len(mains) > 1:
            return [
                self.finding(
                    mains[1],
                    f"{ordinal(2)} main landmark",
                    f"Found {len(mains)} main landmarks; exactly one is expected",
                )
            ]
        return []
