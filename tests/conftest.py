"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from accessaudit.errors import AcquisitionError

ACCESSIBLE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Home</title>
<style>a:focus { outline: 2px solid; }</style></head>
<body>
<header><nav><a href="/">Home</a></nav></header>
<main>
<h1>Welcome</h1>
<h2>News</h2>
<img src="logo.png" alt="Company logo">
<form><label for="email">Email</label><input type="email" id="email"></form>
</main>
<footer><p>Footer</p></footer>
</body>
</html>
"""

IMG_ONLY_PAGE = '<html><body><img src="x.png"></body></html>'


class FakeFetcher:
    """In-memory markup source keyed by URL."""

    def __init__(self, pages: dict[str, object] | None = None) -> None:
        self.pages = dict(pages or {})
        self.fetched: list[str] = []

    def accepts(self, target: str) -> bool:
        return target.startswith(("http://", "https://"))

    async def fetch(self, target: str) -> str:
        self.fetched.append(target)
        page = self.pages.get(target)
        if page is None:
            raise AcquisitionError(f"Could not reach {target}")
        if isinstance(page, BaseException):
            raise page
        return page


@pytest.fixture
def accessible_page() -> str:
    return ACCESSIBLE_PAGE


@pytest.fixture
def img_only_page() -> str:
    return IMG_ONLY_PAGE


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            "https://example.com/": ACCESSIBLE_PAGE,
            "https://example.com/img": IMG_ONLY_PAGE,
        }
    )
