"""Load the bundled success-criteria catalog from YAML."""

from __future__ import annotations

import importlib.resources
from functools import lru_cache

import yaml

from accessaudit.catalog.models import Catalog, ConformanceLevel, Criterion

DEFAULT_CATALOG = "wcag21"


@lru_cache(maxsize=4)
def load_catalog(name: str = DEFAULT_CATALOG) -> Catalog:
    """Load a bundled catalog by name. Cached for the process lifetime."""
    pkg = importlib.resources.files("accessaudit.catalog.data")
    text = pkg.joinpath(f"{name}.yaml").read_text(encoding="utf-8")
    return load_catalog_from_string(text)


def load_catalog_from_string(text: str) -> Catalog:
    """Parse a YAML catalog document."""
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Catalog YAML must be a mapping")

    criteria: list[Criterion] = []
    seen: set[str] = set()
    for guideline in data.get("guidelines", []):
        guideline_name = f"{guideline['id']} {guideline['title']}"
        for entry in guideline.get("criteria", []):
            criterion_id = str(entry["id"])
            if criterion_id in seen:
                raise ValueError(f"Duplicate criterion in catalog: {criterion_id}")
            seen.add(criterion_id)
            criteria.append(
                Criterion(
                    id=criterion_id,
                    title=entry["title"],
                    level=ConformanceLevel(entry["level"]),
                    guideline=guideline_name,
                )
            )

    return Catalog(version=data.get("version", "unversioned"), criteria=tuple(criteria))
