"""Versioned catalog of accessibility success criteria."""

from accessaudit.catalog.loader import load_catalog, load_catalog_from_string
from accessaudit.catalog.models import Catalog, ConformanceLevel, Criterion

__all__ = [
    "Catalog",
    "ConformanceLevel",
    "Criterion",
    "load_catalog",
    "load_catalog_from_string",
]
