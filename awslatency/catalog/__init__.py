"""Endpoint catalog registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from awslatency.catalog.base import CatalogSource

_CATALOG_MAP: dict[str, type[CatalogSource]] | None = None


def _load_catalogs() -> dict[str, type[CatalogSource]]:
    from awslatency.catalog.ip_ranges import IpRangesCatalog
    from awslatency.catalog.static import StaticCatalog

    return {
        "static": StaticCatalog,
        "dynamic": IpRangesCatalog,
    }


def get_catalog_map() -> dict[str, type[CatalogSource]]:
    """Return the mapping of slug → catalog class, loading lazily."""
    global _CATALOG_MAP
    if _CATALOG_MAP is None:
        _CATALOG_MAP = _load_catalogs()
    return _CATALOG_MAP


def get_catalog(slug: str) -> CatalogSource:
    """Instantiate a catalog source by slug."""
    cmap = get_catalog_map()
    if slug not in cmap:
        raise ValueError(f"Unknown catalog: {slug!r}. Available: {list(cmap)}")
    return cmap[slug]()


def list_catalogs() -> list[str]:
    """Return sorted list of available catalog slugs."""
    return sorted(get_catalog_map())
