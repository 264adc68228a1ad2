"""Hardcoded AWS region table."""

from __future__ import annotations

from typing import Iterable, Optional

from awslatency.catalog.base import CatalogSource
from awslatency.config import REGIONS
from awslatency.models import EndpointDescriptor


class StaticCatalog(CatalogSource):
    """Catalog backed by a fixed table of ``(endpoint, region, city)`` rows.

    Cannot fail.  The default table is :data:`awslatency.config.REGIONS`.
    """

    def __init__(self, rows: Optional[Iterable[tuple[str, str, Optional[str]]]] = None) -> None:
        self._rows = list(REGIONS if rows is None else rows)

    @property
    def name(self) -> str:
        return "Static"

    @property
    def slug(self) -> str:
        return "static"

    def list_endpoints(self) -> list[EndpointDescriptor]:
        return [
            EndpointDescriptor(address=address, region=region, city=city)
            for address, region, city in self._rows
        ]
