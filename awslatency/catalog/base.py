"""Abstract base class for endpoint catalogs."""

from __future__ import annotations

import abc

from awslatency.models import EndpointDescriptor


class CatalogSource(abc.ABC):
    """Base class that each catalog source must implement."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable catalog name (e.g. 'Static')."""

    @property
    @abc.abstractmethod
    def slug(self) -> str:
        """Short identifier (e.g. 'static')."""

    @abc.abstractmethod
    def list_endpoints(self) -> list[EndpointDescriptor]:
        """Return the ordered endpoints to probe.

        Each call returns a fresh list; callers own it for one run.
        Implementations that need a remote lookup raise
        :class:`~awslatency.errors.CatalogUnavailable` when it fails.
        """
