"""Dynamic catalog built from the public AWS ip-ranges directory."""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from awslatency.catalog.base import CatalogSource
from awslatency.config import (
    CATALOG_FETCH_TIMEOUT,
    ENDPOINT_OVERRIDES,
    IP_RANGES_SERVICE,
    IP_RANGES_URL,
    REGIONS,
    SUPPLEMENTAL_REGIONS,
    USER_AGENT,
)
from awslatency.errors import CatalogUnavailable
from awslatency.models import EndpointDescriptor

logger = logging.getLogger(__name__)

# Region codes like "us-east-1" or "us-gov-west-1"; excludes "GLOBAL".
_REGION_RE = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")

_CITY_BY_REGION = {region: city for _, region, city in REGIONS}


def endpoint_for_region(region: str) -> str:
    """Return the EC2 endpoint hostname for *region*."""
    if region in ENDPOINT_OVERRIDES:
        return ENDPOINT_OVERRIDES[region]
    if region.startswith("cn-"):
        return f"ec2.{region}.amazonaws.com.cn"
    return f"ec2.{region}.amazonaws.com"


def parse_regions(data: object, service: str = IP_RANGES_SERVICE) -> list[str]:
    """Extract the sorted distinct regions carrying *service* from an
    ip-ranges payload.

    Raises ``ValueError`` when the payload does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ValueError("payload is not an object")

    regions: set[str] = set()
    for key in ("prefixes", "ipv6_prefixes"):
        prefixes = data.get(key, [])
        if not isinstance(prefixes, list):
            raise ValueError(f"{key!r} is not a list")
        for prefix in prefixes:
            if not isinstance(prefix, dict):
                raise ValueError(f"malformed entry in {key!r}")
            if prefix.get("service") != service:
                continue
            region = prefix.get("region")
            if isinstance(region, str) and _REGION_RE.match(region):
                regions.add(region)

    if not regions:
        raise ValueError(f"no {service} regions listed")
    return sorted(regions)


class IpRangesCatalog(CatalogSource):
    """Regions enumerated from ``ip-ranges.json``, plus supplemental entries.

    The supplemental regions in :data:`awslatency.config.SUPPLEMENTAL_REGIONS`
    are always appended, even when the directory already lists them; the
    catalog does not de-duplicate.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        url: str = IP_RANGES_URL,
        timeout: float = CATALOG_FETCH_TIMEOUT,
    ) -> None:
        self._client = client
        self._url = url
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "AWS ip-ranges"

    @property
    def slug(self) -> str:
        return "dynamic"

    def _fetch(self) -> object:
        headers = {"User-Agent": USER_AGENT}
        if self._client is not None:
            resp = self._client.get(self._url, headers=headers)
            resp.raise_for_status()
            return resp.json()

        with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
            resp = client.get(self._url, headers=headers)
            resp.raise_for_status()
            return resp.json()

    def list_endpoints(self) -> list[EndpointDescriptor]:
        try:
            data = self._fetch()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status in (401, 403):
                raise CatalogUnavailable(
                    f"Not permitted to read region directory ({status})"
                ) from exc
            raise CatalogUnavailable(f"Region directory returned HTTP {status}") from exc
        except httpx.HTTPError as exc:
            raise CatalogUnavailable(f"Region directory request failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogUnavailable(f"Region directory returned invalid JSON: {exc}") from exc

        try:
            regions = parse_regions(data)
        except ValueError as exc:
            raise CatalogUnavailable(f"Malformed region directory: {exc}") from exc

        logger.debug("ip-ranges listed %d %s regions", len(regions), IP_RANGES_SERVICE)

        endpoints = [
            EndpointDescriptor(
                address=endpoint_for_region(region),
                region=region,
                city=_CITY_BY_REGION.get(region),
            )
            for region in regions
        ]
        endpoints.extend(
            EndpointDescriptor(address=address, region=region, city=city)
            for address, region, city in SUPPLEMENTAL_REGIONS
        )
        return endpoints
