"""Published-version lookup for the update notice."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from packaging.version import InvalidVersion, Version

from awslatency import __version__
from awslatency.config import REGISTRY_URL, USER_AGENT, VERSION_CHECK_TIMEOUT
from awslatency.errors import VersionCheckFailure

logger = logging.getLogger(__name__)


def fetch_latest_version(
    client: Optional[httpx.Client] = None,
    url: str = REGISTRY_URL,
    timeout: float = VERSION_CHECK_TIMEOUT,
) -> str:
    """Return the latest version string published to the package registry."""
    headers = {"User-Agent": USER_AGENT}
    try:
        if client is not None:
            resp = client.get(url, headers=headers)
            resp.raise_for_status()
            data = resp.json()
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own:
                resp = own.get(url, headers=headers)
                resp.raise_for_status()
                data = resp.json()
    except httpx.HTTPError as exc:
        raise VersionCheckFailure(str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        raise VersionCheckFailure(f"invalid registry response: {exc}") from exc

    try:
        version = data["info"]["version"]
    except (KeyError, TypeError) as exc:
        raise VersionCheckFailure("registry response has no version") from exc
    if not isinstance(version, str) or not version:
        raise VersionCheckFailure("registry response has no version")
    return version


def is_newer(published: str, running: str) -> bool:
    """True when *published* is a later release than *running*.

    Versions compare under PEP 440, so pre-releases sort before their final
    release.  Strings that do not parse are treated as newer whenever they
    differ.
    """
    try:
        return Version(published) > Version(running)
    except InvalidVersion:
        return published != running


def check_for_update(
    client: Optional[httpx.Client] = None,
    current: str = __version__,
) -> Optional[str]:
    """Return the newer published version, or None when up to date.

    Raises :class:`VersionCheckFailure` when the registry cannot be read.
    """
    latest = fetch_latest_version(client)
    logger.debug("Published version %s, running %s", latest, current)
    if is_newer(latest, current):
        return latest
    return None
