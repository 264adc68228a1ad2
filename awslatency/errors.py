"""Exception types raised by awslatency."""

from __future__ import annotations


class AwsLatencyError(Exception):
    """Base class for errors surfaced to the user."""


class CatalogUnavailable(AwsLatencyError):
    """The endpoint catalog could not be fetched or parsed.

    Fatal: the run aborts before any probe is launched.
    """


class ProbeUnavailable(AwsLatencyError):
    """The probing capability itself cannot be used (e.g. no ICMP socket)."""


class VersionCheckFailure(AwsLatencyError):
    """The published version could not be determined. Never fatal."""
