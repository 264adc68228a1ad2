"""Reachability probes for a single endpoint.

A probe resolves the endpoint hostname with dnspython, then measures the
round trip either with ICMP echo requests (icmplib, unprivileged sockets)
or, where ICMP sockets are not permitted, by timing TCP handshakes.

Every per-endpoint failure is returned as a :class:`ProbeOutcome`; only
:meth:`Prober.prepare` raises, and only when the probing capability
itself is unusable.

Public API:
    Prober        -- abstract probe capability
    IcmpProber    -- ICMP echo via icmplib
    TcpProber     -- TCP connect timing
    select_prober -- pick a prober for a method name
"""

from __future__ import annotations

import abc
import asyncio
import errno
import ipaddress
import logging
import time

import dns.asyncresolver
import dns.exception
import dns.rdatatype
import dns.resolver

from awslatency.config import DEADLINE_GRACE, DEFAULT_COUNT, DEFAULT_TCP_PORT, ICMP_INTERVAL
from awslatency.errors import ProbeUnavailable
from awslatency.models import (
    EndpointDescriptor,
    ProbeError,
    ProbeOutcome,
    ProbeSuccess,
    ProbeTimedOut,
    ProbeUnreachable,
)

logger = logging.getLogger(__name__)

METHODS = ("auto", "icmp", "tcp")

_UNREACHABLE_ERRNOS = {errno.ENETUNREACH, errno.EHOSTUNREACH, errno.ECONNREFUSED}


def _is_ip_literal(address: str) -> bool:
    try:
        ipaddress.ip_address(address)
    except ValueError:
        return False
    return True


class Prober(abc.ABC):
    """Probe capability: ``probe(endpoint, timeout) -> ProbeOutcome``."""

    method: str = ""

    def __init__(self, count: int = DEFAULT_COUNT) -> None:
        if count < 1:
            raise ValueError("count must be at least 1")
        self.count = count

    def prepare(self) -> None:
        """Check once, before fan-out, that probes can be launched.

        Raises
        ------
        ProbeUnavailable
            The underlying mechanism cannot be used on this host.
        """

    def deadline(self, timeout: float) -> float:
        """Upper bound for one whole probe: resolution plus every request."""
        return timeout * (self.count + 1) + DEADLINE_GRACE

    async def probe(self, endpoint: EndpointDescriptor, timeout: float) -> ProbeOutcome:
        if _is_ip_literal(endpoint.address):
            ip = endpoint.address
        else:
            try:
                ip = await self._resolve(endpoint.address, timeout)
            except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
                logger.debug("%s does not resolve", endpoint.address)
                return ProbeUnreachable()
            except dns.exception.Timeout:
                return ProbeTimedOut()
            except dns.exception.DNSException as exc:
                return ProbeError(message=f"DNS: {exc}")

        return await self._probe_ip(ip, timeout)

    async def _resolve(self, hostname: str, timeout: float) -> str:
        """Resolve *hostname* to its first A record."""
        resolver = dns.asyncresolver.Resolver()
        resolver.lifetime = timeout
        answer = await resolver.resolve(hostname, dns.rdatatype.A)
        return str(answer[0])

    @abc.abstractmethod
    async def _probe_ip(self, ip: str, timeout: float) -> ProbeOutcome:
        """Measure the round trip to an already-resolved address."""


# ---------------------------------------------------------------------------
# ICMP echo
# ---------------------------------------------------------------------------

class IcmpProber(Prober):
    """ICMP echo requests through icmplib's ``async_ping``."""

    method = "icmp"

    def __init__(self, count: int = DEFAULT_COUNT, privileged: bool = False) -> None:
        super().__init__(count)
        self.privileged = privileged

    def deadline(self, timeout: float) -> float:
        # async_ping sleeps ICMP_INTERVAL between echo requests
        return super().deadline(timeout) + (self.count - 1) * ICMP_INTERVAL

    def prepare(self) -> None:
        from icmplib import ICMPv4Socket
        from icmplib.exceptions import ICMPSocketError

        try:
            sock = ICMPv4Socket(privileged=self.privileged)
        except ICMPSocketError as exc:
            raise ProbeUnavailable(f"ICMP sockets are not available: {exc}") from exc
        sock.close()

    async def _probe_ip(self, ip: str, timeout: float) -> ProbeOutcome:
        from icmplib import async_ping
        from icmplib.exceptions import DestinationUnreachable, ICMPLibError, NameLookupError

        try:
            host = await async_ping(
                ip,
                count=self.count,
                interval=ICMP_INTERVAL,
                timeout=timeout,
                privileged=self.privileged,
            )
        except (DestinationUnreachable, NameLookupError):
            return ProbeUnreachable()
        except ICMPLibError as exc:
            return ProbeError(message=str(exc) or type(exc).__name__)

        if not host.is_alive:
            return ProbeTimedOut()
        return ProbeSuccess(round_trip_ms=round(host.avg_rtt, 3), packet_loss=host.packet_loss)


# ---------------------------------------------------------------------------
# TCP connect
# ---------------------------------------------------------------------------

def _safe_close_writer(writer: asyncio.StreamWriter | None) -> None:
    """Close a stream writer without raising on already-closed transports."""
    if writer is None:
        return
    try:
        writer.close()
    except Exception:
        logger.debug("writer close failed", exc_info=True)


class TcpProber(Prober):
    """Times TCP handshakes; used where ICMP is not permitted."""

    method = "tcp"

    def __init__(self, count: int = DEFAULT_COUNT, port: int = DEFAULT_TCP_PORT) -> None:
        super().__init__(count)
        self.port = port

    async def _connect_once(self, ip: str, timeout: float) -> float:
        t0 = time.perf_counter()
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(ip, self.port),
            timeout=timeout,
        )
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        _safe_close_writer(writer)
        return elapsed_ms

    async def _probe_ip(self, ip: str, timeout: float) -> ProbeOutcome:
        samples: list[float] = []
        last_error: OSError | None = None

        for _ in range(self.count):
            try:
                samples.append(await self._connect_once(ip, timeout))
            except asyncio.TimeoutError:
                continue
            except OSError as exc:
                last_error = exc

        if samples:
            avg = sum(samples) / len(samples)
            loss = 1.0 - len(samples) / self.count
            return ProbeSuccess(round_trip_ms=round(avg, 3), packet_loss=round(loss, 3))

        if last_error is None:
            return ProbeTimedOut()
        if isinstance(last_error, ConnectionRefusedError) or last_error.errno in _UNREACHABLE_ERRNOS:
            return ProbeUnreachable()
        return ProbeError(message=str(last_error))


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def select_prober(method: str = "auto", count: int = DEFAULT_COUNT) -> Prober:
    """Return a ready-to-use prober for *method*.

    ``auto`` prefers ICMP and falls back to TCP connect timing when the
    host does not permit ICMP sockets.  ``icmp`` and ``tcp`` are returned
    unchecked; :func:`awslatency.engine.run_batch` calls ``prepare``.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown probe method: {method!r}. Available: {list(METHODS)}")

    if method == "tcp":
        return TcpProber(count=count)
    if method == "icmp":
        return IcmpProber(count=count)

    icmp = IcmpProber(count=count)
    try:
        icmp.prepare()
    except ProbeUnavailable as exc:
        logger.warning("%s; falling back to TCP connect timing", exc)
        return TcpProber(count=count)
    return icmp
