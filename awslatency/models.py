"""Data models for awslatency."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional


@dataclass(frozen=True)
class EndpointDescriptor:
    """One catalog entry: a regional endpoint and its labels."""

    address: str  # hostname or IP; identity within a catalog
    region: str  # e.g. "eu-west-1"
    city: Optional[str] = None  # e.g. "Ireland"

    @property
    def display_label(self) -> str:
        if self.city:
            return f"{self.region} ({self.city})"
        return self.region


# ---------------------------------------------------------------------------
# Probe outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing a single endpoint.

    Concrete outcomes are the subclasses below; ``kind`` is the tag.
    """

    kind: ClassVar[str] = ""

    @property
    def usable(self) -> bool:
        return False

    @property
    def rtt_ms(self) -> Optional[float]:
        return None

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class ProbeSuccess(ProbeOutcome):
    kind: ClassVar[str] = "success"

    round_trip_ms: float = 0.0
    packet_loss: float = 0.0  # fraction, 0.0-1.0

    @property
    def usable(self) -> bool:
        return True

    @property
    def rtt_ms(self) -> Optional[float]:
        return self.round_trip_ms

    def describe(self) -> str:
        return f"{self.round_trip_ms:.2f}ms"


@dataclass(frozen=True)
class ProbeUnreachable(ProbeOutcome):
    kind: ClassVar[str] = "unreachable"


@dataclass(frozen=True)
class ProbeTimedOut(ProbeOutcome):
    kind: ClassVar[str] = "timeout"


@dataclass(frozen=True)
class ProbeError(ProbeOutcome):
    kind: ClassVar[str] = "error"

    message: str = ""

    def describe(self) -> str:
        return f"error: {self.message}" if self.message else "error"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ResultEntry:
    """A ranked row of the result set."""

    rank: int
    region: str
    display_label: str
    address: str
    rtt_ms: Optional[float] = None
    packet_loss: float = 0.0


@dataclass
class ResultSet:
    """Latency-ranked outcome of one batch."""

    entries: list[ResultEntry] = field(default_factory=list)
    probed: int = 0
    failed: list[tuple[EndpointDescriptor, ProbeOutcome]] = field(default_factory=list)
    timestamp: Optional[str] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def has_packet_loss(self) -> bool:
        return any(e.packet_loss > 0 for e in self.entries)


@dataclass
class RunConfig:
    """Configuration for a single run."""

    timeout: float = 10.0
    count: int = 1
    catalog: str = "static"
    method: str = "auto"
    update_check: bool = True
    quiet: bool = False
    verbose: bool = False
    json_output: bool = False
    csv_output: bool = False
    output_file: Optional[str] = None

    @property
    def interactive(self) -> bool:
        return not self.quiet and not self.json_output and not self.csv_output
