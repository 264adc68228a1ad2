"""Probe aggregator for awslatency.

Launches one probe per catalog endpoint, all concurrently, and funnels
every outcome through a single queue into one consumer.  The consumer
forwards each outcome to an optional progress callback in arrival order
and counts arrivals; once the count reaches the number of probes
launched, the batch is complete and the ranked result set is built.

Public API:
    run_batch         -- probe every endpoint and return the ranked results
    build_result_set  -- rank a complete set of outcomes
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from awslatency.config import DEFAULT_TIMEOUT
from awslatency.models import (
    EndpointDescriptor,
    ProbeError,
    ProbeOutcome,
    ProbeTimedOut,
    ResultEntry,
    ResultSet,
)
from awslatency.probe import Prober

logger = logging.getLogger(__name__)

# Type alias for the live progress callback.
# Signature: (endpoint, outcome), called once per probe in arrival order.
OutcomeCallback = Callable[[EndpointDescriptor, ProbeOutcome], None]


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

def build_result_set(
    endpoints: Sequence[EndpointDescriptor],
    outcomes: Sequence[ProbeOutcome],
) -> ResultSet:
    """Rank *outcomes* (one per endpoint, in catalog order).

    Only usable outcomes are ranked.  Entries are sorted ascending by
    round-trip time; ``sorted`` is stable, so equal times keep catalog
    order.  Ranks are 1-based positions in the sorted sequence.
    """
    if len(endpoints) != len(outcomes):
        raise ValueError(
            f"expected one outcome per endpoint, got {len(outcomes)} for {len(endpoints)}"
        )

    ranked: list[tuple[EndpointDescriptor, ProbeOutcome]] = []
    failed: list[tuple[EndpointDescriptor, ProbeOutcome]] = []
    for endpoint, outcome in zip(endpoints, outcomes):
        if outcome.usable:
            ranked.append((endpoint, outcome))
        else:
            failed.append((endpoint, outcome))

    ranked.sort(key=lambda pair: pair[1].rtt_ms)

    entries = [
        ResultEntry(
            rank=rank,
            region=endpoint.region,
            display_label=endpoint.display_label,
            address=endpoint.address,
            rtt_ms=outcome.rtt_ms,
            packet_loss=getattr(outcome, "packet_loss", 0.0),
        )
        for rank, (endpoint, outcome) in enumerate(ranked, 1)
    ]

    return ResultSet(
        entries=entries,
        probed=len(endpoints),
        failed=failed,
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )


# ---------------------------------------------------------------------------
# Batch orchestration
# ---------------------------------------------------------------------------

async def _probe_into_queue(
    index: int,
    endpoint: EndpointDescriptor,
    prober: Prober,
    timeout: float,
    queue: asyncio.Queue,
) -> None:
    """Run one probe and put exactly one outcome on *queue*.

    The probe is bounded by ``prober.deadline(timeout)``; an expired
    deadline becomes :class:`ProbeTimedOut` and any unexpected exception
    becomes :class:`ProbeError`, so the consumer always sees a completion.
    """
    try:
        outcome = await asyncio.wait_for(
            prober.probe(endpoint, timeout),
            timeout=prober.deadline(timeout),
        )
    except asyncio.TimeoutError:
        outcome = ProbeTimedOut()
    except Exception as exc:
        logger.exception("Unexpected error probing %s", endpoint.address)
        outcome = ProbeError(message=str(exc) or type(exc).__name__)
    await queue.put((index, endpoint, outcome))


async def run_batch(
    endpoints: Sequence[EndpointDescriptor],
    prober: Prober,
    timeout: float = DEFAULT_TIMEOUT,
    on_outcome: Optional[OutcomeCallback] = None,
) -> ResultSet:
    """Probe every endpoint concurrently and return the ranked results.

    Parameters
    ----------
    endpoints:
        Catalog entries, in catalog order.  An empty sequence returns an
        empty result set without touching *prober*.
    prober:
        Probe capability.  ``prepare()`` is called once before fan-out and
        may raise :class:`~awslatency.errors.ProbeUnavailable`, which
        propagates.
    timeout:
        Per-probe timeout in seconds, applied to every probe independently.
    on_outcome:
        Optional callable invoked with ``(endpoint, outcome)`` as each
        probe completes, in arrival order.

    Returns
    -------
    ResultSet
        Published once, after every launched probe has reported.
    """
    endpoints = list(endpoints)
    total = len(endpoints)
    if total == 0:
        return ResultSet()

    prober.prepare()

    queue: asyncio.Queue = asyncio.Queue()
    tasks = [
        asyncio.create_task(_probe_into_queue(i, ep, prober, timeout, queue))
        for i, ep in enumerate(endpoints)
    ]
    logger.debug("Launched %d %s probes (timeout %.1fs)", total, prober.method, timeout)

    outcomes: list[Optional[ProbeOutcome]] = [None] * total
    arrived = 0
    while arrived < total:
        index, endpoint, outcome = await queue.get()
        outcomes[index] = outcome
        arrived += 1
        logger.debug("%d/%d %s: %s", arrived, total, endpoint.address, outcome.describe())

        if on_outcome is not None:
            try:
                on_outcome(endpoint, outcome)
            except Exception:
                logger.exception("Progress callback failed for %s", endpoint.address)

    # Every task has already put its outcome; this only reaps them.
    await asyncio.gather(*tasks)

    return build_result_set(endpoints, outcomes)  # type: ignore[arg-type]
