"""pytest configuration for awslatency tests."""

from __future__ import annotations

import asyncio

import pytest

from awslatency.models import EndpointDescriptor, ProbeOutcome
from awslatency.probe import Prober


# Configure asyncio mode for pytest-asyncio
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


class FakeProber(Prober):
    """Prober driven by a script of ``address -> (delay_s, outcome | exception)``."""

    method = "fake"

    def __init__(self, script, fail_prepare=None, deadline=None):
        super().__init__(count=1)
        self.script = script
        self.fail_prepare = fail_prepare
        self._deadline = deadline
        self.prepare_calls = 0
        self.launched: list[str] = []

    def prepare(self) -> None:
        self.prepare_calls += 1
        if self.fail_prepare is not None:
            raise self.fail_prepare

    def deadline(self, timeout: float) -> float:
        if self._deadline is not None:
            return self._deadline
        return super().deadline(timeout)

    async def probe(self, endpoint: EndpointDescriptor, timeout: float) -> ProbeOutcome:
        self.launched.append(endpoint.address)
        delay, result = self.script[endpoint.address]
        await asyncio.sleep(delay)
        if isinstance(result, BaseException):
            raise result
        return result

    async def _probe_ip(self, ip: str, timeout: float) -> ProbeOutcome:
        raise NotImplementedError


@pytest.fixture
def fake_prober():
    return FakeProber


@pytest.fixture
def endpoints():
    """Three endpoints labelled A, B, C."""
    return [
        EndpointDescriptor(address="a.example.com", region="A", city="Alpha"),
        EndpointDescriptor(address="b.example.com", region="B"),
        EndpointDescriptor(address="c.example.com", region="C", city="Gamma"),
    ]
