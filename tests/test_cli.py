"""Tests for the command-line entry point."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import awslatency.probe
import awslatency.version
from awslatency.catalog.ip_ranges import IpRangesCatalog
from awslatency.catalog.static import StaticCatalog
from awslatency.cli import main
from awslatency.config import EXIT_FATAL, EXIT_INTERRUPTED, EXIT_UPDATE_AVAILABLE
from awslatency.errors import CatalogUnavailable, ProbeUnavailable, VersionCheckFailure
from awslatency.models import ProbeSuccess, ProbeTimedOut


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def probes(monkeypatch, fake_prober, endpoints):
    """Route probing through a FakeProber over the three test endpoints."""
    prober = fake_prober({
        "a.example.com": (0.02, ProbeSuccess(round_trip_ms=50.0)),
        "b.example.com": (0.01, ProbeTimedOut()),
        "c.example.com": (0.0, ProbeSuccess(round_trip_ms=20.0)),
    })
    monkeypatch.setattr(StaticCatalog, "list_endpoints", lambda self: list(endpoints))
    monkeypatch.setattr(awslatency.probe, "select_prober", lambda method, count: prober)
    return prober


@pytest.fixture
def up_to_date(monkeypatch):
    monkeypatch.setattr(awslatency.version, "check_for_update", lambda *a, **kw: None)


class TestRun:
    def test_ranked_table(self, runner, probes, up_to_date):
        result = runner.invoke(main, [])

        assert result.exit_code == 0, result.output
        assert "c.example.com" in result.output  # live line
        assert "Total 2 regions" in result.output
        assert result.output.index("C (Gamma)") < result.output.index("A (Alpha)")

    def test_quiet_hides_live_lines(self, runner, probes, up_to_date):
        result = runner.invoke(main, ["-q"])

        assert result.exit_code == 0
        assert "c.example.com" not in result.output
        assert "Total 2 regions" in result.output

    def test_json_output(self, runner, probes):
        result = runner.invoke(main, ["--json", "--no-update-check"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [(r["rank"], r["region"], r["rtt_ms"]) for r in data["results"]] == [
            (1, "C", 20.0),
            (2, "A", 50.0),
        ]

    def test_csv_to_file(self, runner, probes, tmp_path):
        path = tmp_path / "ranked.csv"
        result = runner.invoke(main, ["--csv", "-q", "--no-update-check", "-o", str(path)])

        assert result.exit_code == 0
        lines = path.read_text().splitlines()
        assert len(lines) == 3

    def test_timeout_passed_through(self, runner, probes, monkeypatch):
        seen = {}
        import awslatency.engine

        original = awslatency.engine.run_batch

        async def spy(endpoints, prober, timeout, on_outcome=None):
            seen["timeout"] = timeout
            return await original(endpoints, prober, timeout=timeout, on_outcome=on_outcome)

        monkeypatch.setattr(awslatency.engine, "run_batch", spy)
        result = runner.invoke(main, ["-t", "2.5", "--no-update-check", "-q"])

        assert result.exit_code == 0
        assert seen["timeout"] == 2.5

    def test_probe_capability_unavailable(self, runner, probes, up_to_date):
        probes.fail_prepare = ProbeUnavailable("ICMP sockets are not available")
        result = runner.invoke(main, ["--method", "icmp"])

        assert result.exit_code == EXIT_FATAL
        assert "ICMP sockets are not available" in result.output
        assert "Total" not in result.output


class TestFatalPaths:
    def test_catalog_failure_aborts_before_probing(self, runner, probes, up_to_date, monkeypatch):
        def unavailable(self):
            raise CatalogUnavailable("Region directory request failed: boom")

        monkeypatch.setattr(IpRangesCatalog, "list_endpoints", unavailable)
        result = runner.invoke(main, ["--catalog", "dynamic"])

        assert result.exit_code == EXIT_FATAL
        assert "Region directory request failed" in result.output
        assert "Total" not in result.output
        assert probes.launched == []
        assert probes.prepare_calls == 0

    def test_unknown_catalog(self, runner, probes, up_to_date):
        result = runner.invoke(main, ["--catalog", "gcp"])

        assert result.exit_code == EXIT_FATAL
        assert "Unknown catalog" in result.output
        assert probes.launched == []

    def test_newer_version_exits_before_probing(self, runner, probes, monkeypatch):
        monkeypatch.setattr(awslatency.version, "check_for_update", lambda *a, **kw: "99.0.0")
        result = runner.invoke(main, [])

        assert result.exit_code == EXIT_UPDATE_AVAILABLE
        assert "99.0.0" in result.output
        assert probes.launched == []
        assert "Total" not in result.output

    def test_version_check_failure_is_not_fatal(self, runner, probes, monkeypatch):
        def failing(*args, **kwargs):
            raise VersionCheckFailure("registry unreachable")

        monkeypatch.setattr(awslatency.version, "check_for_update", failing)
        result = runner.invoke(main, ["-q"])

        assert result.exit_code == 0
        assert "Total 2 regions" in result.output

    def test_no_update_check_skips_registry(self, runner, probes, monkeypatch):
        monkeypatch.setattr(
            awslatency.version, "check_for_update", lambda *a, **kw: pytest.fail("checked")
        )
        result = runner.invoke(main, ["--no-update-check", "-q"])
        assert result.exit_code == 0

    def test_version_check_failure_shows_warning(self, runner, probes, monkeypatch):
        def failing(*args, **kwargs):
            raise VersionCheckFailure("registry unreachable")

        monkeypatch.setattr(awslatency.version, "check_for_update", failing)
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Failed to check for updates: registry unreachable" in result.output
        assert "Total 2 regions" in result.output


class TestInterrupt:
    def test_during_version_check(self, runner, probes, monkeypatch):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(awslatency.version, "check_for_update", interrupted)
        result = runner.invoke(main, [])

        assert result.exit_code == EXIT_INTERRUPTED
        assert "Interrupted." in result.output
        assert probes.launched == []

    def test_during_catalog_fetch(self, runner, probes, up_to_date, monkeypatch):
        def interrupted(self):
            raise KeyboardInterrupt

        monkeypatch.setattr(IpRangesCatalog, "list_endpoints", interrupted)
        result = runner.invoke(main, ["--catalog", "dynamic"])

        assert result.exit_code == EXIT_INTERRUPTED
        assert probes.launched == []
