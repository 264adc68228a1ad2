"""CLI entry point and orchestration for awslatency."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from awslatency import __version__
from awslatency.config import (
    DEFAULT_CATALOG,
    DEFAULT_COUNT,
    DEFAULT_METHOD,
    DEFAULT_TIMEOUT,
    EXIT_FATAL,
    EXIT_INTERRUPTED,
    EXIT_UPDATE_AVAILABLE,
)
from awslatency.errors import ProbeUnavailable
from awslatency.models import EndpointDescriptor, ResultSet, RunConfig
from awslatency.probe import METHODS

logger = logging.getLogger(__name__)


@click.command()
@click.option("-t", "--timeout", default=DEFAULT_TIMEOUT, type=click.FloatRange(min=0, min_open=True),
              help="Per-probe timeout in seconds", show_default=True)
@click.option("-c", "--count", default=DEFAULT_COUNT, type=click.IntRange(min=1),
              help="Echo requests per region", show_default=True)
@click.option("--catalog", default=DEFAULT_CATALOG,
              help="Region catalog: 'static' table or 'dynamic' AWS ip-ranges", show_default=True)
@click.option("-m", "--method", default=DEFAULT_METHOD, type=click.Choice(METHODS),
              help="Probe method (auto falls back to TCP without ICMP permission)", show_default=True)
@click.option("--json", "json_output", is_flag=True, help="Output JSON to stdout")
@click.option("--csv", "csv_output", is_flag=True, help="Output CSV to stdout")
@click.option("-o", "--output", default=None, help="Write results to file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress live progress, show only results")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--no-update-check", is_flag=True, help="Skip the published-version check")
@click.version_option(version=__version__)
def main(
    timeout: float,
    count: int,
    catalog: str,
    method: str,
    json_output: bool,
    csv_output: bool,
    output: str | None,
    quiet: bool,
    verbose: bool,
    no_update_check: bool,
) -> None:
    """awslatency: AWS region latency ranking.

    Probes every AWS regional EC2 endpoint concurrently and lists the
    regions from lowest to highest round-trip time.
    """
    _configure_logging(verbose)

    config = RunConfig(
        timeout=timeout,
        count=count,
        catalog=catalog.strip().lower(),
        method=method,
        update_check=not no_update_check,
        quiet=quiet,
        verbose=verbose,
        json_output=json_output,
        csv_output=csv_output,
        output_file=output,
    )

    try:
        if config.update_check:
            _check_version(config)

        endpoints = _load_catalog(config)

        try:
            result = asyncio.run(_run(endpoints, config))
        except ProbeUnavailable as exc:
            from awslatency.display import render_error
            render_error(str(exc))
            sys.exit(EXIT_FATAL)
    except KeyboardInterrupt:
        if config.interactive:
            from awslatency.display import console
            console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)

    _handle_output(result, config)


def _configure_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _check_version(config: RunConfig) -> None:
    """Exit with EXIT_UPDATE_AVAILABLE when a newer release is published."""
    from awslatency.display import console, render_update_notice, render_warning
    from awslatency.errors import VersionCheckFailure
    from awslatency.version import check_for_update

    try:
        if config.interactive:
            with console.status("Checking for updates..."):
                latest = check_for_update()
        else:
            latest = check_for_update()
    except VersionCheckFailure as exc:
        logger.debug("Version check failed", exc_info=True)
        if config.interactive:
            render_warning(f"Failed to check for updates: {exc}")
        else:
            logger.warning("Failed to check for updates: %s", exc)
        return

    if latest is not None:
        render_update_notice(latest, __version__)
        sys.exit(EXIT_UPDATE_AVAILABLE)


def _load_catalog(config: RunConfig) -> list[EndpointDescriptor]:
    """Resolve the catalog source and enumerate its endpoints, or exit."""
    from awslatency.catalog import get_catalog, list_catalogs
    from awslatency.display import render_error
    from awslatency.errors import CatalogUnavailable

    available = list_catalogs()
    if config.catalog not in available:
        render_error(f"Unknown catalog: {config.catalog}. Available: {', '.join(available)}")
        sys.exit(EXIT_FATAL)

    source = get_catalog(config.catalog)
    try:
        endpoints = source.list_endpoints()
    except CatalogUnavailable as exc:
        render_error(str(exc))
        sys.exit(EXIT_FATAL)

    logger.debug("%s catalog: %d endpoints", source.name, len(endpoints))
    return endpoints


async def _run(endpoints: list[EndpointDescriptor], config: RunConfig) -> ResultSet:
    """Main async orchestration."""
    from awslatency.display import console, render_outcome
    from awslatency.engine import run_batch
    from awslatency.probe import select_prober

    prober = select_prober(config.method, config.count)

    if config.interactive:
        console.print(
            f"[bold]Probing {len(endpoints)} AWS regions ({prober.method})...[/bold]\n"
        )

    return await run_batch(
        endpoints,
        prober,
        timeout=config.timeout,
        on_outcome=render_outcome if config.interactive else None,
    )


def _handle_output(result: ResultSet, config: RunConfig) -> None:
    """Handle output rendering and export."""
    from awslatency.display import console, render_results
    from awslatency.export import export_csv, export_json, write_to_file

    # JSON output
    if config.json_output:
        json_str = export_json(result)
        if config.output_file:
            write_to_file(json_str, config.output_file)
            if not config.quiet:
                console.print(f"[dim]Results written to {config.output_file}[/dim]")
        else:
            click.echo(json_str)
        return

    # CSV output
    if config.csv_output:
        csv_str = export_csv(result)
        if config.output_file:
            write_to_file(csv_str, config.output_file)
            if not config.quiet:
                console.print(f"[dim]Results written to {config.output_file}[/dim]")
        else:
            click.echo(csv_str, nl=False)
        return

    # Rich terminal output
    render_results(result)

    if config.output_file:
        write_to_file(export_json(result), config.output_file)
        console.print(f"\n[dim]Results written to {config.output_file}[/dim]")


if __name__ == "__main__":
    main()
