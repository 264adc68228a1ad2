"""Rich terminal output for awslatency."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from awslatency.config import FAST_THRESHOLD_MS, MEDIUM_THRESHOLD_MS, PACKAGE_NAME
from awslatency.models import EndpointDescriptor, ProbeOutcome, ResultSet

console = Console()


def _color_for_ms(value: float) -> str:
    """Return a Rich color name based on latency thresholds."""
    if value <= FAST_THRESHOLD_MS:
        return "green"
    elif value <= MEDIUM_THRESHOLD_MS:
        return "yellow"
    return "red"


def _fmt_ms(value: float, colorize: bool = True) -> Text:
    """Format a millisecond value with optional color."""
    text = f"{value:.2f}ms"
    if colorize:
        return Text(text, style=_color_for_ms(value))
    return Text(text)


# ── Live progress ─────────────────────────────────────────────────────


def render_outcome(endpoint: EndpointDescriptor, outcome: ProbeOutcome) -> None:
    """Print one line as a probe completes."""
    line = Text()
    line.append(endpoint.region, style="yellow")
    line.append(f" {endpoint.address} ")
    if outcome.usable:
        line.append(outcome.describe(), style="green")
    else:
        line.append(outcome.describe(), style="red")
    console.print(line)


# ── Ranked results ────────────────────────────────────────────────────


def build_results_table(result: ResultSet) -> Table:
    """Build the ranked latency table."""
    table = Table(
        show_header=True,
        border_style="bright_black",
        expand=False,
        header_style="bold green",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Region", style="bold", min_width=12)
    table.add_column("Latency", justify="right", min_width=9)
    show_loss = result.has_packet_loss
    if show_loss:
        table.add_column("Loss", justify="right")

    for entry in result.entries:
        row = [str(entry.rank), entry.display_label, _fmt_ms(entry.rtt_ms)]
        if show_loss:
            loss = f"{entry.packet_loss * 100:.0f}%"
            row.append(Text(loss, style="red" if entry.packet_loss else "dim"))
        table.add_row(*row)

    return table


def render_results(result: ResultSet) -> None:
    """Render the ranked table followed by the summary line."""
    if result.entries:
        console.print()
        console.print(build_results_table(result))

    summary = Text(f"Total {len(result.entries)} regions", style="yellow")
    if result.failed:
        summary.append(f"  ({len(result.failed)} not reachable)", style="dim")
    console.print(summary)


# ── Notices ───────────────────────────────────────────────────────────


def render_update_notice(latest: str, current: str) -> None:
    """Tell the user a newer release is published."""
    console.print(
        f"[yellow]Version [bold green]{latest}[/bold green] is available. "
        f"Your version is [bold red]{current}[/bold red][/yellow]"
    )
    console.print(
        f"[yellow]Please update by running: "
        f"[bold green]pip install -U {PACKAGE_NAME}[/bold green][/yellow]\n"
    )


def render_error(message: str) -> None:
    """Display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def render_warning(message: str) -> None:
    """Display a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")
