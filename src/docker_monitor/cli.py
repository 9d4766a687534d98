"""CLI for docker-monitor.

Provides a rich command-line interface using Typer for:
- Printing a one-shot stats table of all running containers
- Keeping a live, refreshing stats table on screen
- Generating a sample configuration file
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from docker_monitor.core.config import load_config
from docker_monitor.core.errors import DockerConnectionError, InventoryError
from docker_monitor.core.schemas import MonitorConfig, OutputFormat
from docker_monitor.monitoring.docker_source import (
    DockerInventory,
    DockerMetricsSource,
    connect_docker,
)
from docker_monitor.orchestrator import CollectionOrchestrator
from docker_monitor.presenters import LiveTablePresenter, create_presenter
from docker_monitor.utils.logging import setup_logging

app = typer.Typer(
    name="docker-monitor",
    help="Resource usage of running Docker containers",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


@app.command()
def stats(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to monitor configuration file (YAML/JSON)"
    ),
    watch: bool | None = typer.Option(
        None, "--watch/--once", help="Keep refreshing the table instead of printing it once"
    ),
    interval: float | None = typer.Option(
        None, "--interval", "-i", help="Seconds between refreshes in watch mode"
    ),
    output_format: OutputFormat | None = typer.Option(
        None, "--format", "-f", help="Output format: table, json, csv"
    ),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Concurrent collectors"),
    samples: int | None = typer.Option(
        None, "--samples", help="Snapshots read per container per cycle"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Max seconds to wait for each container snapshot"
    ),
    emit_first_sample: bool = typer.Option(
        False, "--emit-first-sample", help="Also show a row computed from the very first snapshot"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to console"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format (for programmatic parsing)"
    ),
) -> None:
    """Show CPU, memory, block I/O and PIDs of every running container."""
    setup_logging(
        level=log_level, log_file=log_file, json_format=json_logs, rich_console=not json_logs
    )

    overrides: dict[str, Any] = {
        "watch": watch,
        "refresh_interval_seconds": interval,
        "output_format": output_format,
        "max_workers": workers,
        "samples_per_cycle": samples,
        "read_timeout_seconds": timeout,
        "emit_first_sample": True if emit_first_sample else None,
    }

    try:
        monitor_config = _resolve_config(config, overrides)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[bold red]Error loading config: {e}[/]")
        raise typer.Exit(1) from e

    try:
        client = connect_docker(monitor_config)
    except DockerConnectionError as e:
        err_console.print(f"[bold red]{e}[/]")
        raise typer.Exit(1) from e

    inventory = DockerInventory(client)
    source = DockerMetricsSource(client)

    try:
        if monitor_config.watch:
            _watch(inventory, source, monitor_config)
        else:
            presenter = create_presenter(monitor_config.output_format, console)
            CollectionOrchestrator(inventory, source, presenter, monitor_config).run_once()
    except InventoryError as e:
        err_console.print(f"[bold red]{e}[/]")
        raise typer.Exit(1) from e
    finally:
        client.close()


@app.command()
def init_config(
    output: Path = typer.Option(
        Path("docker-monitor.yaml"), "--output", "-o", help="Output configuration file"
    ),
) -> None:
    """Generate a sample configuration file."""
    sample_config = """\
# docker-monitor configuration

# Docker daemon URL (omit to use DOCKER_HOST / the local socket)
# docker_base_url: "unix:///var/run/docker.sock"

# Socket timeout of the Docker client (seconds)
client_timeout_seconds: 30

# Max wait for each container snapshot before its collector stops (seconds)
read_timeout_seconds: 5.0

# Snapshots read per container per cycle (the first one is the CPU baseline)
samples_per_cycle: 2

# Containers collected concurrently
max_workers: 16

# Show a row for the very first snapshot, computed against a zero baseline
emit_first_sample: false

# Refresh mode
watch: false
refresh_interval_seconds: 2.0

# Output format: table, json, csv
output_format: table
"""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(sample_config)
    console.print(f"[bold green]Sample configuration written to {output}[/]")


def _resolve_config(path: Path | None, overrides: dict[str, Any]) -> MonitorConfig:
    """Load the config file (if any) and apply CLI overrides on top."""
    base = load_config(path) if path is not None else MonitorConfig()
    data = base.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return MonitorConfig.model_validate(data)


def _watch(
    inventory: DockerInventory, source: DockerMetricsSource, config: MonitorConfig
) -> None:
    """Run the refresh loop until interrupted with Ctrl-C."""
    try:
        if config.output_format == OutputFormat.TABLE:
            with LiveTablePresenter(console) as presenter:
                CollectionOrchestrator(inventory, source, presenter, config).run_forever()
        else:
            presenter = create_presenter(config.output_format, console)
            CollectionOrchestrator(inventory, source, presenter, config).run_forever()
    except KeyboardInterrupt:
        console.print("[dim]Stopped[/]")


if __name__ == "__main__":
    app()
