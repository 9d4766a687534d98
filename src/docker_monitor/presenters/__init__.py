"""Presenters module - Rendering of collected rows."""

from __future__ import annotations

from rich.console import Console

from docker_monitor.core.schemas import OutputFormat
from docker_monitor.presenters.base import Presenter
from docker_monitor.presenters.export import CsvPresenter, JsonPresenter
from docker_monitor.presenters.table import LiveTablePresenter, TablePresenter, build_table


def create_presenter(output_format: OutputFormat, console: Console | None = None) -> Presenter:
    """Return the single-shot presenter for an output format."""
    if output_format == OutputFormat.JSON:
        return JsonPresenter(console)
    if output_format == OutputFormat.CSV:
        return CsvPresenter(console)
    return TablePresenter(console)


__all__ = [
    "build_table",
    "create_presenter",
    "CsvPresenter",
    "JsonPresenter",
    "LiveTablePresenter",
    "Presenter",
    "TablePresenter",
]
