"""Machine-readable presenters (JSON and CSV)."""

from __future__ import annotations

import json
from collections.abc import Sequence

import pandas as pd
from rich.console import Console

from docker_monitor.core.schemas import MetricRow
from docker_monitor.presenters.base import Presenter


class JsonPresenter(Presenter):
    """Writes rows as a JSON array with numeric percentages."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, rows: Sequence[MetricRow]) -> None:
        data = [row.model_dump() for row in rows]
        self._console.out(json.dumps(data, indent=2), highlight=False)


class CsvPresenter(Presenter):
    """Writes rows as CSV with one column per MetricRow field."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, rows: Sequence[MetricRow]) -> None:
        df = pd.DataFrame([row.model_dump() for row in rows], columns=list(MetricRow.model_fields))
        self._console.out(df.to_csv(index=False), highlight=False, end="")
