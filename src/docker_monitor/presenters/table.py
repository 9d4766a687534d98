"""Rich table presenters for the stats view."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType

from rich.console import Console
from rich.live import Live
from rich.table import Table

from docker_monitor.core.constants import TABLE_HEADERS
from docker_monitor.core.schemas import MetricRow
from docker_monitor.presenters.base import Presenter

_COLUMN_STYLES = {
    "CONTAINER ID": "cyan",
    "NAME": "bold",
    "CPU %": "green",
    "MEM %": "magenta",
}


def build_table(rows: Sequence[MetricRow], title: str | None = None) -> Table:
    """Build the stats table for the given rows."""
    table = Table(title=title)
    for header in TABLE_HEADERS:
        justify = "left" if header in ("CONTAINER ID", "NAME") else "right"
        table.add_column(header, style=_COLUMN_STYLES.get(header, "white"), justify=justify)

    for row in rows:
        columns = row.to_display_dict()
        table.add_row(*(columns[header] for header in TABLE_HEADERS))

    if not rows:
        table.caption = "No running containers reported stats"
    return table


class TablePresenter(Presenter):
    """Prints one table per render call."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, rows: Sequence[MetricRow]) -> None:
        self._console.print(build_table(rows))


class LiveTablePresenter(Presenter):
    """Keeps a single table on screen and replaces it on every render.

    Must be used as a context manager so the live display is started and
    stopped around the refresh loop.

    Example:
        ```python
        with LiveTablePresenter(console) as presenter:
            orchestrator = CollectionOrchestrator(inventory, source, presenter, config)
            orchestrator.run_forever(interval=2.0)
        ```
    """

    def __init__(self, console: Console | None = None, refresh_per_second: float = 4.0) -> None:
        self._console = console or Console()
        self._live = Live(
            build_table([]),
            console=self._console,
            refresh_per_second=refresh_per_second,
            transient=False,
        )

    def __enter__(self) -> LiveTablePresenter:
        self._live.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._live.stop()

    def render(self, rows: Sequence[MetricRow]) -> None:
        self._live.update(build_table(rows), refresh=True)
