"""Output rendering for command results.

Records are rendered either as a rich table (``pretty``) or as pretty-printed
JSON (``json``) on stdout.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from indexify_cli.api.models import Record
from indexify_cli.cli.console import get_console
from indexify_cli.core.serde import to_jsonable


class Format(str, Enum):
    """Output format selected with --output."""

    PRETTY = "pretty"
    JSON = "json"

    def list(
        self, records: Sequence[Record], console: Optional[Console] = None
    ) -> None:
        """Render a collection of records."""
        console = console or get_console()
        if self is Format.JSON:
            _print_json(console, [to_jsonable(r) for r in records])
            return

        console.print(build_table(records))

    def item(self, record: Record, console: Optional[Console] = None) -> None:
        """Render a single record."""
        console = console or get_console()
        if self is Format.JSON:
            _print_json(console, to_jsonable(record))
            return

        console.print(build_table([record]))


def build_table(records: Sequence[Record]) -> Table:
    """Build a table with one row per record.

    Columns come from the records' ``table_columns``; an empty collection
    renders an empty table without headers.
    """
    table = Table(box=box.ROUNDED, show_lines=True)
    if not records:
        return table

    for column in records[0].table_columns:
        table.add_column(column, overflow="fold")
    for record in records:
        table.add_row(*record.table_row())
    return table


def _print_json(console: Console, data: object) -> None:
    console.print(
        json.dumps(data, indent=2, ensure_ascii=False),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
