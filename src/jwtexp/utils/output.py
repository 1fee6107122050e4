from __future__ import annotations

import json
from typing import Any, Literal

import yaml
from rich.console import Console
from rich.table import Table

from jwtexp.utils.serialization import to_plain_data

OutputFormat = Literal["json", "yaml", "table"]


def emit(value: Any, *, output: OutputFormat = "json", console: Console | None = None) -> None:
    """Render CLI output as json, yaml, or a key/value table."""

    plain = to_plain_data(value)
    if output == "json":
        print(json.dumps(plain, indent=2))
        return
    if output == "yaml":
        print(yaml.safe_dump(plain, sort_keys=False), end="")
        return

    console = console or Console()
    if isinstance(plain, dict):
        table = Table(show_header=True, header_style="bold")
        table.add_column("key")
        table.add_column("value")
        for key, val in plain.items():
            table.add_row(str(key), "" if val is None else str(val))
        console.print(table)
        return

    console.print(str(plain))
