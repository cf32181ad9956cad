"""Rich table rendering for scan reports."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from report_builder import ReportRow
from signal_tiers import TIER_STYLES

SORT_ORDERS = ("signal", "ssid", "none")


def sort_rows(rows: Iterable[ReportRow], order: str = "signal") -> list[ReportRow]:
    if order == "signal":
        return sorted(rows, key=lambda row: row.signal_dbm, reverse=True)
    if order == "ssid":
        return sorted(rows, key=lambda row: row.ssid.lower())
    if order == "none":
        return list(rows)
    raise ValueError(f"order must be one of {', '.join(SORT_ORDERS)}")


def build_table(rows: Iterable[ReportRow]) -> Table:
    table = Table(title="Wireless Networks")
    table.add_column("", width=1)
    for col, style in [
        ("BSSID", "white"), ("SSID", "bold yellow"), ("Channel", "bold white"),
        ("Signal", "white"), ("Quality", None), ("Security", "blue"),
    ]:
        table.add_column(col, style=style)

    for row in rows:
        marker = Text("*", style="bold green blink") if row.is_current else Text("")
        table.add_row(
            marker,
            Text(row.mac),
            Text(row.ssid),
            Text(row.channel),
            Text(row.signal_level),
            Text(row.tier.label, style=TIER_STYLES[row.tier]),
            Text(row.security),
        )
    return table


def render_report(rows: list[ReportRow], console: Console) -> None:
    if not rows:
        console.print("[yellow]No wireless networks found.[/yellow]")
        return
    console.print(build_table(rows))
