"""Resolve whether a network is the one NetworkManager reports as active."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, NamedTuple, Sequence

from process_utils import CommandExecutionError, Runner, run_command

logger = logging.getLogger("ifwifi.connection_status")

NMCLI_ACTIVE_QUERY = ["nmcli", "-t", "-f", "active,ssid", "dev", "wifi"]


class NetworkManagerError(RuntimeError):
    """Raised when nmcli cannot be queried for the active connection."""


class ActiveConnection(NamedTuple):
    active: bool
    ssid: str


Snapshot = Sequence[ActiveConnection]
SnapshotSource = Callable[[], Snapshot]


def _is_active(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "yes"
    return bool(value)


def parse_snapshot(text: str) -> list[ActiveConnection]:
    """Parse ``nmcli -t -f active,ssid`` output into active/SSID pairs.

    Blank lines are kept as inactive entries so a leading blank line still
    occupies the first slot.
    """
    snapshot: list[ActiveConnection] = []
    for raw in text.splitlines():
        line = raw.strip()
        active, _, ssid = line.partition(":")
        snapshot.append(ActiveConnection(_is_active(active), ssid.replace("\\:", ":")))
    return snapshot


def is_connected(snapshot: Iterable[tuple[object, str]], target_ssid: str, scan_all: bool = False) -> bool:
    """Return True when ``target_ssid`` is the active connection.

    nmcli lists the active network first, so only the first entry is
    consulted unless ``scan_all`` is set.
    """
    for active, ssid in snapshot:
        if _is_active(active) and ssid == target_ssid:
            return True
        if not scan_all:
            return False
    return False


def query_active_connections(run: Runner = run_command, timeout: int | None = 15) -> list[ActiveConnection]:
    """Capture a fresh snapshot from NetworkManager."""
    try:
        result = run(NMCLI_ACTIVE_QUERY, timeout=timeout)
    except CommandExecutionError as exc:
        raise NetworkManagerError(f"Failed to run nmcli: {exc}") from exc
    if result.returncode != 0:
        raise NetworkManagerError(f"nmcli exited with status {result.returncode}:\n{result.output}")

    snapshot = parse_snapshot(result.stdout)
    logger.debug("nmcli reported %d known networks", len(snapshot))
    return snapshot
