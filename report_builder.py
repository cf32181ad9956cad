"""Assemble per-network report rows from scan results and connection state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from connection_status import Snapshot, is_connected
from signal_tiers import SignalTier, classify


@dataclass(frozen=True)
class DiscoveredNetwork:
    mac_address: str
    ssid: str
    channel: str
    signal_level: str
    security: str = ""


@dataclass(frozen=True)
class ReportRow:
    is_current: bool
    mac: str
    ssid: str
    channel: str
    tier: SignalTier
    signal_level: str
    security: str
    signal_dbm: float = 0.0


def parse_signal_level(raw: object) -> float:
    """Parse a dBm reading, falling back to 0.0 for anything unparsable."""
    try:
        return float(str(raw))
    except ValueError:
        return 0.0


def build_row(network: DiscoveredNetwork, snapshot: Snapshot, scan_all: bool = False) -> ReportRow:
    signal = parse_signal_level(network.signal_level)
    return ReportRow(
        is_current=is_connected(snapshot, network.ssid, scan_all=scan_all),
        mac=network.mac_address,
        ssid=network.ssid,
        channel=str(network.channel),
        tier=classify(signal),
        signal_level=network.signal_level,
        security=network.security,
        signal_dbm=signal,
    )


def build_report(
    networks: Iterable[DiscoveredNetwork],
    snapshot: Snapshot,
    scan_all: bool = False,
) -> list[ReportRow]:
    snapshot = list(snapshot)
    return [build_row(network, snapshot, scan_all=scan_all) for network in networks]
