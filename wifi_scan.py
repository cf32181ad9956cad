#!/usr/bin/env python3
"""Discover nearby access points with ``iw dev <interface> scan``."""

from __future__ import annotations

import logging
import re
from typing import List

from process_utils import CommandExecutionError, Runner, run_command
from report_builder import DiscoveredNetwork

logger = logging.getLogger("ifwifi.wifi_scan")

_BSS_RE = re.compile(r"^BSS\s+([0-9A-Fa-f:]{17})")


class ScanError(RuntimeError):
    """Raised when the wireless scan cannot be performed."""


def list_wireless_interfaces(run: Runner = run_command) -> List[str]:
    """Return wireless interface names reported by ``iw dev``."""
    try:
        result = run(["iw", "dev"], timeout=10)
    except CommandExecutionError as exc:
        raise ScanError(str(exc)) from exc
    if result.returncode != 0:
        raise ScanError(f"Failed to list wireless interfaces:\n{result.output}")

    interfaces: List[str] = []
    for line in result.stdout.splitlines():
        stripped = line.strip()
        if stripped.startswith("Interface "):
            interfaces.append(stripped.split()[1])
    return sorted(set(interfaces))


class _Record:
    def __init__(self, mac: str) -> None:
        self.mac = mac
        self.ssid = ""
        self.signal = ""
        self.channel = ""
        self.privacy = False
        self.protocols: List[str] = []
        self.in_rsn = False
        self.sae = False
        self.rsn_psk = False

    def security(self) -> str:
        protocols = list(self.protocols)
        if self.sae and "WPA2" in protocols:
            protocols[protocols.index("WPA2")] = "WPA2/WPA3" if self.rsn_psk else "WPA3"
        if protocols:
            return "/".join(protocols)
        return "WEP" if self.privacy else "Open"

    def to_network(self) -> DiscoveredNetwork:
        return DiscoveredNetwork(
            mac_address=self.mac,
            ssid=self.ssid,
            channel=self.channel or "N/A",
            signal_level=self.signal,
            security=self.security(),
        )


def parse_iw_scan(text: str) -> List[DiscoveredNetwork]:
    """Parse ``iw dev <iface> scan`` output into discovered networks."""
    records: List[_Record] = []
    current: _Record | None = None

    for raw in text.splitlines():
        match = _BSS_RE.match(raw)
        if match:
            current = _Record(match.group(1).lower())
            records.append(current)
            continue
        if current is None:
            continue

        line = raw.strip()
        if line.startswith("SSID:"):
            current.ssid = line[len("SSID:"):].strip()
        elif line.startswith("signal:"):
            current.signal = line[len("signal:"):].replace("dBm", "").strip()
        elif line.startswith("DS Parameter set: channel"):
            current.channel = line.rsplit(" ", 1)[-1]
        elif line.startswith("* primary channel:") and not current.channel:
            current.channel = line.rsplit(" ", 1)[-1]
        elif line.startswith("capability:"):
            current.privacy = "Privacy" in line.split()
        elif line.startswith("RSN:"):
            current.in_rsn = True
            current.protocols.append("WPA2")
        elif line.startswith("WPA:"):
            current.in_rsn = False
            current.protocols.insert(0, "WPA")
        elif line.startswith("* Authentication suites:") and current.in_rsn:
            suites = line.split()
            current.sae = "SAE" in suites
            current.rsn_psk = "PSK" in suites

    return [record.to_network() for record in records]


def scan_networks(interface: str, run: Runner = run_command, timeout: int | None = 30) -> List[DiscoveredNetwork]:
    """Scan for nearby networks on ``interface``. Requires root."""
    try:
        result = run(["iw", "dev", interface, "scan"], timeout=timeout)
    except CommandExecutionError as exc:
        raise ScanError(str(exc)) from exc
    if result.returncode != 0:
        raise ScanError(f"Cannot scan network on {interface}:\n{result.output}")

    networks = parse_iw_scan(result.stdout)
    logger.debug("iw reported %d access points on %s", len(networks), interface)
    return networks
