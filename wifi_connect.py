#!/usr/bin/env python3
"""Associate with an access point through NetworkManager."""

from __future__ import annotations

import logging

from process_utils import CommandExecutionError, Runner, run_command

logger = logging.getLogger("ifwifi.wifi_connect")


class ConnectError(RuntimeError):
    """Raised when nmcli cannot be invoked to connect."""


def connect(
    ssid: str,
    password: str,
    interface: str = "wlan0",
    run: Runner = run_command,
    timeout: int | None = 60,
) -> str:
    """Connect ``interface`` to ``ssid`` and return a status string.

    Returns ``"connected"`` on success, ``"failed: <reason>"`` when nmcli
    rejects the association.
    """
    if not ssid:
        raise ValueError("SSID must not be empty")

    cmd = ["nmcli", "dev", "wifi", "connect", ssid]
    if password:
        cmd += ["password", password]
    cmd += ["ifname", interface]

    logger.debug("Connecting %s to %s", interface, ssid)
    try:
        result = run(cmd, timeout=timeout)
    except CommandExecutionError as exc:
        raise ConnectError(str(exc)) from exc

    if result.returncode == 0:
        logger.info("Connected %s to %s", interface, ssid)
        return "connected"

    reason = result.output or f"nmcli exited with status {result.returncode}"
    logger.warning("Connection to %s failed: %s", ssid, reason)
    return f"failed: {reason}"
