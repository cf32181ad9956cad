#!/usr/bin/env python3
"""A simple wrapper over the long and tedious nmcli, using iw for scanning."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from config import Config
from connection_status import NetworkManagerError, SnapshotSource, query_active_connections
from logging_setup import setup_logging
from privileges import PrivilegeError, PrivilegeStatus, check_privileges, require_root
from render import SORT_ORDERS, render_report, sort_rows
from report_builder import build_report
from wifi_connect import ConnectError, connect
from wifi_scan import ScanError, scan_networks

__version__ = "1.0.2"

EXIT_FAILURE = 1
EXIT_NOT_ROOT = 2

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("ifwifi.cli")


def build_parser(cfg: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ifwifi",
        description="A simple wrapper over the long and tedious nmcli.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default="ifwifi.yaml", help="Path to the YAML configuration file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=cfg.logging.verbose,
        help="Show debug messages on the console.",
    )
    subparsers = parser.add_subparsers(dest="command")

    scan = subparsers.add_parser("scan", help="Scan wireless network")
    scan.add_argument("-i", "--interface", default=cfg.interface, help="Wireless interface to scan with.")
    scan.add_argument(
        "--sort",
        choices=SORT_ORDERS,
        default=cfg.report.sort_by,
        help="Row order of the report.",
    )
    scan.add_argument(
        "--all-connections",
        action="store_true",
        default=cfg.report.full_snapshot_scan,
        help="Match the current network against every nmcli entry, not only the first.",
    )

    conn = subparsers.add_parser("connect", help="Connect to an Access Point")
    conn.add_argument("-s", "--ssid", required=True, help="SSID of wireless network.")
    conn.add_argument("-p", "--password", required=True, help="Password of the wireless network.")
    conn.add_argument(
        "-i", "--interface", default=cfg.interface, help="Wireless interface to connect through."
    )
    return parser


def _config_path(argv: Optional[Sequence[str]]) -> str:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default="ifwifi.yaml")
    known, _ = pre.parse_known_args(argv)
    return known.config


def run_scan(args: argparse.Namespace, cfg: Config, snapshot_source: Optional[SnapshotSource] = None) -> int:
    if snapshot_source is None:
        def snapshot_source():
            return query_active_connections(timeout=cfg.defaults.nmcli_timeout)

    networks = scan_networks(args.interface, timeout=cfg.defaults.scan_timeout)
    snapshot = snapshot_source()
    rows = build_report(networks, snapshot, scan_all=args.all_connections)
    logger.debug("Built %d report rows", len(rows))
    render_report(sort_rows(rows, args.sort), console)
    return 0


def run_connect(args: argparse.Namespace, cfg: Config) -> int:
    status = connect(args.ssid, args.password, args.interface, timeout=cfg.defaults.connect_timeout)
    console.print(f"Connection Status: {escape(status)}")
    return 0 if status == "connected" else EXIT_FAILURE


def run_cli(
    argv: Optional[Sequence[str]] = None,
    privileges: Optional[PrivilegeStatus] = None,
    snapshot_source: Optional[SnapshotSource] = None,
) -> int:
    cfg = Config.load(_config_path(argv))
    parser = build_parser(cfg)
    args = parser.parse_args(argv)
    setup_logging(cfg.paths.logs_file, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        require_root(privileges if privileges is not None else check_privileges())
    except PrivilegeError as exc:
        err_console.print(f"[bold red blink]{escape(str(exc))}[/bold red blink]")
        return EXIT_NOT_ROOT

    try:
        if args.command == "scan":
            return run_scan(args, cfg, snapshot_source)
        return run_connect(args, cfg)
    except (ScanError, NetworkManagerError, ConnectError, ValueError) as exc:
        err_console.print(f"[red]{args.command.capitalize()} failed:[/red] {escape(str(exc))}")
        logger.debug("%s failed", args.command, exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(run_cli())
