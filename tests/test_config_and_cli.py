import logging
from pathlib import Path

import pytest
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

import main_cli
import privileges
from config import Config
from connection_status import NetworkManagerError
from privileges import PrivilegeError, PrivilegeStatus, check_privileges, require_root
from process_utils import CommandResult, run_command
from render import build_table, render_report, sort_rows
from report_builder import DiscoveredNetwork, build_report
from wifi_connect import ConnectError
from wifi_scan import ScanError

ROOT = PrivilegeStatus(is_root=True, user="root")
USER = PrivilegeStatus(is_root=False, user="alice")


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Config.reset()
    logger = logging.getLogger("ifwifi")
    saved = list(logger.handlers)
    logger.handlers.clear()
    console = Console(record=True, width=140)
    err_console = Console(record=True, width=140)
    monkeypatch.setattr(main_cli, "console", console)
    monkeypatch.setattr(main_cli, "err_console", err_console)
    yield console, err_console
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved
    Config.reset()


def test_config_loads_yaml(tmp_path: Path):
    cfg_file = tmp_path / "ifwifi.yaml"
    cfg_file.write_text("interface: wlp3s0\ndefaults:\n  scan_timeout: 22\nreport:\n  sort_by: ssid\n")
    cfg = Config.load(cfg_file)
    assert cfg.interface == "wlp3s0"
    assert cfg.defaults.scan_timeout == 22
    assert cfg.defaults.nmcli_timeout == 15
    assert cfg.report.sort_by == "ssid"
    assert cfg.report.full_snapshot_scan is False


def test_config_defaults_and_validation(tmp_path: Path):
    assert Config.load(tmp_path / "missing.yaml").interface == "wlan0"
    Config.reset()
    bad = tmp_path / "bad.yaml"
    bad.write_text("report:\n  sort_by: loudness\n")
    with pytest.raises(ValidationError):
        Config.load(bad)


def test_require_root():
    require_root(ROOT)
    with pytest.raises(PrivilegeError, match="You must be root"):
        require_root(USER)


def test_run_command_missing_tool():
    from process_utils import CommandExecutionError

    with pytest.raises(CommandExecutionError, match="not found"):
        run_command(["definitely-not-a-real-ifwifi-tool"])


def test_sort_rows_and_table():
    rows = build_report(
        [
            DiscoveredNetwork("aa", "beta", "1", "-70", "Open"),
            DiscoveredNetwork("bb", "Alpha", "6", "-40", "WPA2"),
            DiscoveredNetwork("cc", "gamma", "11", "-70", "WPA2"),
        ],
        [("yes", "Alpha")],
    )
    assert [r.mac for r in sort_rows(rows, "signal")] == ["bb", "aa", "cc"]
    assert [r.ssid for r in sort_rows(rows, "ssid")] == ["Alpha", "beta", "gamma"]
    assert sort_rows(rows, "none") == rows
    with pytest.raises(ValueError):
        sort_rows(rows, "channel")
    table = build_table(rows)
    assert table.row_count == 3
    assert [c.header for c in table.columns][1:] == ["BSSID", "SSID", "Channel", "Signal", "Quality", "Security"]


def test_cli_without_root_exits_2(isolated, monkeypatch):
    _console, err_console = isolated
    monkeypatch.setattr(main_cli, "scan_networks", lambda *a, **k: pytest.fail("scan must not run"))
    assert main_cli.run_cli(["scan"], privileges=USER) == 2
    assert "You must be root" in err_console.export_text()


def test_cli_without_command_prints_help(capsys):
    assert main_cli.run_cli([], privileges=USER) == 0
    assert "usage: ifwifi" in capsys.readouterr().out


def test_cli_scan_renders_current_network(isolated, monkeypatch):
    console, _err = isolated
    seen = {}

    def fake_scan(interface, timeout=None):
        seen["interface"] = interface
        return [
            DiscoveredNetwork("00:11:22:33:44:55", "home", "6", "-45.00", "WPA2"),
            DiscoveredNetwork("66:77:88:99:aa:bb", "office", "11", "-85.00", "Open"),
        ]

    monkeypatch.setattr(main_cli, "scan_networks", fake_scan)
    monkeypatch.setattr(
        main_cli,
        "query_active_connections",
        lambda timeout=None: [("yes", "home"), ("no", "office")],
    )

    assert main_cli.run_cli(["scan", "-i", "wlan5"], privileges=ROOT) == 0
    out = console.export_text()
    assert seen["interface"] == "wlan5"
    assert "*" in out and "Excellent" in out and "Bad" in out
    assert out.index("home") < out.index("office")


def test_cli_scan_failure_exits_1(isolated, monkeypatch):
    _console, err_console = isolated

    def broken(interface, timeout=None):
        raise ScanError("Cannot scan network on wlan0")

    monkeypatch.setattr(main_cli, "scan_networks", broken)
    assert main_cli.run_cli(["scan"], privileges=ROOT) == 1
    assert "Scan failed" in err_console.export_text()


def test_cli_connect(isolated, monkeypatch):
    console, _err = isolated
    seen = {}

    def fake_connect(ssid, password, interface, timeout=None):
        seen.update(ssid=ssid, password=password, interface=interface)
        return "connected"

    monkeypatch.setattr(main_cli, "connect", fake_connect)
    assert main_cli.run_cli(["connect", "-s", "home", "-p", "secret"], privileges=ROOT) == 0
    assert seen == {"ssid": "home", "password": "secret", "interface": "wlan0"}
    assert "Connection Status: connected" in console.export_text()

    monkeypatch.setattr(main_cli, "connect", lambda *a, **k: "failed: Secrets were required.")
    assert main_cli.run_cli(["connect", "-s", "home", "-p", "bad", "-i", "wlan1"], privileges=ROOT) == 1


def test_table_keeps_bracketed_ssids_literal():
    rows = build_report(
        [
            DiscoveredNetwork("aa:bb:cc:dd:ee:ff", "evil[/x]", "6", "-40", "WPA2"),
            DiscoveredNetwork("11:22:33:44:55:66", "[bold]free", "1", "-60", "[Open]"),
        ],
        [],
    )
    console = Console(record=True, width=140)
    render_report(rows, console)
    out = console.export_text()
    assert "evil[/x]" in out
    assert "[bold]free" in out
    assert "[Open]" in out


def test_cli_scan_with_bracketed_ssid(isolated, monkeypatch):
    console, _err = isolated
    monkeypatch.setattr(
        main_cli,
        "scan_networks",
        lambda interface, timeout=None: [DiscoveredNetwork("00:11:22:33:44:55", "x[/y]", "6", "-45", "WPA2")],
    )
    assert main_cli.run_cli(["scan"], privileges=ROOT, snapshot_source=lambda: [("yes", "x[/y]")]) == 0
    out = console.export_text()
    assert "x[/y]" in out and "*" in out


def test_cli_scan_uses_injected_snapshot_source(isolated, monkeypatch):
    console, _err = isolated
    monkeypatch.setattr(
        main_cli,
        "scan_networks",
        lambda interface, timeout=None: [DiscoveredNetwork("00:11:22:33:44:55", "home", "6", "-45", "WPA2")],
    )
    monkeypatch.setattr(main_cli, "query_active_connections", lambda timeout=None: pytest.fail("nmcli must not run"))
    calls = []

    def source():
        calls.append(True)
        return [("yes", "home")]

    assert main_cli.run_cli(["scan"], privileges=ROOT, snapshot_source=source) == 0
    assert calls == [True]
    assert "*" in console.export_text()


def test_cli_scan_fails_fast_without_network_manager(isolated, monkeypatch):
    console, err_console = isolated
    monkeypatch.setattr(
        main_cli,
        "scan_networks",
        lambda interface, timeout=None: [DiscoveredNetwork("00:11:22:33:44:55", "home", "6", "-45", "WPA2")],
    )

    def broken(timeout=None):
        raise NetworkManagerError("Failed to run nmcli: nmcli not found in PATH.")

    monkeypatch.setattr(main_cli, "query_active_connections", broken)
    assert main_cli.run_cli(["scan"], privileges=ROOT) == 1
    assert "Scan failed" in err_console.export_text()
    assert "nmcli not found" in err_console.export_text()
    assert "home" not in console.export_text()


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (ConnectError("nmcli not found in PATH."), "nmcli not found"),
        (ValueError("SSID must not be empty"), "SSID must not be empty"),
    ],
)
def test_cli_connect_failures_exit_1(isolated, monkeypatch, error, message):
    _console, err_console = isolated

    def broken(*_args, **_kwargs):
        raise error

    monkeypatch.setattr(main_cli, "connect", broken)
    assert main_cli.run_cli(["connect", "-s", "home", "-p", "secret"], privileges=ROOT) == 1
    text = err_console.export_text()
    assert "Connect failed" in text and message in text


def test_check_privileges_uses_effective_uid(monkeypatch):
    monkeypatch.setattr(privileges.os, "geteuid", lambda: 0)
    assert check_privileges().is_root is True
    monkeypatch.setattr(privileges.os, "geteuid", lambda: 1000)
    status = check_privileges()
    assert status.is_root is False
    with pytest.raises(PrivilegeError):
        require_root(status)


def test_verbose_flag_lowers_console_level(monkeypatch):
    monkeypatch.setattr(main_cli, "connect", lambda *a, **k: "connected")
    assert main_cli.run_cli(["-v", "connect", "-s", "home", "-p", "secret"], privileges=ROOT) == 0
    handlers = [h for h in logging.getLogger("ifwifi").handlers if isinstance(h, RichHandler)]
    assert handlers and handlers[0].level == logging.DEBUG

    assert main_cli.run_cli(["connect", "-s", "home", "-p", "secret"], privileges=ROOT) == 0
    assert handlers[0].level == logging.INFO


def test_config_enables_verbose_logging(tmp_path: Path):
    cfg_file = tmp_path / "ifwifi.yaml"
    cfg_file.write_text("logging:\n  verbose: true\n")
    assert Config.load(cfg_file).logging.verbose is True
