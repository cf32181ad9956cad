"""Configuration management for ifwifi."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any, ClassVar, Literal

import yaml
from pydantic import BaseModel, Field


class PathsConfig(BaseModel):
    logs_file: Path = Path("ifwifi.log")


class LoggingConfig(BaseModel):
    verbose: bool = False


class DefaultsConfig(BaseModel):
    scan_timeout: int = Field(default=30, gt=0)
    nmcli_timeout: int = Field(default=15, gt=0)
    connect_timeout: int = Field(default=60, gt=0)


class ReportConfig(BaseModel):
    sort_by: Literal["signal", "ssid", "none"] = "signal"
    full_snapshot_scan: bool = False


class Config(BaseModel):
    interface: str = "wlan0"
    paths: PathsConfig = Field(default_factory=PathsConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _instance: ClassVar["Config | None"] = None
    _lock: ClassVar[Lock] = Lock()

    @classmethod
    def load(cls, path: str | Path = "ifwifi.yaml") -> "Config":
        if cls._instance is not None:
            return cls._instance
        with cls._lock:
            if cls._instance is not None:
                return cls._instance

            payload: dict[str, Any] = {}
            cfg_path = Path(path)
            if cfg_path.exists():
                payload = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}

            cls._instance = cls.model_validate(payload)
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None
