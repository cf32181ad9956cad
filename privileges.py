"""Root privilege detection for scan and connect."""

from __future__ import annotations

import getpass
import os
from dataclasses import dataclass


class PrivilegeError(RuntimeError):
    """Raised when an operation needs root and the process is not root."""


@dataclass(frozen=True)
class PrivilegeStatus:
    is_root: bool
    user: str


def check_privileges() -> PrivilegeStatus:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    return PrivilegeStatus(is_root=os.geteuid() == 0, user=user)


def require_root(status: PrivilegeStatus) -> None:
    if not status.is_root:
        raise PrivilegeError(f"You must be root! (running as {status.user})")
