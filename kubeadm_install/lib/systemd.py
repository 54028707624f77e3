from __future__ import annotations

from .command import run_cmd


def daemon_reload(*, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "daemon-reload"], dry_run=dry_run)


def enable_now(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "enable", "--now", unit], dry_run=dry_run)


def start(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "start", unit], dry_run=dry_run)


def stop(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "stop", unit], dry_run=dry_run)


def restart(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "restart", unit], dry_run=dry_run)
