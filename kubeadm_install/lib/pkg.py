from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .assets import write_file
from .command import run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update"], env=APT_ENV, dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["apt-get", "install", "-y", *packages], env=APT_ENV, dry_run=dry_run)


def apt_mark_hold(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["apt-mark", "hold", *packages], dry_run=dry_run)


def write_apt_source(list_path: Path, line: str, *, dry_run: bool = False) -> None:
    write_file(list_path, line.rstrip("\n") + "\n", dry_run=dry_run)
    logger.info("Configured apt source: %s", line.strip())


def install_apt_key(armored_key: str, keyring: Path, *, dry_run: bool = False) -> None:
    """Dearmor an ASCII-armored signing key into keyring."""

    if not dry_run:
        keyring.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(
        ["gpg", "--batch", "--yes", "--dearmor", "-o", str(keyring)],
        input_text=armored_key,
        dry_run=dry_run,
    )
