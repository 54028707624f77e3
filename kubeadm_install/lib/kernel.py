from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from .assets import write_file
from .command import run_cmd

logger = logging.getLogger(__name__)


def render_modules_load(modules: Sequence[str]) -> str:
    return "".join(f"{m}\n" for m in modules)


def render_sysctl(params: Mapping[str, str]) -> str:
    width = max((len(k) for k in params), default=0)
    return "".join(f"{k.ljust(width)} = {v}\n" for k, v in params.items())


def load_modules(conf: Path, modules: Sequence[str], *, dry_run: bool = False) -> None:
    """Persist modules for autoload at boot and load them now."""

    write_file(conf, render_modules_load(modules), dry_run=dry_run)
    for m in modules:
        run_cmd(["modprobe", m], dry_run=dry_run)


def apply_sysctl(conf: Path, params: Mapping[str, str], *, dry_run: bool = False) -> None:
    write_file(conf, render_sysctl(params), dry_run=dry_run)
    run_cmd(["sysctl", "--system"], dry_run=dry_run)
