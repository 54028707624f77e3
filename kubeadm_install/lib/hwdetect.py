from __future__ import annotations

import logging
import platform

from ..errors import CommandError
from .command import run_cmd

logger = logging.getLogger(__name__)


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
        "ppc64le": "ppc64el",
        "s390x": "s390x",
    }.get(m, m)


def detect_arch() -> str:
    """Debian architecture name of this host (e.g. amd64).

    Asks dpkg first since download URLs follow Debian naming; falls back to
    the interpreter's machine type when dpkg is not installed.
    """

    try:
        r = run_cmd(["dpkg", "--print-architecture"], check=False)
    except CommandError:
        r = None

    if r is not None and r.returncode == 0 and r.stdout.strip():
        return r.stdout.strip()

    arch = normalize_arch(platform.machine())
    logger.warning("dpkg unavailable; using machine type %s", arch)
    return arch
