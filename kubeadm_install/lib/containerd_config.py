from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, Optional

from ..errors import UnsupportedConfigError

logger = logging.getLogger(__name__)

SYSTEMD_CGROUP_MARKER = "SystemdCgroup = true"

_VERSION_RE = re.compile(r"^version = (.*)$", re.MULTILINE)


def config_version(text: str) -> Optional[int]:
    """Schema version of a containerd config.toml (first top-level `version = N`)."""

    m = _VERSION_RE.search(text)
    if not m:
        return None
    raw = m.group(1).strip().strip("'\"")
    try:
        return int(raw)
    except ValueError:
        return None


def _edit_v2(text: str, sandbox_image: str) -> str:
    text = re.sub(r"sandbox_image = .*", lambda _: f"sandbox_image = '{sandbox_image}'", text)
    return text.replace("SystemdCgroup = false", SYSTEMD_CGROUP_MARKER)


def _edit_v3(text: str, sandbox_image: str) -> str:
    text = re.sub(r"sandbox = .*", lambda _: f"sandbox = '{sandbox_image}'", text)
    # v3 defaults omit SystemdCgroup; add it next to each runc ShimCgroup option.
    return re.sub(
        r"^([ \t]*)ShimCgroup = .*$",
        lambda m: f"{m.group(0)}\n{m.group(1)}{SYSTEMD_CGROUP_MARKER}",
        text,
        flags=re.MULTILINE,
    )


EDITS_BY_VERSION: Dict[int, Callable[[str, str], str]] = {
    2: _edit_v2,
    3: _edit_v3,
}


def apply_cgroup_edits(text: str, sandbox_image: str) -> str:
    """Point the sandbox image at sandbox_image and enable the systemd cgroup driver."""

    version = config_version(text)
    edit = EDITS_BY_VERSION.get(version) if version is not None else None
    if edit is None:
        shown = "" if version is None else version
        raise UnsupportedConfigError(f"Unsupported containerd config version: {shown}.")
    logger.info("containerd config schema version %s", version)
    return edit(text, sandbox_image)


def has_systemd_cgroup(text: str) -> bool:
    return SYSTEMD_CGROUP_MARKER in text


def pick_sandbox_image(images: Iterable[str]) -> str:
    """Newest pause image from `kubeadm config images list` output."""

    pauses = sorted((i.strip() for i in images if "pause" in i), reverse=True)
    return pauses[0] if pauses else ""
