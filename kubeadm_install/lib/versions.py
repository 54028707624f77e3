from __future__ import annotations

import logging
from typing import Optional

from ..config import ComponentVersions
from ..errors import DownloadError, VersionResolutionError
from .components import CNI_PLUGINS, CONTAINERD, RUNC
from .http import get_json, get_text

logger = logging.getLogger(__name__)

GITHUB_LATEST_RELEASE = "https://api.github.com/repos/{repo}/releases/latest"
K8S_STABLE_URL = "https://dl.k8s.io/release/stable.txt"


def normalize_version(version: str) -> str:
    v = version.strip()
    return v[1:] if v.startswith("v") else v


def get_latest_version(repo: str) -> str:
    """Latest release tag of a GitHub repository, without the leading 'v'."""

    url = GITHUB_LATEST_RELEASE.format(repo=repo)
    try:
        data = get_json(url)
    except DownloadError as e:
        raise VersionResolutionError(
            f"Could not fetch the latest version for {repo}. "
            "Please check repository name or network connection."
        ) from e

    tag = data.get("tag_name") if isinstance(data, dict) else None
    version = normalize_version(str(tag or ""))
    if not version:
        raise VersionResolutionError(
            f"Could not fetch the latest version for {repo}. "
            "Please check repository name or network connection."
        )
    return version


def get_latest_k8s_version() -> str:
    """Latest stable Kubernetes release truncated to major.minor."""

    try:
        text = get_text(K8S_STABLE_URL)
    except DownloadError as e:
        raise VersionResolutionError(
            "Could not fetch the latest stable Kubernetes version. Please check network connection."
        ) from e

    # The apt repository is keyed by minor version; the patch level is dropped.
    version = ".".join(normalize_version(text).split(".")[:2])
    if not version:
        raise VersionResolutionError(
            "Could not fetch the latest stable Kubernetes version. Please check network connection."
        )
    return version


def resolve_versions(
    *,
    containerd: Optional[str] = None,
    runc: Optional[str] = None,
    cni_plugins: Optional[str] = None,
    kubernetes: Optional[str] = None,
) -> ComponentVersions:
    """Fill every unset version from upstream, querying each at most once."""

    def _pick(given: Optional[str], lookup, *args: str) -> str:
        # A bare "v" normalizes to nothing and is treated as unset.
        version = normalize_version(given or "")
        return version or lookup(*args)

    return ComponentVersions(
        containerd=_pick(containerd, get_latest_version, CONTAINERD.repo),
        runc=_pick(runc, get_latest_version, RUNC.repo),
        cni_plugins=_pick(cni_plugins, get_latest_version, CNI_PLUGINS.repo),
        kubernetes=_pick(kubernetes, get_latest_k8s_version),
    )
