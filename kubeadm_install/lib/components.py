from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .checksum import verify_sha256
from .command import run_cmd
from .http import download, get_text

logger = logging.getLogger(__name__)


ArtifactKind = Literal["archive", "binary"]


@dataclass(frozen=True)
class ComponentSpec:
    """How to fetch, verify and install one upstream release artifact.

    Templates are formatted with {version} and {arch}.
    """

    name: str
    repo: str
    asset_url: str
    checksum_url: str
    install_dir: str
    kind: ArtifactKind = "archive"
    binary_name: str = ""

    def artifact_url(self, version: str, arch: str) -> str:
        return self.asset_url.format(version=version, arch=arch)

    def sums_url(self, version: str, arch: str) -> str:
        return self.checksum_url.format(version=version, arch=arch)

    def artifact_name(self, version: str, arch: str) -> str:
        return self.artifact_url(version, arch).rsplit("/", 1)[-1]


_GH = "https://github.com/{repo}/releases/download/v{{version}}"

CONTAINERD = ComponentSpec(
    name="containerd",
    repo="containerd/containerd",
    asset_url=_GH.format(repo="containerd/containerd") + "/containerd-{version}-linux-{arch}.tar.gz",
    checksum_url=_GH.format(repo="containerd/containerd") + "/containerd-{version}-linux-{arch}.tar.gz.sha256sum",
    install_dir="/usr/local",
)

RUNC = ComponentSpec(
    name="runc",
    repo="opencontainers/runc",
    asset_url=_GH.format(repo="opencontainers/runc") + "/runc.{arch}",
    checksum_url=_GH.format(repo="opencontainers/runc") + "/runc.sha256sum",
    install_dir="/usr/local/sbin",
    kind="binary",
    binary_name="runc",
)

CNI_PLUGINS = ComponentSpec(
    name="cni-plugins",
    repo="containernetworking/plugins",
    asset_url=_GH.format(repo="containernetworking/plugins") + "/cni-plugins-linux-{arch}-v{version}.tgz",
    checksum_url=_GH.format(repo="containernetworking/plugins") + "/cni-plugins-linux-{arch}-v{version}.tgz.sha256",
    install_dir="/opt/cni/bin",
)


def install_component(
    spec: ComponentSpec,
    *,
    version: str,
    arch: str,
    install_dir: Path,
    dry_run: bool = False,
) -> Path:
    """Download, verify and install one artifact. Returns the install path.

    Nothing reaches install_dir unless the checksum matches.
    """

    url = spec.artifact_url(version, arch)
    name = spec.artifact_name(version, arch)
    target = install_dir / spec.binary_name if spec.kind == "binary" else install_dir

    if dry_run:
        logger.info("Would download %s, verify against %s and install to %s", url, spec.sums_url(version, arch), target)
        return target

    with tempfile.TemporaryDirectory(prefix=f"kubeadm-install-{spec.name}-") as tmp:
        artifact = download(url, Path(tmp) / name)
        sums = get_text(spec.sums_url(version, arch))
        verify_sha256(artifact, sums, file_name=name)

        if spec.kind == "binary":
            run_cmd(["install", "-D", "-m", "755", str(artifact), str(target)])
        else:
            install_dir.mkdir(parents=True, exist_ok=True)
            run_cmd(["tar", "-C", str(install_dir), "-xzf", str(artifact)])

    return target
