from __future__ import annotations

import logging
from typing import Any, Dict

import yaml

from ..config import NodeCtx
from ..lib import systemd
from ..lib.assets import remove_glob, write_file
from ..lib.env import (
    CNI_NET_DIR,
    CONTAINERD_SOCKET,
    CRICTL_CONFIG,
    KUBERNETES_APT_KEYRING,
    KUBERNETES_APT_LIST,
)
from ..lib.http import get_text
from ..lib.pkg import apt_install, apt_mark_hold, apt_update, install_apt_key, write_apt_source
from ..logging_utils import success

logger = logging.getLogger(__name__)

K8S_APT_REPO = "https://pkgs.k8s.io/core:/stable:/v{version}/deb/"
APT_PREREQUISITES = ["apt-transport-https", "ca-certificates", "curl", "gpg"]
K8S_PACKAGES = ["kubelet", "kubeadm", "kubectl"]


def kubernetes_apt_source(version: str) -> str:
    return f"deb [signed-by={KUBERNETES_APT_KEYRING}] {K8S_APT_REPO.format(version=version)} /"


class InstallKubernetesStep:
    step_id = "60_install_kubernetes"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        version = ctx.cfg.versions.kubernetes
        dry_run = ctx.dry_run
        logger.info("Installing cri-tools, kubeadm, kubelet, and kubectl for K8s v%s...", version)

        apt_update(dry_run=dry_run)
        apt_install(APT_PREREQUISITES, dry_run=dry_run)

        write_apt_source(ctx.path(KUBERNETES_APT_LIST), kubernetes_apt_source(version), dry_run=dry_run)
        key_url = K8S_APT_REPO.format(version=version) + "Release.key"
        if dry_run:
            logger.info("Would fetch %s", key_url)
            key = ""
        else:
            key = get_text(key_url)
        install_apt_key(key, ctx.path(KUBERNETES_APT_KEYRING), dry_run=dry_run)

        apt_update(dry_run=dry_run)
        apt_install(["cri-tools"], dry_run=dry_run)
        write_file(
            ctx.path(CRICTL_CONFIG),
            yaml.safe_dump({"runtime-endpoint": CONTAINERD_SOCKET}, default_flow_style=False),
            dry_run=dry_run,
        )
        success(logger, "cri-tools installed and crictl configured.")

        apt_install(["kubernetes-cni"], dry_run=dry_run)
        # Stale CNI drop-ins break pod sandboxes after a plugin change.
        removed = remove_glob(ctx.path(CNI_NET_DIR), "*.conf*", dry_run=dry_run)

        apt_install(K8S_PACKAGES, dry_run=dry_run)
        apt_mark_hold(K8S_PACKAGES, dry_run=dry_run)

        # kubelet crash-loops until kubeadm init/join hands it a config.
        systemd.enable_now("kubelet", dry_run=dry_run)

        state.setdefault("execution", {}).setdefault("decisions", {})["kubernetes_apt_repo"] = K8S_APT_REPO.format(
            version=version
        )
        state["execution"]["decisions"]["removed_cni_configs"] = [p.name for p in removed]
        success(logger, "kubeadm, kubelet, and kubectl installed and marked.")
        return state
