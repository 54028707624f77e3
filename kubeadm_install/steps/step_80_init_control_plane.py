from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from ..config import NodeCtx
from ..lib import kubeadm, systemd
from ..lib.assets import copy_file, write_file
from ..lib.env import ADMIN_KUBECONFIG, CALICO_MANIFEST_URL, CONTAINERD_SOCKET, POD_SUBNET
from ..logging_utils import success

logger = logging.getLogger(__name__)


def _home() -> Path:
    return Path(os.environ.get("HOME") or "/root")


class InitControlPlaneStep:
    step_id = "80_init_control_plane"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        dry_run = ctx.dry_run
        logger.info("Initializing Kubernetes control plane with kubeadm...")

        # Pull with kubelet stopped so it does not race the pulls.
        systemd.stop("kubelet", dry_run=dry_run)
        kubeadm.list_images(dry_run=dry_run)
        kubeadm.pull_images(CONTAINERD_SOCKET, dry_run=dry_run)
        systemd.start("kubelet", dry_run=dry_run)

        rendered = kubeadm.render_init_config(cri_socket=CONTAINERD_SOCKET, pod_subnet=POD_SUBNET)
        with tempfile.TemporaryDirectory(prefix="kubeadm-install-") as tmp:
            config_path = Path(tmp) / "kubeadm-config.yaml"
            write_file(config_path, rendered, dry_run=dry_run)
            r = kubeadm.init(str(config_path), dry_run=dry_run)
        if r.stdout.strip():
            # Carries the `kubeadm join` command for workers.
            logger.info("%s", r.stdout.strip())

        admin_conf = ctx.path(ADMIN_KUBECONFIG)
        kubeadm.untaint_control_plane(str(admin_conf), dry_run=dry_run)

        kube_config = _home() / ".kube" / "config"
        copy_file(admin_conf, kube_config, dry_run=dry_run)

        state.setdefault("execution", {}).setdefault("decisions", {})["kubeadm_config"] = rendered
        state["execution"]["decisions"]["kubeconfig"] = str(kube_config)

        success(logger, "Your Kubernetes control-plane has been initialized successfully!")
        logger.info("Now, deploy a Pod network. For example Calico:")
        logger.info("  kubectl apply -f %s", CALICO_MANIFEST_URL)
        logger.info(
            "Then, join worker nodes by running the 'kubeadm join' command provided above on each node as root."
        )
        return state
