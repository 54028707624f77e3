from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import yaml

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

KUBEADM_API = "kubeadm.k8s.io/v1beta4"
KUBELET_API = "kubelet.config.k8s.io/v1beta1"


def init_config_documents(*, cri_socket: str, pod_subnet: str, cgroup_driver: str = "systemd") -> List[Dict[str, Any]]:
    return [
        {
            "kind": "InitConfiguration",
            "apiVersion": KUBEADM_API,
            "nodeRegistration": {"criSocket": cri_socket},
        },
        {
            "kind": "ClusterConfiguration",
            "apiVersion": KUBEADM_API,
            "networking": {"podSubnet": pod_subnet},
        },
        {
            "kind": "KubeletConfiguration",
            "apiVersion": KUBELET_API,
            "cgroupDriver": cgroup_driver,
        },
    ]


def render_init_config(*, cri_socket: str, pod_subnet: str, cgroup_driver: str = "systemd") -> str:
    """Stacked kubeadm config: InitConfiguration, ClusterConfiguration, KubeletConfiguration."""

    docs = init_config_documents(cri_socket=cri_socket, pod_subnet=pod_subnet, cgroup_driver=cgroup_driver)
    return yaml.safe_dump_all(docs, sort_keys=False, default_flow_style=False)


def list_images(*, dry_run: bool = False) -> List[str]:
    r = run_cmd(["kubeadm", "config", "images", "list"], dry_run=dry_run)
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


def pull_images(cri_socket: str, *, dry_run: bool = False) -> None:
    run_cmd(["kubeadm", "config", "images", "pull", f"--cri-socket={cri_socket}"], dry_run=dry_run)


def init(config_path: str, *, dry_run: bool = False) -> CmdResult:
    return run_cmd(["kubeadm", "init", "--config", config_path], dry_run=dry_run)


def untaint_control_plane(kubeconfig: str, *, dry_run: bool = False) -> None:
    kubectl(["taint", "nodes", "--all", "node-role.kubernetes.io/control-plane-"], kubeconfig=kubeconfig, dry_run=dry_run)


def kubectl(args: List[str], *, kubeconfig: str, dry_run: bool = False) -> CmdResult:
    env: Mapping[str, str] = {"KUBECONFIG": kubeconfig}
    return run_cmd(["kubectl", *args], env=env, dry_run=dry_run)
