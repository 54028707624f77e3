from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    root: str = "/"


PATHS = Paths()

CONTAINERD_SOCKET = "unix:///run/containerd/containerd.sock"
CONTAINERD_CONFIG = "/etc/containerd/config.toml"
CONTAINERD_UNIT = "/etc/systemd/system/containerd.service"
CONTAINERD_UNIT_URL = "https://raw.githubusercontent.com/containerd/containerd/main/containerd.service"

MODULES_LOAD_CONF = "/etc/modules-load.d/containerd.conf"
SYSCTL_CONF = "/etc/sysctl.d/99-kubernetes-cri.conf"

KUBERNETES_APT_LIST = "/etc/apt/sources.list.d/kubernetes.list"
KUBERNETES_APT_KEYRING = "/etc/apt/keyrings/kubernetes-apt-keyring.gpg"
CRICTL_CONFIG = "/etc/crictl.yaml"
CNI_NET_DIR = "/etc/cni/net.d"

ADMIN_KUBECONFIG = "/etc/kubernetes/admin.conf"
POD_SUBNET = "192.168.0.0/16"
CALICO_MANIFEST_URL = "https://raw.githubusercontent.com/projectcalico/calico/v3.30.0/manifests/calico.yaml"
