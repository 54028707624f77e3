from .step_10_install_components import InstallCniPluginsStep, InstallContainerdStep, InstallRuncStep
from .step_40_containerd_service import ContainerdServiceStep
from .step_50_kernel_modules import KernelModulesStep
from .step_55_sysctl import SysctlStep
from .step_60_install_kubernetes import InstallKubernetesStep
from .step_70_containerd_cgroup import ContainerdCgroupStep
from .step_80_init_control_plane import InitControlPlaneStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "InstallContainerdStep",
    "InstallRuncStep",
    "InstallCniPluginsStep",
    "ContainerdServiceStep",
    "KernelModulesStep",
    "SysctlStep",
    "InstallKubernetesStep",
    "ContainerdCgroupStep",
    "InitControlPlaneStep",
    "FinalizeStep",
]
