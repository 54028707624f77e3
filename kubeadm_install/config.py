from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class RunMode(enum.Enum):
    WORKER = "worker"
    CONTROL_PLANE = "control-plane"


@dataclass(frozen=True)
class ComponentVersions:
    containerd: str
    runc: str
    cni_plugins: str
    kubernetes: str


@dataclass(frozen=True)
class NodeConfig:
    versions: ComponentVersions
    mode: RunMode
    arch: str
    dry_run: bool = False

    @property
    def control_plane(self) -> bool:
        return self.mode is RunMode.CONTROL_PLANE


@dataclass(frozen=True)
class NodeCtx:
    cfg: NodeConfig
    root: str = "/"

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run

    def path(self, abs_path: str) -> Path:
        """Resolve a host path against the filesystem root."""
        return Path(self.root) / abs_path.lstrip("/")
