from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..lib.components import CNI_PLUGINS, CONTAINERD, RUNC, ComponentSpec, install_component
from ..logging_utils import success

logger = logging.getLogger(__name__)


class InstallComponentStep:
    """Fetch, checksum-verify and install one release artifact."""

    step_id: str
    spec: ComponentSpec
    # Field of ComponentVersions holding this component's version.
    version_attr: str

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        version = getattr(ctx.cfg.versions, self.version_attr)
        logger.info("Downloading and installing %s v%s...", self.spec.name, version)

        target = install_component(
            self.spec,
            version=version,
            arch=ctx.cfg.arch,
            install_dir=ctx.path(self.spec.install_dir),
            dry_run=ctx.dry_run,
        )

        state.setdefault("execution", {}).setdefault("installed", {})[self.spec.name] = {
            "version": version,
            "path": str(target),
        }
        success(logger, "%s installed.", self.spec.name)
        return state


class InstallContainerdStep(InstallComponentStep):
    step_id = "10_install_containerd"
    spec = CONTAINERD
    version_attr = "containerd"


class InstallRuncStep(InstallComponentStep):
    step_id = "20_install_runc"
    spec = RUNC
    version_attr = "runc"


class InstallCniPluginsStep(InstallComponentStep):
    step_id = "30_install_cni_plugins"
    spec = CNI_PLUGINS
    version_attr = "cni_plugins"
