from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..errors import PostConditionError
from ..lib import kubeadm, systemd
from ..lib.assets import write_file
from ..lib.command import run_cmd
from ..lib.containerd_config import apply_cgroup_edits, config_version, has_systemd_cgroup, pick_sandbox_image
from ..lib.env import CONTAINERD_CONFIG
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ContainerdCgroupStep:
    step_id = "70_containerd_cgroup"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        dry_run = ctx.dry_run
        logger.info("Configuring containerd to use SystemdCgroup...")

        sandbox = pick_sandbox_image(kubeadm.list_images(dry_run=dry_run))
        if not sandbox and not dry_run:
            logger.warning("kubeadm listed no pause image; sandbox image will be empty")

        config_path = ctx.path(CONTAINERD_CONFIG)
        default = run_cmd(["containerd", "config", "default"], dry_run=dry_run).stdout
        write_file(config_path, default, dry_run=dry_run)

        if dry_run:
            logger.info("Would set sandbox image and SystemdCgroup in %s", str(config_path))
        else:
            edited = apply_cgroup_edits(default, sandbox)
            write_file(config_path, edited)

            if not has_systemd_cgroup(config_path.read_text(encoding="utf-8")):
                raise PostConditionError("Failed to enable SystemdCgroup in containerd config.")

            decisions = state.setdefault("execution", {}).setdefault("decisions", {})
            decisions["sandbox_image"] = sandbox
            decisions["containerd_config_version"] = config_version(default)

        systemd.restart("containerd", dry_run=dry_run)
        success(logger, "containerd configured for SystemdCgroup and restarted.")
        return state
