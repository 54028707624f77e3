from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..lib import systemd
from ..lib.assets import write_file
from ..lib.env import CONTAINERD_UNIT, CONTAINERD_UNIT_URL
from ..lib.http import get_text
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ContainerdServiceStep:
    step_id = "40_containerd_service"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Setting up containerd.service for systemd...")

        if ctx.dry_run:
            logger.info("Would fetch %s", CONTAINERD_UNIT_URL)
            unit = ""
        else:
            unit = get_text(CONTAINERD_UNIT_URL)
        write_file(ctx.path(CONTAINERD_UNIT), unit, dry_run=ctx.dry_run)

        systemd.daemon_reload(dry_run=ctx.dry_run)
        systemd.enable_now("containerd", dry_run=ctx.dry_run)

        success(logger, "containerd.service configured and started.")
        return state
