from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..lib.env import MODULES_LOAD_CONF
from ..lib.kernel import load_modules
from ..logging_utils import success

logger = logging.getLogger(__name__)

KERNEL_MODULES = ("overlay", "br_netfilter")


class KernelModulesStep:
    step_id = "50_kernel_modules"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Enabling kernel modules (%s)...", ", ".join(KERNEL_MODULES))
        load_modules(ctx.path(MODULES_LOAD_CONF), KERNEL_MODULES, dry_run=ctx.dry_run)
        success(logger, "Kernel modules enabled.")
        return state
