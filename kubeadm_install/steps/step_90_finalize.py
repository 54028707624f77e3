from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..logging_utils import success

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        decisions = (state.get("execution") or {}).get("decisions") or {}
        logger.debug("Finalize summary: %s", {k: v for k, v in decisions.items() if k != "kubeadm_config"})

        if not ctx.cfg.control_plane:
            success(logger, "Worker node setup complete.")
            logger.info("To join this node to a cluster, run the 'kubeadm join' command provided by the control plane.")
        return state
