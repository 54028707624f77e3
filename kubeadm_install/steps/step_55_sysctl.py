from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import NodeCtx
from ..lib.env import SYSCTL_CONF
from ..lib.kernel import apply_sysctl
from ..logging_utils import success

logger = logging.getLogger(__name__)

# Bridged pod traffic must traverse iptables and the node must route.
SYSCTL_PARAMS = {
    "net.bridge.bridge-nf-call-iptables": "1",
    "net.ipv4.ip_forward": "1",
    "net.bridge.bridge-nf-call-ip6tables": "1",
}


class SysctlStep:
    step_id = "55_sysctl"

    def run(self, ctx: NodeCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Configuring required sysctl parameters for Kubernetes networking...")
        apply_sysctl(ctx.path(SYSCTL_CONF), SYSCTL_PARAMS, dry_run=ctx.dry_run)
        success(logger, "Sysctl parameters applied.")
        return state
