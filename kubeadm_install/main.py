from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, NoReturn, Optional

from .config import NodeConfig, NodeCtx, RunMode
from .errors import InstallError, PreconditionError, UsageError
from .lib.env import PATHS
from .lib.hwdetect import detect_arch
from .lib.versions import resolve_versions
from .logging_utils import DEFAULT_LOG_PATH, configure_console_logging, configure_file_logging
from .pipeline import Step, run_pipeline
from .steps import (
    ContainerdCgroupStep,
    ContainerdServiceStep,
    FinalizeStep,
    InitControlPlaneStep,
    InstallCniPluginsStep,
    InstallContainerdStep,
    InstallKubernetesStep,
    InstallRuncStep,
    KernelModulesStep,
    SysctlStep,
)

logger = logging.getLogger(__name__)


def build_steps(mode: RunMode) -> List[Step]:
    steps: List[Step] = [
        InstallContainerdStep(),
        InstallRuncStep(),
        InstallCniPluginsStep(),
        ContainerdServiceStep(),
        KernelModulesStep(),
        SysctlStep(),
        InstallKubernetesStep(),
        ContainerdCgroupStep(),
    ]
    if mode is RunMode.CONTROL_PLANE:
        steps.append(InitControlPlaneStep())
    steps.append(FinalizeStep())
    return steps


def check_root() -> None:
    if os.geteuid() != 0:
        raise PreconditionError("This script must be run as root. Please use 'sudo'.")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="kubeadm-install",
        description="Prepare an Ubuntu LTS host to run as a Kubernetes node.",
        allow_abbrev=False,
    )
    p.add_argument(
        "--control-plane",
        action="store_true",
        help="Set up a control-plane node (default is worker node)",
    )
    p.add_argument("--containerd-version", metavar="VER", help="Specify containerd version (default: latest)")
    p.add_argument("--runc-version", metavar="VER", help="Specify runc version (default: latest)")
    p.add_argument("--cni-plugins-version", metavar="VER", help="Specify CNI plugins version (default: latest)")
    p.add_argument("--k8s-version", metavar="VER", help="Specify Kubernetes version (default: latest stable)")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without executing them")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    return p


def parse_args(argv: List[str]) -> argparse.Namespace:
    # `curl ... | sudo bash -s -- --control-plane` style invocations.
    if argv and argv[0] == "--":
        argv = argv[1:]

    args, unknown = build_parser().parse_known_args(argv)
    if unknown:
        raise UsageError(f"Unknown option: {unknown[0]}")
    return args


def run(
    *,
    control_plane: bool = False,
    containerd_version: Optional[str] = None,
    runc_version: Optional[str] = None,
    cni_plugins_version: Optional[str] = None,
    k8s_version: Optional[str] = None,
    dry_run: bool = False,
    log_path: str = DEFAULT_LOG_PATH,
) -> Dict[str, Any]:
    """Resolve versions and provision this host."""

    actual_log_path = configure_file_logging(log_path)

    versions = resolve_versions(
        containerd=containerd_version,
        runc=runc_version,
        cni_plugins=cni_plugins_version,
        kubernetes=k8s_version,
    )
    cfg = NodeConfig(
        versions=versions,
        mode=RunMode.CONTROL_PLANE if control_plane else RunMode.WORKER,
        arch=detect_arch(),
        dry_run=dry_run,
    )
    ctx = NodeCtx(cfg=cfg, root=PATHS.root)

    logger.info("Using the following component versions:")
    logger.info("  - containerd:      v%s", versions.containerd)
    logger.info("  - runc:            v%s", versions.runc)
    logger.info("  - cni-plugins:     v%s", versions.cni_plugins)
    logger.info("  - kubernetes:      v%s", versions.kubernetes)
    logger.debug("mode=%s arch=%s dry_run=%s log=%s", cfg.mode.value, cfg.arch, dry_run, actual_log_path)

    state: Dict[str, Any] = {"execution": {"log_path": actual_log_path}}
    try:
        result = run_pipeline(ctx=ctx, state=state, steps=build_steps(cfg.mode))
    except InstallError:
        logger.debug("Installer failed at step %s", state["execution"].get("current_step"), exc_info=True)
        raise

    result.state["execution"]["ran_steps"] = result.ran_steps
    return result.state


def main(argv: Optional[List[str]] = None) -> int:
    configure_console_logging()

    try:
        check_root()
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
        run(
            control_plane=bool(args.control_plane),
            containerd_version=args.containerd_version,
            runc_version=args.runc_version,
            cni_plugins_version=args.cni_plugins_version,
            k8s_version=args.k8s_version,
            dry_run=bool(args.dry_run),
            log_path=args.log,
        )
    except (InstallError, OSError) as e:
        logger.critical("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
