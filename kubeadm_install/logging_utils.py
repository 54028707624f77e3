from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/kubeadm-install.log"

SUCCESS = 25

logging.addLevelName(SUCCESS, "SUCCESS")
logging.addLevelName(logging.CRITICAL, "FATAL")


def success(logger: logging.Logger, msg: str, *args: object) -> None:
    logger.log(SUCCESS, msg, *args)


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def configure_console_logging(level: int = logging.INFO) -> None:
    """Progress to stdout, errors to stderr, as `[LEVEL] message`."""

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if called multiple times.
    if getattr(logger, "_kubeadm_install_console", False):
        return

    fmt = logging.Formatter(fmt="[%(levelname)s] %(message)s")

    out = logging.StreamHandler(sys.stdout)
    out.setLevel(level)
    out.addFilter(_MaxLevelFilter(logging.ERROR))
    out.setFormatter(fmt)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.ERROR)
    err.setFormatter(fmt)

    logger.addHandler(out)
    logger.addHandler(err)
    setattr(logger, "_kubeadm_install_console", True)


def configure_file_logging(log_path: str = DEFAULT_LOG_PATH) -> str:
    """Record every command and decision to log_path.

    Notes:
    - If the log directory is not writable we fall back to a file in the
      current working directory, while still reporting the requested path.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    if getattr(logger, "_kubeadm_install_log_path", None):
        return getattr(logger, "_kubeadm_install_log_path")

    chosen_path = log_path
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "kubeadm-install.log")
        handler = logging.FileHandler(chosen_path)

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    logger.addHandler(handler)
    setattr(logger, "_kubeadm_install_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path

