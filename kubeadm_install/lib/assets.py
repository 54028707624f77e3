from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def write_file(path: Path, contents: str, *, mode: int | None = None, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Would write %s", str(path))
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    if mode is not None:
        path.chmod(mode)
    logger.debug("Wrote %s", str(path))


def copy_file(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Would copy %s -> %s", str(src), str(dst))
        return
    if not src.exists():
        raise FileNotFoundError(str(src))
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)


def remove_glob(directory: Path, pattern: str, *, dry_run: bool = False) -> List[Path]:
    """Delete files in directory matching pattern; returns what matched."""

    if not directory.is_dir():
        return []
    matched = sorted(p for p in directory.glob(pattern) if p.is_file() or p.is_symlink())
    for p in matched:
        if dry_run:
            logger.info("Would remove %s", str(p))
        else:
            p.unlink()
            logger.info("Removed %s", str(p))
    return matched
