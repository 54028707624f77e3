from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Dict

from ..errors import ChecksumMismatchError

logger = logging.getLogger(__name__)


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for block in iter(lambda: f.read(1024 * 1024), b""):
            h.update(block)
    return h.hexdigest()


def parse_sha256sums(text: str) -> Dict[str, str]:
    """Parse sha256sum output into {file name: digest}.

    A file holding only a bare digest maps it to the empty name.
    """

    sums: Dict[str, str] = {}
    for line in text.splitlines():
        parts = line.strip().split(None, 1)
        if not parts:
            continue
        digest = parts[0].lower()
        name = parts[1].strip().lstrip("*") if len(parts) > 1 else ""
        # Paths like ./dist/runc.amd64 are matched by basename.
        sums[Path(name).name if name else ""] = digest
    return sums


def expected_digest(sums_text: str, file_name: str) -> str:
    sums = parse_sha256sums(sums_text)
    if file_name in sums:
        return sums[file_name]
    if len(sums) == 1 and "" in sums:
        return sums[""]
    raise ChecksumMismatchError(f"No checksum entry for {file_name}")


def verify_sha256(path: Path, sums_text: str, *, file_name: str | None = None) -> str:
    """Verify path against a sha256sum-style listing. Returns the digest."""

    name = file_name or path.name
    want = expected_digest(sums_text, name)
    got = sha256_file(path)
    if got != want:
        raise ChecksumMismatchError(f"Checksum mismatch for {name}: expected {want}, got {got}")
    logger.info("%s: OK", name)
    return got
