from __future__ import annotations

from typing import Sequence


class InstallError(RuntimeError):
    """Base class for every fatal condition of a run."""


class PreconditionError(InstallError):
    pass


class UsageError(InstallError):
    pass


class VersionResolutionError(InstallError):
    pass


class DownloadError(InstallError):
    pass


class ChecksumMismatchError(InstallError):
    pass


class UnsupportedConfigError(InstallError):
    pass


class PostConditionError(InstallError):
    pass


class CommandError(InstallError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)
