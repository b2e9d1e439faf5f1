"""Errors raised while materializing or disposing executables."""

from __future__ import annotations

from pathlib import Path


class ByteExecError(OSError):
    """Base error. Carries the target path and the underlying OS error."""

    action = "Unexpected error on"

    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        self.path = str(path)
        self.cause = cause
        errno = getattr(cause, "errno", None)
        strerror = getattr(cause, "strerror", None) or (str(cause) if cause else "")
        super().__init__(errno, strerror)
        if cause is not None:
            self.__cause__ = cause

    def __reduce__(self):
        return (type(self), (self.path, self.cause))

    def __str__(self) -> str:
        if self.cause is None:
            return f"{self.action} {self.path}"
        return f"{self.action} {self.path}: {self.cause}"


class DirectoryUnavailable(ByteExecError):
    action = "Standard directory unavailable"


class UnexpectedFilesystemError(ByteExecError):
    action = "Unexpected error opening"


class WriteFailure(ByteExecError):
    action = "Unable to write to file at"


class DigestMismatchOverwriteFailure(ByteExecError):
    action = "Unable to overwrite mismatched file"


class DisposalFailure(ByteExecError):
    action = "Unable to remove"
