# src/pbcat/errors.py
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Union

PathLike = Union[str, Path]


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    IO_ERROR = "io_error"
    INVALID_INPUT = "invalid_input"
    ENCODING = "encoding"
    NO_FILES = "no_files"
    CLIPBOARD_TOOL = "clipboard_tool"
    CLIPBOARD_UNAVAILABLE = "clipboard_unavailable"
    USAGE = "usage"


class PbcatError(Exception):
    """Base class for every error the tool reports to the user."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class _PathError(PbcatError):
    def __init__(self, path: PathLike, detail: str):
        self.path = str(path)
        super().__init__(f"{self.path}: {detail}")


class NotFoundError(_PathError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: PathLike):
        super().__init__(path, "No such file or directory")


class AccessDeniedError(_PathError):
    kind = ErrorKind.ACCESS_DENIED

    def __init__(self, path: PathLike):
        super().__init__(path, "Permission denied")


class FileIOError(_PathError):
    kind = ErrorKind.IO_ERROR

    def __init__(self, path: PathLike, reason: str):
        self.reason = reason
        super().__init__(path, reason)


class InvalidInputError(_PathError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, path: PathLike):
        super().__init__(path, "not a file or directory")


class EncodingError(_PathError):
    kind = ErrorKind.ENCODING

    def __init__(self, path: PathLike):
        super().__init__(path, "not valid UTF-8")


class NoFilesFoundError(PbcatError):
    kind = ErrorKind.NO_FILES

    def __init__(self):
        super().__init__("No files to copy")


class ClipboardToolError(PbcatError):
    """One clipboard candidate failed to spawn, accept input, or exit cleanly."""
    kind = ErrorKind.CLIPBOARD_TOOL

    def __init__(self, program: str, reason: str):
        self.program = program
        self.reason = reason
        super().__init__(f"{program}: {reason}")


class ClipboardUnavailableError(PbcatError):
    kind = ErrorKind.CLIPBOARD_UNAVAILABLE

    def __init__(self, tried: Sequence[str], cause: Optional[Exception] = None):
        self.tried = tuple(tried)
        self.cause = cause
        if self.tried:
            message = f"No supported clipboard utility found (tried {'/'.join(self.tried)})"
        else:
            message = "No clipboard utility is known for this platform"
        if cause is not None:
            message += f"; last error: {cause}"
        super().__init__(message)


class UsageError(PbcatError):
    kind = ErrorKind.USAGE


def translate_os_error(path: PathLike, exc: OSError) -> PbcatError:
    """Map an OSError raised while touching `path` onto the error hierarchy."""
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(path)
    if isinstance(exc, PermissionError):
        return AccessDeniedError(path)
    return FileIOError(path, exc.strerror or str(exc))
