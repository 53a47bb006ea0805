"""Exception types raised by the mesh I/O subsystem.

Every failure surfaces as one of three categories:

- ``UnsupportedFormatError``: no codec is registered for a path's extension.
- ``LoadError``: a load pipeline stage failed.
- ``SaveError``: a save pipeline stage failed.

``LoadError`` and ``SaveError`` carry an ``ErrorKind`` tag plus structured
fields (``reason``, ``line``, ``path``) so callers can branch on the kind
without parsing messages. The wrapped low-level error, if any, is available
as ``__cause__``.
"""

from enum import Enum
from os import PathLike


class ErrorKind(Enum):
    """Kind tag for load and save failures."""

    UNSUPPORTED_EXTENSION = "unsupported_extension"
    IO = "io"
    PARSE = "parse"
    INVALID = "invalid"


class MeshIOError(Exception):
    """Base class for all meshport errors."""


class UnsupportedFormatError(MeshIOError, ValueError):
    """No loader or saver is registered for the requested extension."""

    def __init__(self, extension: str, operation: str = "load"):
        self.extension = extension
        self.operation = operation
        shown = f"'.{extension}'" if extension else "(none)"
        super().__init__(f"No {operation} codec registered for extension {shown}")


class InvalidMeshError(MeshIOError, ValueError):
    """A mesh violates a structural invariant.

    Attributes:
        reason: Human readable description of the violation
        polygon: Index of the offending face, if the violation is per-face
        value: Offending index value, if any
    """

    def __init__(self, reason: str, polygon: int | None = None, value: int | None = None):
        self.reason = reason
        self.polygon = polygon
        self.value = value
        super().__init__(reason)


class _PipelineError(MeshIOError):
    """Shared structure of load and save failures."""

    def __init__(
        self,
        kind: ErrorKind,
        reason: str,
        line: int | None = None,
        path: str | PathLike | None = None,
    ):
        self.kind = kind
        self.reason = reason
        self.line = line
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is not None:
            return f"Line {self.line}: {self.reason}"
        return self.reason

    @classmethod
    def unsupported_extension(cls, path: str | PathLike | None):
        if path is None:
            return cls(ErrorKind.UNSUPPORTED_EXTENSION, "File path must not be None")
        return cls(
            ErrorKind.UNSUPPORTED_EXTENSION,
            f"Unsupported file extension: {path}",
            path=path,
        )

    @classmethod
    def io(cls, path: str | PathLike, cause: BaseException):
        return cls(ErrorKind.IO, f"{cls._io_verb} {path}: {cause}", path=path)

    @classmethod
    def invalid(cls, reason: str):
        return cls(ErrorKind.INVALID, reason)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.name}, reason={self.reason!r}, "
            f"line={self.line!r})"
        )


class LoadError(_PipelineError):
    """Loading a mesh failed.

    Examples:
        >>> try:
        ...     mesh = mp.load('broken.obj')
        ... except mp.LoadError as e:
        ...     if e.kind is mp.ErrorKind.PARSE:
        ...         print(f"bad record on line {e.line}: {e.reason}")
    """

    _io_verb = "Failed to read"

    @classmethod
    def parse(cls, line: int | None, reason: str):
        return cls(ErrorKind.PARSE, reason, line=line)


class SaveError(_PipelineError):
    """Saving a mesh failed."""

    _io_verb = "Failed to write"
