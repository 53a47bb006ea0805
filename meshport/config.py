"""Global configuration for meshport.

This module provides configuration options for controlling default export
formatting, file encoding, and logging verbosity.
"""

import logging
from contextlib import contextmanager
from typing import Any

_LOGGER_NAME = "meshport"

_VERBOSITY_LEVELS = {
    0: logging.CRITICAL + 10,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


class Config:
    """Global configuration for meshport.

    Examples:
        >>> import meshport as mp
        >>> mp.config.float_precision = 4
        >>> mp.config.verbose = 2

        # Temporary config
        >>> with mp.config.temporary(include_comments=False, verbose=3):
        ...     text = mp.dumps(mesh)
    """

    _OPTIONS = (
        "float_precision",
        "include_comments",
        "include_normals",
        "include_texture_coords",
        "encoding",
        "verbose",
    )

    def __init__(self):
        # Export defaults
        self._float_precision: int = 6
        self._include_comments: bool = True
        self._include_normals: bool = True
        self._include_texture_coords: bool = True

        # File handling
        self._encoding: str = "utf-8"

        # Logging; None leaves the logger level to the application
        self._verbose: int | None = None
        self._saved_level: int | None = None

        # Store for temporary context
        self._context_stack: list[dict[str, Any]] = []

    # Export default properties
    @property
    def float_precision(self) -> int:
        """Default number of decimal digits kept when writing floats."""
        return self._float_precision

    @float_precision.setter
    def float_precision(self, digits: int) -> None:
        if digits < 0:
            raise ValueError(f"Float precision must be non-negative, got {digits}")
        self._float_precision = int(digits)

    @property
    def include_comments(self) -> bool:
        """Whether exported files start with a comment header."""
        return self._include_comments

    @include_comments.setter
    def include_comments(self, value: bool) -> None:
        self._include_comments = bool(value)

    @property
    def include_normals(self) -> bool:
        """Whether normals are written on export."""
        return self._include_normals

    @include_normals.setter
    def include_normals(self, value: bool) -> None:
        self._include_normals = bool(value)

    @property
    def include_texture_coords(self) -> bool:
        """Whether texture coordinates are written on export."""
        return self._include_texture_coords

    @include_texture_coords.setter
    def include_texture_coords(self, value: bool) -> None:
        self._include_texture_coords = bool(value)

    # File handling properties
    @property
    def encoding(self) -> str:
        """Text encoding used when reading and writing mesh files."""
        return self._encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        if not value:
            raise ValueError("Encoding must be a non-empty string")
        self._encoding = value

    # Logging properties
    @property
    def verbose(self) -> int | None:
        """Verbosity level (0=silent, 1=warnings, 2=info, 3=debug).

        None (the default) leaves the ``meshport`` logger level alone.
        """
        return self._verbose

    @verbose.setter
    def verbose(self, level: int | None) -> None:
        """Set verbosity level.

        The logger level in effect before the first explicit level is
        restored when the verbosity is set back to None.

        Args:
            level: 0=silent, 1=warnings, 2=info, 3=debug, or None
        """
        if level is not None and level not in _VERBOSITY_LEVELS:
            raise ValueError(f"Verbose level must be 0-3 or None, got {level}")

        logger = logging.getLogger(_LOGGER_NAME)
        if level is None:
            if self._saved_level is not None:
                logger.setLevel(self._saved_level)
                self._saved_level = None
        else:
            if self._verbose is None:
                self._saved_level = logger.level
            logger.setLevel(_VERBOSITY_LEVELS[level])
        self._verbose = level

    # Context manager for temporary configuration
    @contextmanager
    def temporary(self, **kwargs):
        """Temporarily override configuration settings.

        Args:
            **kwargs: Configuration options to override

        Examples:
            >>> with config.temporary(float_precision=3):
            ...     text = mp.dumps(mesh)
        """
        for key in kwargs:
            if key not in self._OPTIONS:
                raise ValueError(f"Unknown configuration option: {key}")

        state = {key: getattr(self, key) for key in kwargs}
        self._context_stack.append(state)

        try:
            for key, value in kwargs.items():
                setattr(self, key, value)
            yield self
        finally:
            # Restore previous state
            old_state = self._context_stack.pop()
            for key, value in old_state.items():
                setattr(self, key, value)

    def reset(self) -> None:
        """Reset all configuration to defaults."""
        self.verbose = None
        self.__init__()

    def __repr__(self) -> str:
        return (
            f"Config(\n"
            f"  float_precision={self._float_precision},\n"
            f"  include_comments={self._include_comments},\n"
            f"  include_normals={self._include_normals},\n"
            f"  include_texture_coords={self._include_texture_coords},\n"
            f"  encoding={self._encoding!r},\n"
            f"  verbose={self._verbose}\n"
            f")"
        )


# Global configuration instance
config = Config()
