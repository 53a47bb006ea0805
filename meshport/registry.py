"""Extension to codec registry.

A ``FormatRegistry`` maps lower-case file extensions to factories that
build fresh loader or saver instances. The module-level ``registry`` is
populated with the built-in OBJ codec at import time and is what the
convenience functions in ``meshport.mesh.io`` use by default.

Registration is expected to happen during single-threaded startup; after
that the registry is only read. Hosts that register codecs later from
several threads must synchronise externally.

Examples:
    >>> import meshport as mp
    >>> mp.registry.supports_loading('model.OBJ')
    True
    >>> mp.registry.register_loader('tri', MyTriLoader)
    >>> loader = mp.registry.create_loader('scan.tri')
"""

import logging
from collections.abc import Callable
from os import PathLike

from meshport.codecs.base import MeshLoader, MeshSaver, extension_of
from meshport.codecs.obj import ObjLoader, ObjSaver
from meshport.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)

LoaderFactory = Callable[[], MeshLoader]
SaverFactory = Callable[[], MeshSaver]


def _normalize(extension: str) -> str:
    return extension.lower().lstrip(".")


class FormatRegistry:
    """Lookup table from file extension to loader/saver factory.

    A later registration for the same extension replaces the earlier one.

    Args:
        builtins: Register the built-in OBJ codec on construction
    """

    def __init__(self, builtins: bool = True):
        self._loaders: dict[str, LoaderFactory] = {}
        self._savers: dict[str, SaverFactory] = {}

        if builtins:
            self.register_loader("obj", ObjLoader)
            self.register_saver("obj", ObjSaver)

    def register_loader(self, extension: str, factory: LoaderFactory) -> None:
        """Register a loader factory for an extension (case-insensitive)."""
        key = _normalize(extension)
        if key in self._loaders:
            logger.debug("Replacing loader for '.%s'", key)
        self._loaders[key] = factory

    def register_saver(self, extension: str, factory: SaverFactory) -> None:
        """Register a saver factory for an extension (case-insensitive)."""
        key = _normalize(extension)
        if key in self._savers:
            logger.debug("Replacing saver for '.%s'", key)
        self._savers[key] = factory

    def get_loader(self, extension: str) -> MeshLoader:
        """Create a loader for a bare extension such as ``'obj'``.

        Raises:
            UnsupportedFormatError: If no loader is registered
        """
        key = _normalize(extension)
        factory = self._loaders.get(key) if key else None
        if factory is None:
            raise UnsupportedFormatError(key, "load")
        return factory()

    def get_saver(self, extension: str) -> MeshSaver:
        """Create a saver for a bare extension such as ``'obj'``.

        Raises:
            UnsupportedFormatError: If no saver is registered
        """
        key = _normalize(extension)
        factory = self._savers.get(key) if key else None
        if factory is None:
            raise UnsupportedFormatError(key, "save")
        return factory()

    def create_loader(self, path: str | PathLike | None) -> MeshLoader:
        """Create a fresh loader for the path's extension.

        Raises:
            UnsupportedFormatError: If no loader matches the extension
        """
        return self.get_loader(extension_of(path))

    def create_saver(self, path: str | PathLike | None) -> MeshSaver:
        """Create a fresh saver for the path's extension.

        Raises:
            UnsupportedFormatError: If no saver matches the extension
        """
        return self.get_saver(extension_of(path))

    def supports_loading(self, path: str | PathLike | None) -> bool:
        return extension_of(path) in self._loaders

    def supports_saving(self, path: str | PathLike | None) -> bool:
        return extension_of(path) in self._savers

    def list_load_extensions(self) -> list[str]:
        """Snapshot of the registered load extensions."""
        return sorted(self._loaders)

    def list_save_extensions(self) -> list[str]:
        """Snapshot of the registered save extensions."""
        return sorted(self._savers)

    def __repr__(self) -> str:
        return (
            f"FormatRegistry(load={self.list_load_extensions()}, "
            f"save={self.list_save_extensions()})"
        )


# Default registry with the built-in codecs
registry = FormatRegistry()
