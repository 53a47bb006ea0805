"""Mesh I/O functionality.

This module handles loading and saving mesh files, picking the codec from
the file extension through a ``FormatRegistry`` and running it through the
fixed load/save pipelines.
"""

from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, Any

from meshport.mesh.mesh import Mesh

if TYPE_CHECKING:
    from meshport.codecs.base import SaveSettings
    from meshport.registry import FormatRegistry


def _registry(registry: "FormatRegistry | None") -> "FormatRegistry":
    if registry is not None:
        return registry
    from meshport.registry import registry as default_registry

    return default_registry


def load(
    file_path: str | PathLike,
    registry: "FormatRegistry | None" = None,
    **kwargs: Any,
) -> Mesh:
    """Load a mesh from file.

    Args:
        file_path: Path to mesh file
        registry: Registry to look the codec up in (default registry if None)
        **kwargs: Additional metadata to attach to mesh (name, category, etc.)

    Returns:
        Loaded Mesh object

    Raises:
        UnsupportedFormatError: If no loader is registered for the extension
        LoadError: If reading, parsing or validation fails

    Examples:
        >>> mesh = mp.load('model.obj')
        >>> mesh = mp.load('model.obj', name='teapot', category='props')
    """
    loader = _registry(registry).create_loader(file_path)
    mesh = loader.load(file_path)

    mesh.metadata.update(kwargs)
    mesh.metadata.setdefault("name", Path(file_path).stem)
    return mesh


def save(
    mesh: Mesh,
    file_path: str | PathLike,
    settings: "SaveSettings | None" = None,
    registry: "FormatRegistry | None" = None,
) -> None:
    """Save a mesh to file.

    Args:
        mesh: Mesh to save
        file_path: Output file path (format determined by extension)
        settings: Optional output settings, codec defaults if None
        registry: Registry to look the codec up in (default registry if None)

    Raises:
        UnsupportedFormatError: If no saver is registered for the extension
        SaveError: If the mesh is invalid or writing fails

    Examples:
        >>> mp.save(mesh, 'output.obj')
        >>> mp.save(mesh, 'output.obj', settings=mp.ObjSaveSettings(float_precision=3))
    """
    saver = _registry(registry).create_saver(file_path)
    saver.save(mesh, file_path, settings)


def loads(
    content: str,
    format: str = "obj",
    registry: "FormatRegistry | None" = None,
) -> Mesh:
    """Load a mesh from in-memory text.

    Examples:
        >>> mesh = mp.loads("v 0 0 0\\nv 1 0 0\\nv 0 1 0\\nf 1 2 3\\n")
    """
    loader = _registry(registry).get_loader(format)
    return loader.load_from_content(content)


def dumps(
    mesh: Mesh,
    format: str = "obj",
    settings: "SaveSettings | None" = None,
    registry: "FormatRegistry | None" = None,
) -> str:
    """Generate file content for a mesh without writing it.

    No validation is performed, so meshes without faces can be dumped.
    """
    saver = _registry(registry).get_saver(format)
    return saver.generate_content(mesh, settings)
