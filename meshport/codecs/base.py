"""Base classes for mesh codecs.

This module defines abstract base classes that every loader and saver must
implement. A codec only supplies the format-specific steps (``parse`` and
``post_process`` for loaders, ``generate`` for savers); the surrounding
stages run in the fixed order defined in ``meshport.pipeline``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from meshport import pipeline
from meshport.config import config
from meshport.mesh.mesh import Mesh


def extension_of(path: str | PathLike | None) -> str:
    """Lower-cased filename suffix after the last dot.

    Returns an empty string when the path is None, the filename has no dot,
    or the dot is the last character.

    Examples:
        >>> extension_of('models/Cube.OBJ')
        'obj'
        >>> extension_of('archive.')
        ''
    """
    if path is None:
        return ""

    name = Path(path).name
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return ""
    return name[dot + 1:].lower()


@dataclass
class SaveSettings:
    """Options controlling generated output.

    Defaults are taken from the global ``config`` at construction time.

    Attributes:
        include_comments: Emit a header comment block with element counts
        float_precision: Maximum number of decimal digits per float
        include_normals: Emit normal records and per-face normal references
        include_texture_coords: Emit texture records and per-face references
    """

    include_comments: bool = field(default_factory=lambda: config.include_comments)
    float_precision: int = field(default_factory=lambda: config.float_precision)
    include_normals: bool = field(default_factory=lambda: config.include_normals)
    include_texture_coords: bool = field(
        default_factory=lambda: config.include_texture_coords
    )

    def __post_init__(self):
        if self.float_precision < 0:
            raise ValueError(
                f"float_precision must be non-negative, got {self.float_precision}"
            )


class _Codec(ABC):
    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Lower-case extensions (without dot) handled by this codec."""

    def supports_extension(self, path: str | PathLike | None) -> bool:
        """Check whether the path's extension is one this codec handles."""
        extension = extension_of(path)
        return bool(extension) and extension in self.supported_extensions


class MeshLoader(_Codec):
    """Base class for all mesh loaders.

    Subclasses implement ``parse`` and may override ``post_process``.
    """

    @abstractmethod
    def parse(self, content: str) -> Mesh:
        """Turn file content into a raw (not yet validated) Mesh.

        Raises:
            LoadError: With kind PARSE on malformed content
        """

    def post_process(self, mesh: Mesh) -> Mesh:
        """Hook run after validation succeeds. Returns the mesh unchanged."""
        return mesh

    def load(self, path: str | PathLike) -> Mesh:
        """Load and validate a mesh from a file."""
        return pipeline.load(self, path)

    def load_from_content(self, content: str) -> Mesh:
        """Parse and validate a mesh from in-memory text."""
        return pipeline.load_from_content(self, content)


class MeshSaver(_Codec):
    """Base class for all mesh savers.

    Subclasses implement ``generate`` and may override
    ``default_settings`` to return a format-specific SaveSettings subclass.
    """

    @abstractmethod
    def generate(self, mesh: Mesh, settings: SaveSettings) -> str:
        """Turn a mesh into file content."""

    def default_settings(self) -> SaveSettings:
        return SaveSettings()

    def save(
        self,
        mesh: Mesh,
        path: str | PathLike,
        settings: SaveSettings | None = None,
    ) -> None:
        """Validate a mesh and write it to a file."""
        pipeline.save(self, mesh, path, settings)

    def generate_content(self, mesh: Mesh, settings: SaveSettings | None = None) -> str:
        """Generate file content without touching the filesystem."""
        return pipeline.generate_content(self, mesh, settings)
