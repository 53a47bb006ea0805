"""Mesh class for polygonal surface meshes.

This module provides the Mesh and Face classes exchanged by every loader and
saver. A mesh holds ordered vertex, texture coordinate and normal arrays plus
a list of polygonal faces indexing into them (0-based).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np


def _as_index_tuple(values: Iterable[int] | None) -> tuple[int, ...]:
    if values is None:
        return ()
    return tuple(int(v) for v in values)


@dataclass(frozen=True)
class Face:
    """Polygon defined by index lists into a Mesh.

    Attributes:
        vertex_indices: 0-based offsets into ``Mesh.vertices``
        texture_indices: 0-based offsets into ``Mesh.texture_vertices``,
            empty when the face has no texture coordinates
        normal_indices: 0-based offsets into ``Mesh.normals``, empty when
            the face has no normals
    """

    vertex_indices: tuple[int, ...]
    texture_indices: tuple[int, ...] = ()
    normal_indices: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "vertex_indices", _as_index_tuple(self.vertex_indices))
        object.__setattr__(self, "texture_indices", _as_index_tuple(self.texture_indices))
        object.__setattr__(self, "normal_indices", _as_index_tuple(self.normal_indices))

    def __len__(self) -> int:
        return len(self.vertex_indices)

    @property
    def has_texture(self) -> bool:
        return bool(self.texture_indices)

    @property
    def has_normals(self) -> bool:
        return bool(self.normal_indices)


def _as_array(values: Any, width: int, name: str) -> np.ndarray:
    if values is None:
        return np.empty((0, width), dtype=np.float64)

    array = np.array(values, dtype=np.float64)
    if array.size == 0:
        return np.empty((0, width), dtype=np.float64)

    if array.ndim != 2 or array.shape[1] != width:
        raise ValueError(
            f"{name} must be (N, {width}) array, got shape {array.shape}"
        )
    return array


class Mesh:
    """Polygonal mesh with optional texture coordinates and normals.

    Faces may have any number of vertices; index validity is not checked
    here but by the validation engine run inside the load and save
    pipelines (see ``meshport.mesh.validation``).

    Attributes:
        vertices: (N, 3) array of vertex coordinates [x, y, z]
        texture_vertices: (T, 2) array of texture coordinates [u, v]
        normals: (K, 3) array of normal vectors
        faces: List of Face objects in declaration order
        metadata: Dictionary for name and custom properties

    Examples:
        >>> # Load from file
        >>> mesh = mp.load('model.obj')

        >>> # Create from arrays
        >>> mesh = mp.Mesh(
        ...     vertices=[[0, 0, 0], [1, 0, 0], [0, 1, 0]],
        ...     faces=[[0, 1, 2]],
        ... )
        >>> mesh.n_faces
        1
    """

    def __init__(
        self,
        vertices: np.ndarray | Sequence | None = None,
        faces: Iterable[Face | Sequence[int]] | None = None,
        texture_vertices: np.ndarray | Sequence | None = None,
        normals: np.ndarray | Sequence | None = None,
        metadata: dict[str, Any] | None = None,
    ):
        """Initialize Mesh.

        Args:
            vertices: (N, 3) float array of vertex coordinates
            faces: Face objects, or plain vertex index sequences
            texture_vertices: Optional (T, 2) float array of UV coordinates
            normals: Optional (K, 3) float array of normal vectors
            metadata: Optional metadata dictionary

        Raises:
            ValueError: If arrays have invalid shapes
        """
        self.vertices = _as_array(vertices, 3, "vertices")
        self.texture_vertices = _as_array(texture_vertices, 2, "texture_vertices")
        self.normals = _as_array(normals, 3, "normals")

        self.faces: list[Face] = [
            face if isinstance(face, Face) else Face(face) for face in (faces or [])
        ]
        self.metadata = metadata or {}

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        """Number of faces (polygons)."""
        return len(self.faces)

    @property
    def n_texture_vertices(self) -> int:
        """Number of texture coordinates."""
        return len(self.texture_vertices)

    @property
    def n_normals(self) -> int:
        """Number of normals."""
        return len(self.normals)

    @property
    def bounds(self) -> np.ndarray:
        """Bounding box of the mesh.

        Returns:
            Array of shape (2, 3) with [[xmin, ymin, zmin], [xmax, ymax, zmax]]

        Raises:
            ValueError: If the mesh has no vertices
        """
        if self.n_vertices == 0:
            raise ValueError("Cannot compute bounds of a mesh without vertices")
        return np.array([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    def is_valid(self) -> bool:
        """Check if mesh has at least one vertex and one face."""
        return self.n_vertices > 0 and self.n_faces > 0

    def triangles(self) -> np.ndarray:
        """Fan-triangulate all faces.

        Returns:
            (M, 3) int array of vertex indices
        """
        tris = [
            (face.vertex_indices[0], face.vertex_indices[i], face.vertex_indices[i + 1])
            for face in self.faces
            for i in range(1, len(face.vertex_indices) - 1)
        ]
        if not tris:
            return np.empty((0, 3), dtype=np.int64)
        return np.array(tris, dtype=np.int64)

    def is_closed(self) -> bool:
        """Check if mesh is watertight (closed manifold).

        A mesh is closed if every edge is shared by exactly two faces.
        Polygons are fan-triangulated before the check.
        """
        return self.to_trimesh().is_watertight

    def volume(self) -> float:
        """Calculate enclosed volume.

        Raises:
            ValueError: If mesh is not closed
        """
        mesh_tri = self.to_trimesh()

        if not mesh_tri.is_watertight:
            raise ValueError(
                "Cannot calculate volume of non-watertight mesh. "
                "Use mesh.is_closed() to check first."
            )

        return float(mesh_tri.volume)

    @classmethod
    def from_trimesh(cls, mesh_tri: "trimesh.Trimesh", **kwargs) -> "Mesh":
        """Create Mesh from trimesh.Trimesh object.

        Args:
            mesh_tri: trimesh.Trimesh object
            **kwargs: Additional arguments (normals, metadata)

        Returns:
            New Mesh instance
        """
        return cls(
            vertices=np.asarray(mesh_tri.vertices),
            faces=np.asarray(mesh_tri.faces).tolist(),
            **kwargs,
        )

    def to_trimesh(self) -> "trimesh.Trimesh":
        """Convert to trimesh.Trimesh object.

        Polygons with more than three vertices are fan-triangulated.
        """
        import trimesh

        return trimesh.Trimesh(
            vertices=self.vertices, faces=self.triangles(), process=False
        )

    def copy(self) -> "Mesh":
        """Create a deep copy of this mesh."""
        return Mesh(
            vertices=self.vertices.copy(),
            faces=list(self.faces),
            texture_vertices=self.texture_vertices.copy(),
            normals=self.normals.copy(),
            metadata=self.metadata.copy(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return (
            np.array_equal(self.vertices, other.vertices)
            and np.array_equal(self.texture_vertices, other.texture_vertices)
            and np.array_equal(self.normals, other.normals)
            and self.faces == other.faces
        )

    __hash__ = None

    def __repr__(self) -> str:
        name = self.metadata.get("name", "unnamed")
        return (
            f"Mesh('{name}', "
            f"n_vertices={self.n_vertices}, "
            f"n_faces={self.n_faces}, "
            f"n_texture_vertices={self.n_texture_vertices}, "
            f"n_normals={self.n_normals})"
        )
