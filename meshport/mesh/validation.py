"""Structural validation of meshes.

The checks here are shared by every codec: the load pipeline runs
``validate_for_load`` on each parsed mesh and the save pipeline runs
``validate_for_save`` before generating any output. Both stop at the
first violation.
"""

from collections.abc import Sequence

from meshport.exceptions import InvalidMeshError
from meshport.mesh.mesh import Mesh

MIN_FACE_VERTICES = 3


def _check_range(
    indices: Sequence[int], size: int, polygon: int, what: str
) -> None:
    for index in indices:
        if index < 0 or index >= size:
            raise InvalidMeshError(
                f"Polygon {polygon} references nonexistent {what} {index}",
                polygon=polygon,
                value=index,
            )


def validate_face(mesh: Mesh, polygon: int) -> None:
    """Validate a single face of a mesh.

    Checks, in order: vertex count, vertex indices, texture indices and
    normal indices. Texture and normal indices are only checked when both
    the face's index list and the mesh's corresponding array are non-empty.

    Args:
        mesh: Mesh owning the face
        polygon: Index of the face in ``mesh.faces``

    Raises:
        InvalidMeshError: On the first violation found
    """
    face = mesh.faces[polygon]

    if len(face.vertex_indices) < MIN_FACE_VERTICES:
        raise InvalidMeshError(
            f"Polygon {polygon} has {len(face.vertex_indices)} vertices "
            f"(minimum {MIN_FACE_VERTICES} required)",
            polygon=polygon,
            value=len(face.vertex_indices),
        )

    _check_range(face.vertex_indices, mesh.n_vertices, polygon, "vertex")

    if face.texture_indices and mesh.n_texture_vertices:
        _check_range(
            face.texture_indices, mesh.n_texture_vertices, polygon, "texture coordinate"
        )

    if face.normal_indices and mesh.n_normals:
        _check_range(face.normal_indices, mesh.n_normals, polygon, "normal")


def validate_for_load(mesh: Mesh | None) -> None:
    """Validate a freshly parsed mesh.

    A mesh without faces is accepted.

    Raises:
        InvalidMeshError: If the mesh is missing, has no vertices, or any
            face violates an invariant
    """
    if mesh is None:
        raise InvalidMeshError("Mesh was not created")
    if mesh.n_vertices == 0:
        raise InvalidMeshError("Mesh has no vertices")

    for polygon in range(mesh.n_faces):
        validate_face(mesh, polygon)


def validate_for_save(mesh: Mesh | None) -> None:
    """Validate a mesh before it is written.

    Raises:
        InvalidMeshError: If the mesh is missing, or has no vertices or faces
    """
    if mesh is None:
        raise InvalidMeshError("Mesh must not be None")
    if mesh.n_vertices == 0:
        raise InvalidMeshError("Mesh has no vertices")
    if mesh.n_faces == 0:
        raise InvalidMeshError("Mesh has no faces")
