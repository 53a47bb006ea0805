"""Test the structural validation engine."""

import pytest

from meshport import Face, InvalidMeshError, Mesh
from meshport.mesh.validation import validate_for_load, validate_for_save

TRIANGLE = [[0, 0, 0], [1, 0, 0], [0, 1, 0]]


class TestValidateForLoad:
    """Checks run on every parsed mesh."""

    def test_valid_mesh_passes(self):
        validate_for_load(Mesh(vertices=TRIANGLE, faces=[[0, 1, 2]]))

    def test_mesh_without_faces_passes(self):
        validate_for_load(Mesh(vertices=TRIANGLE))

    def test_none_mesh(self):
        with pytest.raises(InvalidMeshError, match="not created"):
            validate_for_load(None)

    def test_no_vertices(self):
        with pytest.raises(InvalidMeshError, match="no vertices"):
            validate_for_load(Mesh())

    def test_too_few_vertices(self):
        mesh = Mesh(vertices=TRIANGLE, faces=[[0, 1]])

        with pytest.raises(InvalidMeshError, match="minimum 3") as exc_info:
            validate_for_load(mesh)

        assert exc_info.value.polygon == 0

    def test_vertex_out_of_range(self):
        mesh = Mesh(vertices=TRIANGLE, faces=[[0, 1, 2], [0, 1, 3]])

        with pytest.raises(InvalidMeshError) as exc_info:
            validate_for_load(mesh)

        assert exc_info.value.polygon == 1
        assert exc_info.value.value == 3
        assert "Polygon 1" in str(exc_info.value)
        assert "vertex 3" in str(exc_info.value)

    def test_negative_vertex_index(self):
        mesh = Mesh(vertices=TRIANGLE, faces=[[-1, 1, 2]])

        with pytest.raises(InvalidMeshError, match="nonexistent vertex -1"):
            validate_for_load(mesh)

    def test_texture_out_of_range(self):
        mesh = Mesh(
            vertices=TRIANGLE,
            texture_vertices=[[0, 0]],
            faces=[Face([0, 1, 2], texture_indices=[0, 0, 4])],
        )

        with pytest.raises(InvalidMeshError, match="texture coordinate 4"):
            validate_for_load(mesh)

    def test_texture_indices_unchecked_without_texture_vertices(self):
        mesh = Mesh(
            vertices=TRIANGLE,
            faces=[Face([0, 1, 2], texture_indices=[7, 8, 9])],
        )

        validate_for_load(mesh)

    def test_normal_out_of_range(self):
        mesh = Mesh(
            vertices=TRIANGLE,
            normals=[[0, 0, 1]],
            faces=[Face([0, 1, 2], normal_indices=[0, 1, 0])],
        )

        with pytest.raises(InvalidMeshError, match="normal 1"):
            validate_for_load(mesh)

    def test_first_violation_wins(self):
        """Vertex indices are checked before texture and normal indices."""
        mesh = Mesh(
            vertices=TRIANGLE,
            texture_vertices=[[0, 0]],
            normals=[[0, 0, 1]],
            faces=[Face([0, 1, 9], texture_indices=[5, 5, 5], normal_indices=[5, 5, 5])],
        )

        with pytest.raises(InvalidMeshError) as exc_info:
            validate_for_load(mesh)

        assert exc_info.value.value == 9
        assert "vertex" in exc_info.value.reason


class TestValidateForSave:
    """Checks run before a mesh is written."""

    def test_valid_mesh_passes(self):
        validate_for_save(Mesh(vertices=TRIANGLE, faces=[[0, 1, 2]]))

    def test_no_vertices(self):
        with pytest.raises(InvalidMeshError, match="no vertices"):
            validate_for_save(Mesh())

    def test_no_faces(self):
        with pytest.raises(InvalidMeshError, match="no faces"):
            validate_for_save(Mesh(vertices=TRIANGLE))

    def test_none_mesh(self):
        with pytest.raises(InvalidMeshError):
            validate_for_save(None)
