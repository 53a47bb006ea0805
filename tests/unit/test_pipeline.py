"""Test the fixed load and save pipelines."""

import pytest

from meshport import (
    ErrorKind,
    Face,
    LoadError,
    Mesh,
    MeshLoader,
    ObjLoader,
    ObjSaver,
    ObjSaveSettings,
    SaveError,
    pipeline,
)

TRIANGLE_OBJ = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"


class RecordingLoader(ObjLoader):
    """OBJ loader that records hook calls and tags the result."""

    def __init__(self):
        self.calls = []

    def parse(self, content):
        self.calls.append("parse")
        return super().parse(content)

    def post_process(self, mesh):
        self.calls.append("post_process")
        mesh.metadata["post_processed"] = True
        return mesh


class ValueErrorLoader(MeshLoader):
    supported_extensions = ("bad",)

    def parse(self, content):
        raise ValueError("cannot parse this")


@pytest.fixture
def triangle():
    return Mesh(vertices=[[0, 0, 0], [1, 0, 0], [0, 1, 0]], faces=[[0, 1, 2]])


class TestLoadPipeline:
    """Test stage order and error shapes of loading."""

    def test_post_process_runs_after_validation(self):
        loader = RecordingLoader()

        mesh = pipeline.load_from_content(loader, TRIANGLE_OBJ)

        assert loader.calls == ["parse", "post_process"]
        assert mesh.metadata["post_processed"] is True

    def test_post_process_skipped_on_invalid_mesh(self):
        loader = RecordingLoader()

        with pytest.raises(LoadError):
            loader.load_from_content("v 0 0 0\nf 1 2 3\n")

        assert loader.calls == ["parse"]

    def test_builtin_post_process_is_identity(self, triangle):
        assert ObjLoader().post_process(triangle) is triangle

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tri.obj"
        path.write_text(TRIANGLE_OBJ)

        mesh = ObjLoader().load(path)

        assert mesh.n_vertices == 3
        assert mesh.faces == [Face([0, 1, 2])]

    def test_load_accepts_string_path(self, tmp_path):
        path = tmp_path / "tri.obj"
        path.write_text(TRIANGLE_OBJ)

        assert ObjLoader().load(str(path)).n_faces == 1

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "tri.txt"
        path.write_text(TRIANGLE_OBJ)

        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(path)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_EXTENSION

    def test_none_path(self):
        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(None)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_EXTENSION
        assert "None" in exc_info.value.reason

    def test_extension_checked_before_read(self, tmp_path):
        """A missing file with a wrong extension fails on the extension."""
        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(tmp_path / "missing.stl")

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_EXTENSION

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.obj"

        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(path)

        error = exc_info.value
        assert error.kind is ErrorKind.IO
        assert error.path == path
        assert isinstance(error.__cause__, FileNotFoundError)

    def test_directory_path(self, tmp_path):
        folder = tmp_path / "folder.obj"
        folder.mkdir()

        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(folder)

        assert exc_info.value.kind is ErrorKind.IO
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.obj"
        path.write_bytes(b"v 0 0 0\n\xff\xfe\xfa\n")

        with pytest.raises(LoadError) as exc_info:
            ObjLoader().load(path)

        assert exc_info.value.kind is ErrorKind.IO

    def test_codec_value_error_becomes_parse_error(self):
        with pytest.raises(LoadError) as exc_info:
            ValueErrorLoader().load_from_content("anything")

        assert exc_info.value.kind is ErrorKind.PARSE
        assert exc_info.value.line is None
        assert "cannot parse this" in exc_info.value.reason


class TestSavePipeline:
    """Test stage order and error shapes of saving."""

    def test_save(self, tmp_path, triangle):
        path = tmp_path / "out.obj"

        ObjSaver().save(triangle, path)

        assert "f 1 2 3" in path.read_text()

    def test_save_with_settings(self, tmp_path, triangle):
        path = tmp_path / "out.obj"

        ObjSaver().save(triangle, path, ObjSaveSettings(include_comments=False))

        assert path.read_text().startswith("v 0 0 0\n")

    def test_save_requires_faces(self, tmp_path):
        mesh = Mesh(vertices=[[0, 0, 0]])

        with pytest.raises(SaveError) as exc_info:
            ObjSaver().save(mesh, tmp_path / "out.obj")

        assert exc_info.value.kind is ErrorKind.INVALID
        assert "no faces" in exc_info.value.reason
        assert not (tmp_path / "out.obj").exists()

    def test_save_requires_vertices(self, tmp_path):
        with pytest.raises(SaveError, match="no vertices") as exc_info:
            ObjSaver().save(Mesh(), tmp_path / "out.obj")

        assert exc_info.value.kind is ErrorKind.INVALID

    def test_mesh_validated_before_path(self):
        """An empty mesh with a bad path fails on the mesh first."""
        with pytest.raises(SaveError) as exc_info:
            ObjSaver().save(Mesh(), "out.stl")

        assert exc_info.value.kind is ErrorKind.INVALID

    def test_wrong_extension(self, tmp_path, triangle):
        with pytest.raises(SaveError) as exc_info:
            ObjSaver().save(triangle, tmp_path / "out.stl")

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_EXTENSION
        assert not (tmp_path / "out.stl").exists()

    def test_none_path(self, triangle):
        with pytest.raises(SaveError) as exc_info:
            ObjSaver().save(triangle, None)

        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_EXTENSION

    def test_write_failure(self, tmp_path, triangle):
        path = tmp_path / "no" / "such" / "dir" / "out.obj"

        with pytest.raises(SaveError) as exc_info:
            ObjSaver().save(triangle, path)

        assert exc_info.value.kind is ErrorKind.IO
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_save_does_not_mutate_mesh(self, tmp_path, triangle):
        before = triangle.copy()

        ObjSaver().save(triangle, tmp_path / "out.obj")

        assert triangle == before
        assert triangle.metadata == before.metadata

    def test_newlines_are_unix(self, tmp_path, triangle):
        path = tmp_path / "out.obj"

        ObjSaver().save(triangle, path)

        assert b"\r\n" not in path.read_bytes()
