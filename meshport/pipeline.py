"""Fixed load and save stage sequences.

Every codec goes through the same stages so that all formats get identical
validation and error reporting:

Load:  path check -> read -> parse -> validate -> post-process
Save:  validate -> path check -> generate -> write

Only ``parse``/``post_process`` (loaders) and ``generate`` (savers) are
codec-specific. Any stage failure aborts the pipeline; nothing is retried.
"""

import logging
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING

from meshport.config import config
from meshport.exceptions import InvalidMeshError, LoadError, SaveError
from meshport.mesh.mesh import Mesh
from meshport.mesh.validation import validate_for_load, validate_for_save

if TYPE_CHECKING:
    from meshport.codecs.base import MeshLoader, MeshSaver, SaveSettings

logger = logging.getLogger(__name__)


def _check_path(codec, path, error_cls) -> Path:
    if path is None or not codec.supports_extension(path):
        raise error_cls.unsupported_extension(path)
    return Path(path)


def _read_text(path: Path) -> str:
    try:
        with open(path, "r", encoding=config.encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError.io(path, e) from e


def _write_text(path: Path, content: str) -> None:
    try:
        with open(path, "w", encoding=config.encoding, newline="\n") as f:
            f.write(content)
    except (OSError, UnicodeEncodeError) as e:
        raise SaveError.io(path, e) from e


def load(codec: "MeshLoader", path: str | PathLike) -> Mesh:
    """Run the full load pipeline for a file.

    Args:
        codec: Loader supplying the parse and post-process steps
        path: File to read

    Returns:
        Validated, post-processed Mesh

    Raises:
        LoadError: With kind UNSUPPORTED_EXTENSION, IO, PARSE or INVALID
    """
    file_path = _check_path(codec, path, LoadError)
    content = _read_text(file_path)
    mesh = load_from_content(codec, content)
    logger.info(
        "Loaded %s: %d vertices, %d faces", file_path, mesh.n_vertices, mesh.n_faces
    )
    return mesh


def load_from_content(codec: "MeshLoader", content: str) -> Mesh:
    """Run the load pipeline on in-memory text (no path or read stage).

    Raises:
        LoadError: With kind PARSE or INVALID
    """
    try:
        mesh = codec.parse(content)
    except LoadError:
        raise
    except ValueError as e:
        raise LoadError.parse(None, str(e)) from e

    try:
        validate_for_load(mesh)
    except InvalidMeshError as e:
        raise LoadError.invalid(e.reason) from e

    return codec.post_process(mesh)


def save(
    codec: "MeshSaver",
    mesh: Mesh,
    path: str | PathLike,
    settings: "SaveSettings | None" = None,
) -> None:
    """Run the full save pipeline.

    Args:
        codec: Saver supplying the generate step
        mesh: Mesh to write; never modified
        path: Destination file
        settings: Output options, codec defaults when omitted

    Raises:
        SaveError: With kind INVALID, UNSUPPORTED_EXTENSION or IO
    """
    try:
        validate_for_save(mesh)
    except InvalidMeshError as e:
        raise SaveError.invalid(e.reason) from e

    file_path = _check_path(codec, path, SaveError)
    content = generate_content(codec, mesh, settings)
    _write_text(file_path, content)
    logger.info(
        "Saved %s: %d vertices, %d faces", file_path, mesh.n_vertices, mesh.n_faces
    )


def generate_content(
    codec: "MeshSaver", mesh: Mesh, settings: "SaveSettings | None" = None
) -> str:
    """Generate file content for a mesh without validating or writing it."""
    if settings is None:
        settings = codec.default_settings()
    return codec.generate(mesh, settings)
