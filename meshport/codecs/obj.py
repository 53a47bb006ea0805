"""Wavefront OBJ codec.

Supported records:

- ``v x y z``: vertex
- ``vt u [v]``: texture coordinate (v defaults to 0)
- ``vn x y z``: normal
- ``f v1[/t1][/n1] v2[/t2][/n2] ...``: polygon with at least 3 vertices,
  1-based indices
- ``# ...``: comment

``o``, ``g``, ``s``, ``mtllib`` and ``usemtl`` are accepted and ignored; no
grouping or material model is built. Any other record is skipped.
"""

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

import numpy as np

from meshport.codecs.base import MeshLoader, MeshSaver, SaveSettings
from meshport.exceptions import LoadError
from meshport.mesh.mesh import Face, Mesh

logger = logging.getLogger(__name__)

OBJ_EXTENSIONS = ("obj",)

COMMENT_TOKEN = "#"
VERTEX_TOKEN = "v"
TEXTURE_TOKEN = "vt"
NORMAL_TOKEN = "vn"
FACE_TOKEN = "f"
IGNORED_TOKENS = frozenset({"o", "g", "s", "mtllib", "usemtl"})

MIN_FACE_VERTICES = 3

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")
# ASCII decimals only; float() alone would also take "1_0" or non-ASCII digits
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|nan|inf(?:inity)?)",
    re.IGNORECASE,
)
# Line terminators; str.splitlines() would also split on \v, \f and \x1c-\x1e
_LINE_BREAK = re.compile(r"\r\n|[\n\r\u2028\u2029\u0085]")


def _parse_floats(
    words: list[str], arity: int, what: str, line: int, optional: int = 0
) -> list[float]:
    """Parse the leading float components of a record.

    Args:
        words: Tokens following the record keyword
        arity: Number of components the record carries
        what: Record description for error messages
        line: 1-based line number
        optional: How many trailing components may be omitted (filled with 0)
    """
    required = arity - optional
    if len(words) < required:
        raise LoadError.parse(
            line, f"Not enough components for {what} (minimum {required} required)"
        )

    values = []
    for word in words[:arity]:
        if not _FLOAT_PATTERN.fullmatch(word):
            raise LoadError.parse(line, f"Invalid number format in {what}: {word!r}")
        values.append(float(word))

    for value in values:
        if math.isnan(value):
            raise LoadError.parse(line, f"{what.capitalize()} contains NaN values")
        if math.isinf(value):
            raise LoadError.parse(line, f"{what.capitalize()} contains infinite values")

    values.extend([0.0] * (arity - len(values)))
    return values


def _parse_index(part: str, line: int) -> int:
    # int() would also accept "1_0"
    if not _INDEX_PATTERN.fullmatch(part):
        raise LoadError.parse(line, f"Invalid index format in face definition: {part!r}")
    return int(part) - 1


def _parse_face(words: list[str], line: int) -> Face:
    if len(words) < MIN_FACE_VERTICES:
        raise LoadError.parse(
            line,
            f"Face requires minimum {MIN_FACE_VERTICES} vertices, got {len(words)}",
        )

    vertex_indices = []
    texture_indices = []
    normal_indices = []

    for word in words:
        parts = word.split("/")
        if len(parts) > 3:
            raise LoadError.parse(line, f"Malformed face vertex {word!r}")
        if not parts[0]:
            raise LoadError.parse(line, "Missing vertex index in face definition")

        vertex_indices.append(_parse_index(parts[0], line))
        if len(parts) > 1 and parts[1]:
            texture_indices.append(_parse_index(parts[1], line))
        if len(parts) > 2 and parts[2]:
            normal_indices.append(_parse_index(parts[2], line))

    # Either every face vertex carries a component or none does
    if texture_indices and len(texture_indices) != len(vertex_indices):
        raise LoadError.parse(
            line, "Inconsistent texture indices: some face vertices omit them"
        )
    if normal_indices and len(normal_indices) != len(vertex_indices):
        raise LoadError.parse(
            line, "Inconsistent normal indices: some face vertices omit them"
        )

    return Face(vertex_indices, texture_indices, normal_indices)


class ObjLoader(MeshLoader):
    """Parser for Wavefront OBJ text.

    Examples:
        >>> loader = ObjLoader()
        >>> mesh = loader.load_from_content("v 0 0 0\\nv 1 0 0\\nv 0 1 0\\nf 1 2 3\\n")
        >>> mesh.faces[0].vertex_indices
        (0, 1, 2)
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return OBJ_EXTENSIONS

    def parse(self, content: str) -> Mesh:
        vertices = []
        texture_vertices = []
        normals = []
        faces = []

        raw_lines = _LINE_BREAK.split(content)
        if raw_lines[-1] == "":
            raw_lines.pop()

        for line_number, raw in enumerate(raw_lines, start=1):
            line = raw.split(COMMENT_TOKEN, 1)[0].strip()
            if not line:
                continue

            token, *words = line.split()

            if token == VERTEX_TOKEN:
                vertices.append(_parse_floats(words, 3, "vertex", line_number))
            elif token == TEXTURE_TOKEN:
                texture_vertices.append(
                    _parse_floats(words, 2, "texture coordinate", line_number, optional=1)
                )
            elif token == NORMAL_TOKEN:
                normals.append(_parse_floats(words, 3, "normal", line_number))
            elif token == FACE_TOKEN:
                faces.append(_parse_face(words, line_number))
            elif token not in IGNORED_TOKENS:
                logger.debug("Line %d: skipping unsupported record %r", line_number, token)

        logger.debug(
            "Parsed %d vertices, %d texture coordinates, %d normals, %d faces",
            len(vertices), len(texture_vertices), len(normals), len(faces),
        )
        return Mesh(
            vertices=np.array(vertices, dtype=np.float64),
            faces=faces,
            texture_vertices=np.array(texture_vertices, dtype=np.float64),
            normals=np.array(normals, dtype=np.float64),
        )


def format_float(value: float, precision: int) -> str:
    """Format a float with at most ``precision`` decimal digits.

    Ties round half up (away from zero). Trailing zeros and a trailing
    decimal point are stripped. NaN and infinite values are written as
    ``0.0``.

    Examples:
        >>> format_float(1.123456789, 3)
        '1.123'
        >>> format_float(0.125, 2)
        '0.13'
        >>> format_float(1.0, 6)
        '1'
    """
    value = float(value)
    if not math.isfinite(value):
        return "0.0"

    # Enough digits for any finite double, so quantize never overflows
    context = Context(prec=400 + precision)
    quantized = Decimal(value).quantize(
        Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP, context=context
    )
    text = f"{quantized:f}"
    if precision > 0:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


@dataclass
class ObjSaveSettings(SaveSettings):
    """OBJ specific save options.

    Attributes:
        object_name: Name written in the ``o`` record
        include_groups: Emit an ``o`` record before the vertices
    """

    object_name: str = "model"
    include_groups: bool = False


class ObjSaver(MeshSaver):
    """Serializer producing Wavefront OBJ text.

    Face vertex ``i`` gets a texture and/or normal reference only when the
    option is enabled and the face's index list has an entry at ``i``.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return OBJ_EXTENSIONS

    def default_settings(self) -> ObjSaveSettings:
        return ObjSaveSettings()

    def generate(self, mesh: Mesh, settings: SaveSettings) -> str:
        precision = settings.float_precision
        lines = []

        if settings.include_comments:
            lines.append("# Exported by meshport")
            lines.append(f"# Vertices: {mesh.n_vertices}")
            lines.append(f"# Faces: {mesh.n_faces}")
            if mesh.n_normals:
                lines.append(f"# Normals: {mesh.n_normals}")
            if mesh.n_texture_vertices:
                lines.append(f"# Texture coordinates: {mesh.n_texture_vertices}")
            lines.append("")

        if getattr(settings, "include_groups", False):
            lines.append(f"o {settings.object_name}")

        for vertex in mesh.vertices:
            lines.append("v " + " ".join(format_float(c, precision) for c in vertex))

        if settings.include_texture_coords and mesh.n_texture_vertices:
            lines.append("")
            for uv in mesh.texture_vertices:
                lines.append("vt " + " ".join(format_float(c, precision) for c in uv))

        if settings.include_normals and mesh.n_normals:
            lines.append("")
            for normal in mesh.normals:
                lines.append("vn " + " ".join(format_float(c, precision) for c in normal))

        lines.append("")
        for face in mesh.faces:
            lines.append(self._face_record(face, settings))

        return "\n".join(lines) + "\n"

    @staticmethod
    def _face_record(face: Face, settings: SaveSettings) -> str:
        textures = face.texture_indices if settings.include_texture_coords else ()
        normals = face.normal_indices if settings.include_normals else ()

        tokens = []
        for i, vertex in enumerate(face.vertex_indices):
            token = str(vertex + 1)
            has_texture = i < len(textures)
            has_normal = i < len(normals)

            if has_texture and has_normal:
                token += f"/{textures[i] + 1}/{normals[i] + 1}"
            elif has_texture:
                token += f"/{textures[i] + 1}"
            elif has_normal:
                token += f"//{normals[i] + 1}"
            tokens.append(token)

        return "f " + " ".join(tokens)
