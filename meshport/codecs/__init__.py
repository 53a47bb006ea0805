# meshport - codecs module
"""Codec interfaces and the built-in OBJ codec."""

from meshport.codecs.base import MeshLoader, MeshSaver, SaveSettings, extension_of
from meshport.codecs.obj import ObjLoader, ObjSaver, ObjSaveSettings, format_float

__all__ = [
    "MeshLoader",
    "MeshSaver",
    "SaveSettings",
    "extension_of",
    "ObjLoader",
    "ObjSaver",
    "ObjSaveSettings",
    "format_float",
]
