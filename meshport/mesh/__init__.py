# meshport - mesh module
"""Mesh handling: data model, validation, and I/O."""

from meshport.mesh.mesh import Face, Mesh
from meshport.mesh.validation import validate_for_load, validate_for_save
from meshport.mesh.io import dumps, load, loads, save

__all__ = [
    "Face",
    "Mesh",
    "validate_for_load",
    "validate_for_save",
    "load",
    "save",
    "loads",
    "dumps",
]
