"""meshport: mesh import/export with a pluggable codec registry.

meshport loads polygon meshes from disk or memory and writes them back,
picking a codec from the file extension. Every codec runs through the same
fixed pipelines, so all formats share validation and error reporting.
Wavefront OBJ is built in.

Quick Start:
    >>> import meshport as mp
    >>>
    >>> # Load mesh
    >>> mesh = mp.load('model.obj')
    >>> print(mesh.n_vertices, mesh.n_faces)
    >>>
    >>> # Save with custom settings
    >>> settings = mp.ObjSaveSettings(float_precision=4, include_comments=False)
    >>> mp.save(mesh, 'copy.obj', settings=settings)
    >>>
    >>> # Handle failures
    >>> try:
    ...     mp.load('broken.obj')
    ... except mp.LoadError as e:
    ...     print(e.kind, e.line, e.reason)

Main Features:
    - Extension based codec registry, open to new formats
    - Line-accurate parse errors
    - Structural validation of face indices
    - Configurable float formatting on export
"""

import logging

from meshport.version import __version__, __version_info__
from meshport.config import config

# Errors
from meshport.exceptions import (
    ErrorKind,
    InvalidMeshError,
    LoadError,
    MeshIOError,
    SaveError,
    UnsupportedFormatError,
)

# Core classes
from meshport.mesh import Face, Mesh

# Submodules
from meshport import mesh
from meshport import pipeline

# Codecs and registry
from meshport.codecs import (
    MeshLoader,
    MeshSaver,
    ObjLoader,
    ObjSaver,
    ObjSaveSettings,
    SaveSettings,
)
from meshport.registry import FormatRegistry, registry

# Main API functions
from meshport.mesh.io import dumps, load, loads, save

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Configuration
    "config",
    # Errors
    "ErrorKind",
    "MeshIOError",
    "UnsupportedFormatError",
    "InvalidMeshError",
    "LoadError",
    "SaveError",
    # Core classes
    "Mesh",
    "Face",
    # Submodules
    "mesh",
    "pipeline",
    # Codecs
    "MeshLoader",
    "MeshSaver",
    "SaveSettings",
    "ObjLoader",
    "ObjSaver",
    "ObjSaveSettings",
    # Registry
    "FormatRegistry",
    "registry",
    # API functions
    "load",
    "save",
    "loads",
    "dumps",
]

# Package metadata
__license__ = "MIT"
__description__ = "Mesh import/export with a pluggable codec registry and OBJ support"
