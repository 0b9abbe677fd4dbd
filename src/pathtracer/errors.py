# pathtracer/errors.py
from typing import Optional


class PathTracerError(Exception):
    """Base class for all errors raised by pathtracer."""


class DegenerateGeometryError(PathTracerError, ValueError):
    """A primitive was constructed with geometry that cannot be intersected."""


class EmptySceneError(PathTracerError):
    """An acceleration structure was requested for a scene with no objects."""


class SceneReferenceError(PathTracerError, LookupError):
    """A scene element referred to a material or texture that does not exist."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Unknown {kind}: {name!r}")
        self.kind = kind
        self.name = name


class SceneParseError(PathTracerError, ValueError):
    """
    A scene or OBJ file could not be parsed. Carries the file name and the
    1-based line number when known.
    """

    def __init__(self, message: str, filename: Optional[str] = None,
                 line: Optional[int] = None):
        location = ""
        if filename is not None:
            location = f"{filename}:{line}: " if line is not None else f"{filename}: "
        super().__init__(f"{location}{message}")
        self.filename = filename
        self.line = line
