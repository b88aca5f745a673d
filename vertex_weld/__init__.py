"""Vertex-Weld: Toleranzbasiertes Zusammenführen doppelter Mesh-Vertices."""

from .errors import VertexWeldError, InvalidTolerance, IndexOutOfRange, NotRunYet
from .mesh import DuplicatedVertexRemoval, remove_duplicated_vertices

__all__ = [
    "DuplicatedVertexRemoval",
    "remove_duplicated_vertices",
    "VertexWeldError",
    "InvalidTolerance",
    "IndexOutOfRange",
    "NotRunYet",
]
