"""Mesh-Module: Nachbarsuche, Äquivalenzklassen, Kompaktierung."""

from .proximity import ProximityIndex
from .equivalence import UnionFind, resolve_equivalence_classes, select_representatives, group_members
from .compaction import build_index_map, compact_points, remap_elements
from .duplicated_vertex_removal import DuplicatedVertexRemoval, remove_duplicated_vertices

__all__ = [
    "ProximityIndex",
    "UnionFind",
    "resolve_equivalence_classes",
    "select_representatives",
    "group_members",
    "build_index_map",
    "compact_points",
    "remap_elements",
    "DuplicatedVertexRemoval",
    "remove_duplicated_vertices",
]
