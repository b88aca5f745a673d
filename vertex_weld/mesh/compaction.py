"""
Kompaktierung: neue, lückenlose Vertex-Indices für die Repräsentanten und
Umschreiben der Element-Indices.
"""

import numpy as np


def build_index_map(representatives):
    """
    Erstellt Mapping: alter Index -> neuer Index.

    Vergibt in aufsteigender Reihenfolge der Original-Indices einen neuen
    Index nur an Repräsentanten (rep[i] == i). Alle anderen Mitglieder
    übernehmen den neuen Index ihres Repräsentanten.

    Args:
        representatives: (N,) rep[i] = Repräsentant von Vertex i

    Returns:
        (index_map, survivors): (N,) neue Indices in [0, N') und (N',)
        Original-Indices der Repräsentanten, aufsteigend
    """
    representatives = np.asarray(representatives, dtype=np.int64)
    num_points = len(representatives)

    is_survivor = representatives == np.arange(num_points, dtype=np.int64)
    survivors = np.flatnonzero(is_survivor).astype(np.int64)

    new_index = np.full(num_points, -1, dtype=np.int64)
    new_index[survivors] = np.arange(len(survivors), dtype=np.int64)

    index_map = new_index[representatives]
    return index_map, survivors


def compact_points(points, survivors):
    """Reduzierte Punktmenge: Koordinaten der Repräsentanten unverändert (keine Mittelung)."""
    points = np.asarray(points, dtype=np.float64)
    # Fancy Indexing liefert immer eine Kopie
    return points[np.asarray(survivors, dtype=np.int64)]


def remap_elements(elements, index_map):
    """Ersetzt jeden Vertex-Index der Elemente durch index_map[idx] (Arity und Reihenfolge bleiben)."""
    elements = np.asarray(elements, dtype=np.int64)
    if elements.size == 0:
        return elements.copy()
    return np.asarray(index_map, dtype=np.int64)[elements]
