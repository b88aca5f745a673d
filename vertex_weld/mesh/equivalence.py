"""
Gruppierung naher Vertices zu Äquivalenzklassen (Union-Find) und
Auswahl eines Repräsentanten pro Klasse.

Zwei Vertices gehören zur selben Klasse, wenn sie über eine Kette von
Paaren innerhalb der Toleranz verbunden sind (transitive Hülle). Eine
lange Kette kann daher Endpunkte weiter als die Toleranz auseinander
zusammenführen - das ist gewollt.
"""

import numpy as np


class UnionFind:
    """Disjunkte Mengen über [0, n) mit Pfadkompression. Gehört genau einem Resolve-Aufruf."""

    def __init__(self, n):
        self.parent = list(range(n))

    def find(self, x):
        # Iterativ: lange Ketten sprengen sonst das Rekursionslimit
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x, y):
        """Vereinigt die Mengen von x und y. Die größere Wurzel bleibt Wurzel."""
        px, py = self.find(x), self.find(y)
        if px == py:
            return px
        if px < py:
            px, py = py, px
        self.parent[py] = px
        return px

    def __len__(self):
        return len(self.parent)


def resolve_equivalence_classes(num_points, pairs):
    """
    Bildet die Äquivalenzklassen aus der paarweisen Nachbarschaftsrelation.

    Args:
        num_points: Anzahl Vertices N
        pairs: (E, 2) Kanten (i, j) innerhalb der Toleranz

    Returns:
        np.ndarray: (N,) Label pro Vertex, gleiches Label <=> gleiche Klasse
    """
    uf = UnionFind(num_points)
    # Unions strikt sequentiell in der übergebenen Reihenfolge
    for i, j in np.asarray(pairs, dtype=np.int64).reshape(-1, 2).tolist():
        uf.union(i, j)
    return np.array([uf.find(i) for i in range(num_points)], dtype=np.int64)


def select_representatives(labels):
    """
    Wählt pro Klasse den Vertex mit dem größten Original-Index.

    Unabhängig von der Union-Reihenfolge: explizite Maximum-Reduktion über
    alle Mitglieder jeder Klasse.

    Returns:
        np.ndarray: (N,) rep[i] = max(Klasse von i)
    """
    labels = np.asarray(labels, dtype=np.int64)
    num_points = len(labels)
    class_max = np.full(num_points, -1, dtype=np.int64)
    np.maximum.at(class_max, labels, np.arange(num_points, dtype=np.int64))
    return class_max[labels]


def group_members(labels):
    """
    Sammelt die Mitglieder jeder Klasse.

    Returns:
        list[np.ndarray]: Sortierte Index-Arrays, geordnet nach kleinstem Mitglied
    """
    labels = np.asarray(labels, dtype=np.int64)
    groups = {}
    for idx, label in enumerate(labels.tolist()):
        groups.setdefault(label, []).append(idx)
    return [np.array(members, dtype=np.int64) for members in sorted(groups.values(), key=lambda m: m[0])]
