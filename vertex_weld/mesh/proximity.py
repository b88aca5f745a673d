"""
Räumliche Nachbarsuche für Vertices innerhalb einer Toleranz.

Zwei Backends liefern dieselbe Relation {(i, j) | i < j, |p_i - p_j| <= tol}:
- "grid":   Spatial Hash mit Zellgröße = Toleranz, Prüfung der 3^D Nachbarzellen
- "kdtree": scipy cKDTree.query_pairs (für hohe Dimensionen / ungleichmäßige Dichte)
"""

import itertools
from collections import defaultdict

import numpy as np
from scipy.spatial import cKDTree

from .. import config
from ..errors import InvalidTolerance


def _empty_pairs():
    return np.empty((0, 2), dtype=np.int64)


def _sort_pairs(pairs):
    """Sortiert Kanten lexikographisch (i, dann j) und entfernt Duplikate."""
    if len(pairs) == 0:
        return _empty_pairs()
    pairs = np.unique(pairs.astype(np.int64, copy=False), axis=0)
    return pairs.reshape(-1, 2)


class ProximityIndex:
    """
    Beantwortet "welche Punkte liegen innerhalb der Toleranz von Punkt i".

    Die Kantenliste wird beim ersten Zugriff einmal berechnet und danach
    wiederverwendet. Der Index hält keine Referenz auf veränderliche
    Aufrufer-Daten (Punkte werden kopiert).
    """

    def __init__(self, points, tolerance, backend=None):
        """
        Initialisiert den ProximityIndex.

        Args:
            points: (N, D) Array mit Koordinaten
            tolerance: Maximaler euklidischer Abstand (>= 0)
            backend: "auto", "grid" oder "kdtree" (None = config.PROXIMITY_BACKEND)
        """
        self.points = np.array(points, dtype=np.float64)
        if self.points.ndim != 2:
            raise ValueError(f"Punkte müssen ein (N, D) Array sein, erhalten: Shape {self.points.shape}")
        self.tolerance = float(tolerance)
        if not np.isfinite(self.tolerance) or self.tolerance < 0:
            raise InvalidTolerance(tolerance)
        self.tolerance_sq = self.tolerance * self.tolerance
        self.backend = self._resolve_backend(backend)

        self._pairs = None

    def _resolve_backend(self, backend):
        if backend is None:
            backend = config.PROXIMITY_BACKEND
        if backend not in config.PROXIMITY_BACKENDS:
            raise ValueError(
                f"Unbekanntes Proximity-Backend: {backend!r} (erlaubt: {', '.join(config.PROXIMITY_BACKENDS)})"
            )
        if backend == "auto":
            return "grid" if self.dim <= config.GRID_MAX_DIM else "kdtree"
        return backend

    @property
    def num_points(self):
        return self.points.shape[0]

    @property
    def dim(self):
        return self.points.shape[1]

    def pairs(self):
        """
        Gibt alle Punktpaare innerhalb der Toleranz zurück.

        Returns:
            np.ndarray: (E, 2) int64 mit i < j, lexikographisch sortiert
        """
        if self._pairs is None:
            if self.num_points < 2:
                self._pairs = _empty_pairs()
            elif self.tolerance == 0.0:
                self._pairs = self._exact_pairs()
            elif self.backend == "kdtree":
                self._pairs = self._kdtree_pairs()
            else:
                self._pairs = self._grid_pairs()
        return self._pairs

    def neighbors(self, idx):
        """
        Gibt alle Punkte j != idx innerhalb der Toleranz von Punkt idx zurück.

        Returns:
            np.ndarray: Sortierte Indices
        """
        if not 0 <= idx < self.num_points:
            raise IndexError(f"Punkt-Index {idx} außerhalb von [0, {self.num_points})")
        pairs = self.pairs()
        left = pairs[pairs[:, 0] == idx, 1]
        right = pairs[pairs[:, 1] == idx, 0]
        return np.sort(np.concatenate([left, right]))

    # --- Backends ---
    def _exact_pairs(self):
        """Toleranz 0: nur exakt identische Koordinaten (keine Zellen der Größe 0)."""
        _, inverse = np.unique(self.points, axis=0, return_inverse=True)
        inverse = np.asarray(inverse).reshape(-1)

        buckets = defaultdict(list)
        for idx, key in enumerate(inverse.tolist()):
            buckets[key].append(idx)

        chunks = []
        for members in buckets.values():
            if len(members) < 2:
                continue
            # Alle Paare der Gruppe (i < j, Members sind aufsteigend)
            chunks.extend(itertools.combinations(members, 2))
        if not chunks:
            return _empty_pairs()
        return _sort_pairs(np.array(chunks, dtype=np.int64))

    def _kdtree_pairs(self):
        kdtree = cKDTree(self.points)
        pairs = kdtree.query_pairs(self.tolerance, output_type="ndarray")
        return _sort_pairs(np.asarray(pairs).reshape(-1, 2))

    def _grid_pairs(self):
        """Spatial Hash: Zelle -> [Indices], Abstandstest nur gegen Nachbarzellen."""
        cell_keys = np.floor(self.points / self.tolerance).astype(np.int64)

        spatial_hash = defaultdict(list)
        for idx, key in enumerate(map(tuple, cell_keys.tolist())):
            spatial_hash[key].append(idx)
        spatial_hash = {key: np.array(bucket, dtype=np.int64) for key, bucket in spatial_hash.items()}

        offsets = list(itertools.product((-1, 0, 1), repeat=self.dim))
        chunks = []
        for key, members in spatial_hash.items():
            member_pts = self.points[members]
            for offset in offsets:
                neighbor_key = tuple(k + o for k, o in zip(key, offset))
                neighbors = spatial_hash.get(neighbor_key)
                if neighbors is None:
                    continue

                diff = member_pts[:, None, :] - self.points[neighbors][None, :, :]
                dist_sq = np.einsum("ijk,ijk->ij", diff, diff)
                hit_i, hit_j = np.nonzero(dist_sq <= self.tolerance_sq)
                if len(hit_i) == 0:
                    continue

                # Jedes Paar nur einmal (a < b)
                a = members[hit_i]
                b = neighbors[hit_j]
                keep = a < b
                if np.any(keep):
                    chunks.append(np.column_stack([a[keep], b[keep]]))

        if not chunks:
            return _empty_pairs()
        return _sort_pairs(np.vstack(chunks))

    def __len__(self):
        return self.num_points

    def __repr__(self):
        return f"ProximityIndex({self.num_points} points, dim={self.dim}, tolerance={self.tolerance}, backend={self.backend!r})"
