"""
Entfernt geometrisch doppelte Vertices eines Meshes.

Ablauf pro run(tolerance):
1. ProximityIndex: alle Paare innerhalb der Toleranz
2. Union-Find: Äquivalenzklassen (transitive Hülle)
3. Repräsentant pro Klasse = größter Original-Index
4. Kompaktierung: neue Indices, reduzierte Vertices, umgeschriebene Elemente
"""

import math

import numpy as np

from .. import config
from ..errors import IndexOutOfRange, InvalidTolerance, NotRunYet
from ..utils.timing import StepTimer
from .compaction import build_index_map, compact_points, remap_elements
from .equivalence import resolve_equivalence_classes, select_representatives
from .proximity import ProximityIndex


def _as_points(points):
    points = np.array(points, dtype=np.float64)
    if points.size == 0 and points.ndim < 2:
        return points.reshape(0, 0)
    if points.ndim != 2:
        raise ValueError(f"Vertices müssen ein (N, D) Array sein, erhalten: Shape {points.shape}")
    if points.shape[0] > 0 and points.shape[1] == 0:
        raise ValueError("Vertices brauchen mindestens eine Koordinate")
    if not np.all(np.isfinite(points)):
        raise ValueError("Vertices enthalten nicht-endliche Koordinaten (NaN/inf)")
    return points


def _as_elements(elements):
    raw = np.array(elements)
    if raw.size == 0 and raw.ndim < 2:
        return np.empty((0, 0), dtype=np.int64)
    if raw.ndim != 2:
        raise ValueError(f"Elemente müssen ein (M, K) Array sein, erhalten: Shape {raw.shape}")
    if raw.dtype.kind not in "iu":
        if raw.dtype.kind != "f" or not np.all(np.isfinite(raw)) or np.any(raw != np.round(raw)):
            raise ValueError(f"Element-Indices müssen ganzzahlig sein, erhalten: dtype {raw.dtype}")
    return raw.astype(np.int64)


class DuplicatedVertexRemoval:
    """
    Verschmilzt Vertices, die näher als eine Toleranz beieinander liegen,
    und schreibt die Element-Indices konsistent um.

    Zustände: ungelaufen -> run() -> abgeschlossen. Getter vor dem ersten
    erfolgreichen run() werfen NotRunYet.
    """

    def __init__(self, points, elements):
        """
        Initialisiere mit Vertices und Elementen.

        Args:
            points: (N, D) Koordinaten
            elements: (M, K) Vertex-Indices pro Element (Dreiecke K=3, Quads K=4, ...)

        Raises:
            IndexOutOfRange: Wenn ein Element einen Index außerhalb [0, N) referenziert
            ValueError: Bei falscher Form der Eingaben
        """
        self._points = _as_points(points)
        self._elements = _as_elements(elements)
        self._validate_indices()

        self._result = None  # (points, elements, num_removed) nach run()

    def _validate_indices(self):
        if self._elements.size == 0:
            return
        num_points = self.num_points
        invalid = (self._elements < 0) | (self._elements >= num_points)
        if np.any(invalid):
            element_idx, corner = np.argwhere(invalid)[0]
            raise IndexOutOfRange(int(element_idx), int(self._elements[element_idx, corner]), num_points)

    @property
    def num_points(self):
        return self._points.shape[0]

    @property
    def num_elements(self):
        return self._elements.shape[0]

    def run(self, tolerance, backend=None):
        """
        Führt die Deduplizierung aus und cached das Ergebnis.

        Args:
            tolerance: Maximaler euklidischer Abstand (>= 0) für "gleicher Punkt"
            backend: Proximity-Backend (None = config.PROXIMITY_BACKEND)

        Returns:
            self

        Raises:
            InvalidTolerance: Bei negativer oder nicht-endlicher Toleranz
        """
        try:
            tol = float(tolerance)
        except (TypeError, ValueError):
            raise InvalidTolerance(tolerance) from None
        if math.isnan(tol) or math.isinf(tol) or tol < 0:
            raise InvalidTolerance(tolerance)

        timer = StepTimer(verbose=config.VERBOSE, indent="  ")

        with timer.step("Nachbarsuche"):
            proximity = ProximityIndex(self._points, tol, backend=backend)
            pairs = proximity.pairs()

        with timer.step("Äquivalenzklassen"):
            labels = resolve_equivalence_classes(self.num_points, pairs)

        with timer.step("Repräsentanten"):
            representatives = select_representatives(labels)

        with timer.step("Kompaktierung"):
            index_map, survivors = build_index_map(representatives)
            new_points = compact_points(self._points, survivors)
            new_elements = remap_elements(self._elements, index_map)

        num_removed = self.num_points - len(survivors)
        self._result = (new_points, new_elements, num_removed)

        if config.VERBOSE:
            if num_removed > 0:
                print(f"  ✓ {num_removed} doppelte Vertices zusammengeführt ({self.num_points} → {len(survivors)})")
            else:
                print(f"  → Keine doppelten Vertices (tolerance={tol})")
        return self

    def _require_result(self, accessor):
        if self._result is None:
            raise NotRunYet(accessor)
        return self._result

    def get_points(self):
        """Reduzierte Vertices (N', D), sortiert nach Original-Index des Repräsentanten."""
        return self._require_result("get_points")[0].copy()

    def get_elements(self):
        """Umgeschriebene Elemente (M, K), jeder Index in [0, N')."""
        return self._require_result("get_elements")[1].copy()

    def get_vertices(self):
        return self._require_result("get_vertices")[0].copy()

    def get_faces(self):
        return self._require_result("get_faces")[1].copy()

    @property
    def num_removed(self):
        """Anzahl entfernter Vertices (N - N') des letzten run()."""
        return self._require_result("num_removed")[2]

    def __repr__(self):
        state = "ungelaufen" if self._result is None else f"{self._result[2]} entfernt"
        return f"DuplicatedVertexRemoval({self.num_points} vertices, {self.num_elements} elements, {state})"


def remove_duplicated_vertices(points, elements, tolerance, backend=None):
    """
    Einmal-Aufruf: Deduplizierung ohne eigenes Objekt.

    Returns:
        (points, elements): Reduzierte Vertices und umgeschriebene Elemente
    """
    remover = DuplicatedVertexRemoval(points, elements).run(tolerance, backend=backend)
    return remover.get_points(), remover.get_elements()
