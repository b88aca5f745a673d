"""
Fehlerklassen für die Vertex-Deduplizierung.

Alle Fehler werden deterministisch aus Form und Werten der Eingaben erkannt
und sofort an den Aufrufer gemeldet - nichts wird still geklemmt.
"""


class VertexWeldError(Exception):
    """Basisklasse aller Vertex-Weld Fehler."""


class InvalidTolerance(VertexWeldError, ValueError):
    """Toleranz ist negativ oder nicht endlich."""

    def __init__(self, tolerance):
        self.tolerance = tolerance
        super().__init__(f"Toleranz muss endlich und >= 0 sein, erhalten: {tolerance!r}")


class IndexOutOfRange(VertexWeldError, IndexError):
    """Ein Element referenziert einen Vertex-Index außerhalb von [0, N)."""

    def __init__(self, element_idx, vertex_idx, num_points):
        self.element_idx = element_idx
        self.vertex_idx = vertex_idx
        self.num_points = num_points
        super().__init__(
            f"Element {element_idx} referenziert Vertex {vertex_idx}, "
            f"gültig ist nur [0, {num_points})"
        )


class NotRunYet(VertexWeldError, RuntimeError):
    """Ergebnis abgefragt, bevor run() erfolgreich war."""

    def __init__(self, accessor):
        self.accessor = accessor
        super().__init__(f"{accessor}() erst nach run() verfügbar")
