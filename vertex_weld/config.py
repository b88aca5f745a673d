"""
Zentrale Konfiguration für Vertex-Weld.
"""

# === TOLERANZ ===
# Standard-Toleranz (Einheiten der Koordinaten), nur vom CLI genutzt.
# Der Kern wählt nie selbst eine Toleranz.
DEFAULT_TOLERANCE = 1e-3

# === NACHBARSUCHE ===
# "auto" = Grid bis GRID_MAX_DIM, darüber KDTree
# "grid" = Spatial Hash mit Zellgröße = Toleranz (3^D Nachbarzellen)
# "kdtree" = scipy cKDTree.query_pairs
PROXIMITY_BACKEND = "auto"
GRID_MAX_DIM = 3  # Ab D=4 wird die 3^D Nachbarschaft zu teuer
PROXIMITY_BACKENDS = ("auto", "grid", "kdtree")

# === AUSGABE ===
VERBOSE = False  # True = Zusammenfassung nach jedem run() ausgeben

# === EXPORT ===
OBJ_FLOAT_FORMAT = "%.6f"  # Koordinaten-Format beim OBJ-Export
