"""
Mesh-Import/Export: OBJ (eigener Parser/Writer) und PyVista-Konvertierung.

Intern sind alle Indices 0-basiert, in OBJ-Dateien 1-basiert.
"""

import os

import numpy as np
import pyvista as pv

from .. import config


def _parse_face_index(token, num_vertices, line_num):
    """OBJ-Face-Token (a, a/b, a/b/c, a//c) -> 0-basierter Vertex-Index."""
    idx = int(token.split("/", 1)[0])
    if idx > 0:
        return idx - 1
    if idx < 0:
        # Negativ = relativ zu den bisher gelesenen Vertices (-1 = letzter)
        return num_vertices + idx
    raise ValueError(f"Zeile {line_num}: Face-Index 0 ist in OBJ ungültig")


def load_obj(filename, dim=3):
    """
    Lädt Vertices und Faces aus einer OBJ-Datei.

    Args:
        filename: Pfad zur OBJ-Datei
        dim: Anzahl übernommener Koordinaten pro Vertex (2 für planare Meshes)

    Returns:
        (vertices, faces): (N, dim) float64 und (M, K) int64, 0-basiert

    Raises:
        ValueError: Bei gemischter Face-Arity oder unvollständigen Vertices
    """
    vertices = []
    faces = []

    with open(filename, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            parts = line.split()
            if not parts or parts[0].startswith("#"):
                continue

            if parts[0] == "v":
                coords = parts[1:]
                if len(coords) < dim:
                    raise ValueError(f"Zeile {line_num}: Vertex hat {len(coords)} Koordinaten, erwartet {dim}")
                vertices.append([float(c) for c in coords[:dim]])
            elif parts[0] == "f":
                face = [_parse_face_index(tok, len(vertices), line_num) for tok in parts[1:]]
                if faces and len(face) != len(faces[0]):
                    raise ValueError(
                        f"Zeile {line_num}: Face mit {len(face)} Vertices, bisher {len(faces[0])} (gemischte Arity)"
                    )
                faces.append(face)
            # vn, vt, o, g, usemtl, mtllib, s: ignorieren

    vertices_np = np.array(vertices, dtype=np.float64).reshape(-1, dim)
    if faces:
        faces_np = np.array(faces, dtype=np.int64)
    else:
        faces_np = np.empty((0, 3), dtype=np.int64)
    return vertices_np, faces_np


def _format_rows(prefix, array, fmt=None):
    """Formatiert Zeilen per NumPy String-Ops statt Python-Loop."""
    columns = [np.char.mod(fmt, array[:, k]) if fmt else array[:, k].astype(str) for k in range(array.shape[1])]
    lines = np.char.add(prefix, columns[0])
    for col in columns[1:]:
        lines = np.char.add(np.char.add(lines, " "), col)
    return "\n".join(lines.tolist()) + "\n"


def save_obj(filename, vertices, faces, header="Vertex-Weld Mesh"):
    """
    Speichert Vertices und Faces als OBJ (2D-Vertices mit z = 0).

    Args:
        filename: Zielpfad
        vertices: (N, D) Koordinaten, D <= 3
        faces: (M, K) 0-basierte Indices
    """
    v_array = np.asarray(vertices, dtype=np.float64)
    f_array = np.asarray(faces, dtype=np.int64)
    if v_array.ndim != 2 or v_array.shape[1] > 3:
        raise ValueError(f"OBJ unterstützt nur 1-3 Koordinaten pro Vertex, erhalten: Shape {v_array.shape}")
    if v_array.shape[1] < 3:
        v_array = np.hstack([v_array, np.zeros((len(v_array), 3 - v_array.shape[1]))])

    with open(filename, "w", encoding="utf-8", buffering=8 * 1024 * 1024) as f:
        f.write(f"# {header}\n")
        f.write(f"# {len(v_array)} vertices, {len(f_array)} faces\n")
        if len(v_array):
            f.write(_format_rows("v ", v_array, config.OBJ_FLOAT_FORMAT))
        if f_array.size:
            f.write(_format_rows("f ", f_array + 1))


def create_pyvista_mesh(vertices, faces):
    """Erstellt PyVista PolyData aus Vertices (2D wird mit z = 0 aufgefüllt) und Faces konstanter Arity."""
    v_array = np.asarray(vertices, dtype=np.float64)
    if v_array.ndim != 2 or v_array.shape[1] > 3:
        raise ValueError(f"PyVista braucht (N, <=3) Vertices, erhalten: Shape {v_array.shape}")
    if v_array.shape[1] < 3:
        v_array = np.hstack([v_array, np.zeros((len(v_array), 3 - v_array.shape[1]))])

    f_array = np.asarray(faces, dtype=np.int64)
    if f_array.size == 0:
        return pv.PolyData(v_array)

    # PyVista Face-Format: [K, v0, ..., vK-1, K, v0, ...]
    num_faces, arity = f_array.shape
    pyvista_faces = np.empty((num_faces, arity + 1), dtype=np.int64)
    pyvista_faces[:, 0] = arity
    pyvista_faces[:, 1:] = f_array
    return pv.PolyData(v_array, pyvista_faces.ravel())


def polydata_to_arrays(polydata, dim=3):
    """
    Extrahiert Vertices und Faces aus PyVista PolyData.

    Returns:
        (vertices, faces): (N, dim) float64 und (M, K) int64

    Raises:
        ValueError: Wenn die Faces keine konstante Arity haben
    """
    vertices = np.array(polydata.points, dtype=np.float64)[:, :dim]
    flat = np.asarray(polydata.faces, dtype=np.int64)
    if flat.size == 0:
        return vertices, np.empty((0, 3), dtype=np.int64)

    arity = int(flat[0])
    if flat.size % (arity + 1) != 0:
        raise ValueError("PolyData enthält Faces mit gemischter Arity")
    rows = flat.reshape(-1, arity + 1)
    if np.any(rows[:, 0] != arity):
        raise ValueError("PolyData enthält Faces mit gemischter Arity")
    return vertices, rows[:, 1:].copy()


def load_mesh(filename, dim=3):
    """Lädt ein Mesh: OBJ über load_obj, alle anderen Formate über pyvista.read."""
    ext = os.path.splitext(filename)[1].lower()
    if ext == ".obj":
        return load_obj(filename, dim=dim)

    data = pv.read(filename)
    if not isinstance(data, pv.PolyData):
        data = data.extract_surface()
    return polydata_to_arrays(data, dim=dim)


def save_mesh(filename, vertices, faces):
    """Speichert ein Mesh: OBJ über save_obj, alle anderen Formate über PyVista."""
    ext = os.path.splitext(filename)[1].lower()
    if ext == ".obj":
        save_obj(filename, vertices, faces)
        return
    create_pyvista_mesh(vertices, faces).save(filename)
