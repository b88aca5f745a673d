import os

import numpy as np
import pytest
import pyvista as pv
from numpy.testing import assert_allclose, assert_array_equal

from vertex_weld.io.obj import (
    create_pyvista_mesh,
    load_mesh,
    load_obj,
    polydata_to_arrays,
    save_mesh,
    save_obj,
)


def test_load_square_2d(square_2d):
    vertices, faces = square_2d
    assert_array_equal(vertices, [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    assert_array_equal(faces, [[0, 1, 2], [0, 2, 3]])


def test_load_cube(cube_3d):
    vertices, faces = cube_3d
    assert vertices.shape == (8, 3)
    assert faces.shape == (12, 3)
    assert faces.min() == 0
    assert faces.max() == 7


def test_load_obj_face_token_variants(tmp_path):
    path = tmp_path / "tokens.obj"
    path.write_text(
        "o quad\n"
        "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\n"
        "vt 0 0\nvn 0 0 1\n"
        "usemtl default\n"
        "f 1/1/1 2//1 3/1 -1\n",
        encoding="utf-8",
    )
    vertices, faces = load_obj(str(path))
    assert vertices.shape == (4, 3)
    assert_array_equal(faces, [[0, 1, 2, 3]])


def test_load_obj_mixed_arity(tmp_path):
    path = tmp_path / "mixed.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3\nf 1 2 3 4\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Arity"):
        load_obj(str(path))


def test_load_obj_zero_index(tmp_path):
    path = tmp_path / "zero.obj"
    path.write_text("v 0 0 0\nf 0 1 1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Face-Index 0"):
        load_obj(str(path))


def test_load_obj_missing_coordinates(tmp_path):
    path = tmp_path / "short.obj"
    path.write_text("v 0 0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_obj(str(path), dim=3)


def test_save_obj_2d_pads_z(tmp_path, square_2d):
    vertices, faces = square_2d
    path = str(tmp_path / "out.obj")
    save_obj(path, vertices, faces)

    with open(path, encoding="utf-8") as f:
        lines = [line.split() for line in f if line.strip() and not line.startswith("#")]
    assert lines[0] == ["v", "0.000000", "0.000000", "0.000000"]
    assert lines[-1] == ["f", "1", "3", "4"]

    reloaded_vertices, reloaded_faces = load_obj(path, dim=2)
    assert_allclose(reloaded_vertices, vertices)
    assert_array_equal(reloaded_faces, faces)


def test_save_obj_rejects_high_dimension(tmp_path):
    with pytest.raises(ValueError):
        save_obj(str(tmp_path / "x.obj"), np.zeros((2, 4)), [[0, 1, 1]])


def test_pyvista_conversion(cube_3d):
    vertices, faces = cube_3d
    polydata = create_pyvista_mesh(vertices, faces)
    assert isinstance(polydata, pv.PolyData)
    assert polydata.n_points == 8
    assert polydata.n_cells == 12

    vertices_out, faces_out = polydata_to_arrays(polydata)
    assert_allclose(vertices_out, vertices)
    assert_array_equal(faces_out, faces)


def test_pyvista_2d_points_padded(square_2d):
    polydata = create_pyvista_mesh(*square_2d)
    assert_allclose(np.asarray(polydata.points)[:, 2], 0.0)


def test_pyvista_mixed_arity():
    polydata = pv.PolyData(
        np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float),
        np.array([3, 0, 1, 2, 4, 0, 1, 2, 3]),
    )
    with pytest.raises(ValueError, match="Arity"):
        polydata_to_arrays(polydata)


def test_load_and_save_mesh_via_pyvista(tmp_path, cube_3d):
    vertices, faces = cube_3d
    path = str(tmp_path / "cube.vtk")
    save_mesh(path, vertices, faces)
    assert os.path.exists(path)

    vertices_out, faces_out = load_mesh(path)
    assert_allclose(vertices_out, vertices)
    assert_array_equal(faces_out, faces)


def test_load_mesh_obj(data_dir):
    vertices, faces = load_mesh(os.path.join(data_dir, "square_2D.obj"), dim=2)
    assert vertices.shape == (4, 2)
    assert faces.shape == (2, 3)
