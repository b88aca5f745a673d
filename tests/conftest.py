import os

import numpy as np
import pytest

from vertex_weld import config
from vertex_weld.io.obj import load_obj

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def square_2d():
    return load_obj(os.path.join(DATA_DIR, "square_2D.obj"), dim=2)


@pytest.fixture
def cube_3d():
    return load_obj(os.path.join(DATA_DIR, "cube.obj"), dim=3)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture(autouse=True)
def _restore_config():
    backend, verbose = config.PROXIMITY_BACKEND, config.VERBOSE
    yield
    config.PROXIMITY_BACKEND, config.VERBOSE = backend, verbose
