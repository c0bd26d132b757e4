""" Shared fixtures for tests """

import logging

import numpy as np
import pytest

import verteqpy.grid as vg
import verteqpy.property as vp


@pytest.fixture(autouse = True)
def capture_logs(caplog):
    """Always capture log messages from verteqpy"""

    caplog.set_level(logging.DEBUG, logger = "verteqpy")


@pytest.fixture
def single_column_grid() -> vg.FineGrid:
    """A single column of 3 cells with heights 1, 2 and 3"""

    return vg.regular_fine_grid((3, 1, 1), dxyz = (10.0, 10.0, 1.0), dz = (1.0, 2.0, 3.0))


@pytest.fixture
def layered_grid() -> vg.FineGrid:
    """4 layers over 2 x 3 columns, with some cells inactive so that columns differ in length.

    column cell counts, in column order (j, i) = (0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2): 3, 4, 2, 4, 4, 3
    """

    extent = (4, 2, 3)
    active = np.ones(extent, dtype = bool)
    active[0, 0, 0] = False
    active[2:, 0, 2] = False
    active[3, 1, 2] = False
    top_depth = np.array([[1000.0, 1002.0, 1004.0], [1001.0, 1003.0, 1005.0]])
    return vg.regular_fine_grid(extent,
                                dxyz = (50.0, 40.0, 1.0),
                                dz = (2.0, 1.0, 4.0, 3.0),
                                top_depth = top_depth,
                                active = active)


@pytest.fixture
def layered_props(layered_grid) -> vp.IncompressibleProperties:
    """Fine scale properties varying from cell to cell, with a non-zero xy permeability"""

    n = layered_grid.cell_count
    perm = np.zeros((n, 3, 3))
    perm[:, 0, 0] = np.linspace(100.0, 500.0, n)
    perm[:, 1, 1] = np.linspace(50.0, 80.0, n)
    perm[:, 2, 2] = 10.0
    perm[:, 0, 1] = np.linspace(1.0, 3.0, n)
    perm[:, 1, 0] = perm[:, 0, 1]
    return vp.IncompressibleProperties(np.linspace(0.1, 0.3, n),
                                       perm,
                                       viscosity = (1.0e-3, 5.0e-5),
                                       density = (1000.0, 700.0))


@pytest.fixture
def pinched_grid() -> vg.FineGrid:
    """2 layers over 1 x 2 columns, where the second column has zero thickness throughout"""

    dz = np.array([[[1.0, 0.0]], [[2.0, 0.0]]])
    return vg.regular_fine_grid((2, 1, 2), dxyz = (10.0, 10.0, 1.0), dz = dz)
