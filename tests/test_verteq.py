# end to end tests for the VertEq class

import logging

import pytest
import numpy as np
from numpy.testing import assert_array_almost_equal

import verteqpy.grid as vg
import verteqpy.property as vp
import verteqpy.upscale as vu
from verteqpy.verteq import VertEq
from verteqpy.olio.exceptions import DegenerateColumnError


def test_vert_eq_layered(layered_grid, layered_props, caplog):
    ve = VertEq(layered_grid, layered_props, title = 'layered')
    assert ve.title == 'layered'
    assert isinstance(ve.grid, vg.TopSurface)
    assert isinstance(ve.mapping, vu.UpscaleMapping)
    assert isinstance(ve.props, vp.VertEqProps)
    assert isinstance(ve.upscaler, vu.VertEqUpscaler)
    assert ve.grid.column_count == 6
    assert ve.props.num_cells() == 6
    assert ve.props.num_dimensions() == 2
    assert any(r.levelno == logging.INFO and "'layered'" in r.getMessage() for r in caplog.records)

    # locate the depth at which half of the column's pore height is reached
    upscaler = ve.upscaler
    buf = upscaler.allocate_buffer()
    for col in range(ve.grid.column_count):
        n = upscaler.num_rows(col)
        upscaler.gather(col, buf, layered_props.porosity())
        dpt = upscaler.wgt_dpt(col, buf)
        zeta = upscaler.find(col, dpt, 0.5 * dpt[-1])
        assert upscaler.eval(col, dpt, zeta) == pytest.approx(0.5 * dpt[-1])
        assert zeta.block < n


def test_vert_eq_default_title(single_column_grid):
    fine = vp.IncompressibleProperties.from_diagonal(np.full(3, 0.25), 10.0, 10.0, 1.0, (1.0e-3,), (1000.0,))
    ve = VertEq(single_column_grid, fine)
    assert ve.title == 'vertical equilibrium'
    assert_array_almost_equal(ve.mapping.cumulative_height[0], (1.0, 3.0, 6.0))
    assert ve.props.porosity()[0] == 0.25


def test_vert_eq_custom_top_surface(layered_grid, layered_props):
    ts = vg.TopSurface(np.zeros(layered_grid.cell_count, dtype = int), sort_key = layered_grid.cell_kji0[:, 0])
    ve = VertEq(layered_grid, layered_props, top_surface = ts)
    assert ve.grid is ts
    assert ve.props.num_cells() == 1
    assert ve.props.porosity()[0] == pytest.approx(
        np.sum(layered_grid.cell_volumes * layered_props.porosity()) / np.sum(layered_grid.cell_volumes))


def test_vert_eq_degenerate_columns(pinched_grid):
    fine = vp.IncompressibleProperties.from_diagonal(np.full(4, 0.2), 10.0, 10.0, 1.0, (1.0e-3,), (1000.0,))
    with pytest.raises(DegenerateColumnError):
        VertEq(pinched_grid, fine)
    ve = VertEq(pinched_grid, fine, degenerate = 'nan')
    assert ve.props.porosity()[0] == pytest.approx(0.2)
    assert np.isnan(ve.props.porosity()[1])
    assert np.all(np.isnan(ve.props.permeability()[4:]))
