# tests for verteqpy.upscale VertEqUpscaler and Elevation

import dataclasses

import pytest
import numpy as np
from numpy.testing import assert_array_almost_equal

import verteqpy.grid as vg
import verteqpy.upscale as vu
from verteqpy.olio.exceptions import DegenerateColumnError


def _upscaler(fine_grid, degenerate = None):
    ts = vg.TopSurface.from_fine_grid(fine_grid)
    return vu.VertEqUpscaler(vu.UpscaleMapping(fine_grid, ts, degenerate = degenerate))


def test_bottom_of_column(single_column_grid):
    up = _upscaler(single_column_grid)
    assert_array_almost_equal(up.mapping.cumulative_height[0], (1.0, 3.0, 6.0))
    assert up.num_rows(0) == 3
    assert up.bottom(0) == vu.Elevation(2, 1.0)


def test_find_within_and_at_block_boundary(single_column_grid):
    up = _upscaler(single_column_grid)
    dpt = np.array([2.0, 5.0, 9.0])
    zeta = up.find(0, dpt, 7.0)
    assert zeta.block == 2
    assert zeta.fraction == pytest.approx(0.5)
    # a target exactly at the base of block 1 stays within block 1
    zeta = up.find(0, dpt, 5.0)
    assert zeta.block == 1
    assert zeta.fraction == pytest.approx(1.0)
    assert zeta.fraction < 1.0
    assert up.eval(0, dpt, zeta) == pytest.approx(5.0)
    zeta = up.find(0, dpt, 1.0)
    assert zeta == vu.Elevation(0, 0.5)


def test_find_outside_column(single_column_grid):
    up = _upscaler(single_column_grid)
    dpt = np.array([2.0, 5.0, 9.0])
    assert up.find(0, dpt, 0.0) == vu.Elevation(0, 0.0)
    assert up.find(0, dpt, -3.0) == vu.Elevation(0, 0.0)
    assert up.find(0, dpt, 100.0) == up.bottom(0)
    assert up.find(0, dpt, 9.0) == up.bottom(0)


def test_find_skips_zero_height_block(single_column_grid):
    up = _upscaler(single_column_grid)
    dpt = np.array([1.0, 1.0, 3.0])
    zeta = up.find(0, dpt, 1.0)
    assert zeta.block == 0
    assert zeta.fraction == pytest.approx(1.0)
    zeta = up.find(0, dpt, 2.0)
    assert zeta == vu.Elevation(2, 0.5)


def test_eval_is_exact_at_block_ends(single_column_grid):
    up = _upscaler(single_column_grid)
    dpt = np.array([2.0, 5.0, 9.0])
    assert up.eval(0, dpt, vu.Elevation(0, 0.0)) == 0.0
    assert up.eval(0, dpt, vu.Elevation(1, 0.0)) == 2.0
    assert up.eval(0, dpt, vu.Elevation(1, 1.0)) == 5.0
    assert up.eval(0, dpt, up.bottom(0)) == 9.0
    assert up.eval(0, dpt, vu.Elevation(2, 0.25)) == pytest.approx(6.0)
    with pytest.raises(AssertionError):
        up.eval(0, dpt, vu.Elevation(3, 0.0))


def test_find_eval_round_trip(layered_grid):
    up = _upscaler(layered_grid)
    buf = up.allocate_buffer()
    res = up.allocate_buffer()
    saturation = np.linspace(0.0, 1.0, layered_grid.cell_count)
    for col in range(up.ts.column_count):
        n = up.num_rows(col)
        up.gather(col, buf, saturation)
        dpt = up.wgt_dpt(col, buf, res)[:n]
        for target in np.linspace(0.0, dpt[-1], 7):
            zeta = up.find(col, dpt, target)
            assert zeta.block < n
            assert up.eval(col, dpt, zeta) == pytest.approx(target)


def test_gather(layered_grid):
    up = _upscaler(layered_grid)
    buf = up.allocate_buffer()
    assert len(buf) == 4
    # column (0, 0) holds fine cells 5, 11 and 16
    returned = up.gather(0, buf, np.arange(20) * 10.0)
    assert returned is buf
    assert_array_almost_equal(buf[:3], (50.0, 110.0, 160.0))
    up.gather(0, buf, np.arange(60.0), stride = 3, offset = 2)
    assert_array_almost_equal(buf[:3], (17.0, 35.0, 50.0))
    with pytest.raises(AssertionError):
        up.gather(1, np.zeros(3), np.arange(20.0))


def test_wgt_dpt_and_dpt_avg(single_column_grid):
    up = _upscaler(single_column_grid)
    val = np.array([2.0, 1.0, 1.0])
    assert_array_almost_equal(up.wgt_dpt(0, val), (2.0, 4.0, 7.0))
    res = np.full(5, -1.0)
    returned = up.wgt_dpt(0, val, res)
    assert returned is res
    assert_array_almost_equal(res, (2.0, 4.0, 7.0, -1.0, -1.0))
    assert up.dpt_avg(0, val) == pytest.approx(7.0 / 6.0)
    assert up.dpt_avg(0, np.full(3, 0.4)) == pytest.approx(0.4)


def test_sum(layered_grid):
    up = _upscaler(layered_grid)
    flux = np.arange(20.0)
    assert up.sum(0, flux) == pytest.approx(5.0 + 11.0 + 16.0)
    total = sum(up.sum(col, flux) for col in range(up.ts.column_count))
    assert total == pytest.approx(np.sum(flux))


def test_column_out_of_range(single_column_grid):
    up = _upscaler(single_column_grid)
    with pytest.raises(AssertionError):
        up.num_rows(1)
    with pytest.raises(AssertionError):
        up.gather(-1, up.allocate_buffer(), np.zeros(3))
    with pytest.raises(AssertionError):
        up.find(1, np.array([1.0]), 0.5)


def test_degenerate_depth_average(pinched_grid):
    up = _upscaler(pinched_grid)
    assert up.dpt_avg(0, np.array([1.0, 4.0])) == pytest.approx(3.0)
    with pytest.raises(DegenerateColumnError) as excinfo:
        up.dpt_avg(1, np.array([1.0, 4.0]))
    assert excinfo.value.quantity == 'height'
    assert excinfo.value.columns == (1,)
    assert np.isnan(_upscaler(pinched_grid, degenerate = 'nan').dpt_avg(1, np.ones(2)))
    assert _upscaler(pinched_grid, degenerate = 'zero').dpt_avg(1, np.ones(2)) == 0.0


def test_elevation_invariants():
    zeta = vu.Elevation(3, 0.25)
    assert zeta.block == 3
    assert zeta.fraction == 0.25
    with pytest.raises(dataclasses.FrozenInstanceError):
        zeta.block = 4
    with pytest.raises(AssertionError):
        vu.Elevation(-1, 0.0)
    with pytest.raises(AssertionError):
        vu.Elevation(0, 1.5)
