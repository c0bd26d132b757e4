"""Submodule containing the VertEqUpscaler class, for integrating properties down the columns of a top surface."""

import logging

log = logging.getLogger(__name__)

import numpy as np

from ._elevation import Elevation

_below_one = float(np.nextafter(1.0, 0.0))  # largest fraction allowed within a block


class VertEqUpscaler:
    """Class for depth integration of fine scale properties within the columns of a top surface.

    notes:
       all methods work on one column at a time, identified by its index in the top surface; per block data for a
       column is held in a buffer ordered from the top of the column downwards; use allocate_buffer() to get a
       buffer large enough for any column
    """

    def __init__(self, mapping):
        """Create an upscaler working with the block heights held in an upscale mapping.

        arguments:
           mapping (UpscaleMapping): provides the top surface and the height of each block
        """

        self.mapping = mapping  #: the upscale mapping providing the weights
        self.ts = mapping.coarse_grid  #: the top surface

    def allocate_buffer(self):
        """Returns a zeroed numpy float vector long enough to hold per block values for any column."""
        return np.zeros(self.ts.max_vert_res)

    def gather(self, col, buf, data, stride = 1, offset = 0):
        """Copies a fine grid property for the blocks of one column into a buffer, ordered top to bottom.

        arguments:
           col (int): index of the column in the top surface
           buf (numpy float vector): preallocated buffer receiving the data; modified in place
           data (numpy float array): the property for the entire fine grid, in records of stride values
           stride (int, default 1): number of values in each record; use more than one for tensor properties
           offset (int, default 0): index within each record of the value to be gathered

        returns:
           buf, with the first num_rows(col) elements populated
        """

        cells = self._cells(col)
        assert len(buf) >= len(cells), 'buffer too short for column'
        data = np.asarray(data).ravel()
        buf[:len(cells)] = data[cells * stride + offset]
        return buf

    def wgt_dpt(self, col, val, res = None):
        """Integrates a piecewise constant quantity down a column.

        arguments:
           col (int): index of the column in the top surface
           val (numpy float vector): integrand value for each block in the column, top to bottom
           res (numpy float vector, optional): preallocated buffer receiving the result; modified in place

        returns:
           numpy float vector (res if given) holding, for each block, the integral of val over height from the
           top of the column down to and including that block; the last value is the column total
        """

        n = self.num_rows(col)
        height = self.mapping.column_height[col]
        val = np.asarray(val, dtype = float)
        assert len(val) >= n, 'too few integrand values for column'
        if res is None:
            res = np.empty(n)
        assert len(res) >= n, 'result buffer too short for column'
        res[:n] = np.cumsum(val[:n] * height)
        return res

    def dpt_avg(self, col, val):
        """Returns the height weighted average of a per block quantity over a whole column.

        raises:
           DegenerateColumnError if the column has zero total height and the mapping's policy is 'raise'
        """

        total = self.wgt_dpt(col, val)[-1]
        return float(self.mapping.ratio([total], self.mapping.total_height[col:col + 1], 'height', columns = [col])[0])

    def sum(self, col, val):
        """Returns the unweighted sum of a fine grid array over the cells of one column.

        note:
           use for quantities which do not depend on block size, such as source terms given as volumetric fluxes;
           val holds values for the entire fine grid, as for the data argument of gather()
        """

        return float(np.sum(np.asarray(val)[self._cells(col)]))

    def num_rows(self, col):
        """Returns the number of blocks in a column; use allocate_buffer() to get a buffer for any column."""

        self._check_column(col)
        return self.ts.num_rows(col)

    def bottom(self, col):
        """Returns the Elevation of the bottom of a column."""

        return Elevation(self.num_rows(col) - 1, 1.0)

    def eval(self, col, dpt, zeta):
        """Looks up the value of a depth integral at an elevation.

        arguments:
           col (int): index of the column in the top surface
           dpt (numpy float vector): integral down to and including each block, as returned by wgt_dpt()
           zeta (Elevation): the elevation at which the integral is wanted

        returns:
           float, being the integral from the top of the column down to zeta, interpolated linearly within the
           block containing zeta; exact at block boundaries
        """

        n = self.num_rows(col)
        assert zeta.block < n, f'elevation block {zeta.block} beyond bottom of column {col}'
        prev = 0.0 if zeta.block == 0 else float(dpt[zeta.block - 1])
        cur = float(dpt[zeta.block])
        return (1.0 - zeta.fraction) * prev + zeta.fraction * cur

    def find(self, col, dpt, target):
        """Finds the elevation at which a depth integral reaches a target value.

        arguments:
           col (int): index of the column in the top surface
           dpt (numpy float vector): integral down to and including each block, as returned by wgt_dpt(); must
              be non-decreasing, ie. computed from a non-negative integrand
           target (float): the value that the integral from the top down to the elevation should have

        returns:
           Elevation zeta for which eval(col, dpt, zeta) equals target; a target at or below zero gives the top
           of the column and a target at or above the column total gives bottom(col)

        note:
           where several blocks share the same cumulative value, the first qualifying block is returned; the
           fraction is kept below one, so a target exactly at the base of a block is reported as lying at the
           very end of that block rather than at the start of the next
        """

        n = self.num_rows(col)
        dpt = np.asarray(dpt, dtype = float)[:n]
        if target <= 0.0:
            return Elevation(0, 0.0)
        if target >= dpt[-1]:
            return self.bottom(col)
        block = int(np.searchsorted(dpt, target, side = 'left'))  # first block with dpt[block] >= target
        prev = 0.0 if block == 0 else float(dpt[block - 1])
        increment = float(dpt[block]) - prev
        if increment <= 0.0:
            fraction = 0.0
        else:
            fraction = min(max((target - prev) / increment, 0.0), _below_one)
        return Elevation(block, fraction)

    def _cells(self, col):
        self._check_column(col)
        return self.ts.column(col)

    def _check_column(self, col):
        assert 0 <= col < self.ts.column_count, f'column index out of range: {col}'
