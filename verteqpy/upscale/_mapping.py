"""Submodule containing the UpscaleMapping class, holding the geometry of each column of a fine grid."""

import logging

log = logging.getLogger(__name__)

import numpy as np
import pandas as pd

import verteqpy.grid as vg
import verteqpy.olio.column_kernels as ck
import verteqpy.olio.runlen as rl
from verteqpy.olio.exceptions import DegenerateColumnError, MissingTopologyError

valid_degenerate_policies = ('raise', 'nan', 'zero')  #: ways of handling columns with zero total volume or height
default_degenerate_policy = 'raise'  #: used when no policy is passed to UpscaleMapping


class UpscaleMapping:
    """Class for mapping between the cells of a fine grid and the columns of a top surface over it.

    notes:
       heights and volumes are gathered once, at initialisation, and are used to integrate fine scale properties
       along each column; the top surface must have been derived from the fine grid, ie. its columns must
       partition the fine cells completely and exclusively; this is assumed, not verified
    """

    def __init__(self, fine_grid, coarse_grid, degenerate = None):
        """Gathers heights and volumes for each cell and column.

        arguments:
           fine_grid (FineGrid): the three dimensional grid
           coarse_grid (TopSurface): the two dimensional grid of columns built over the fine grid
           degenerate (str, optional): one of 'raise', 'nan' or 'zero', determining what is returned when
              averaging over a column with zero total volume or height; defaults to default_degenerate_policy

        returns:
           the newly created UpscaleMapping object

        raises:
           MissingTopologyError if any fine cell lacks an UP or a DOWN face
           ValueError if degenerate is not a recognised policy

        note:
           with the 'raise' policy, no error is raised here; DegenerateColumnError is raised by the averaging
           methods when they meet a degenerate column
        """

        if degenerate is None:
            degenerate = default_degenerate_policy
        if degenerate not in valid_degenerate_policies:
            raise ValueError(f"unrecognised degenerate column policy '{degenerate}'")
        assert coarse_grid.fine_cell_count == fine_grid.cell_count, 'top surface does not match fine grid'

        self.fine_grid = fine_grid  #: the fine grid
        self.coarse_grid = coarse_grid  #: the top surface
        self.degenerate = degenerate  #: policy for columns with zero total volume or height
        self.num_dims = coarse_grid.dimensions  #: number of dimensions in the coarse grid
        self.num_cols = coarse_grid.column_count  #: number of columns, ie. elements in the coarse grid
        self.num_elems = fine_grid.cell_count  #: number of fine cells

        self.blk_id = coarse_grid.columns()  #: run-length view of fine cell indices for each column

        # height of each fine cell: z difference between centre of top face and centre of bottom face
        self.up_face = self._find_faces(vg.UP)  #: index of UP face for each fine cell
        self.down_face = self._find_faces(vg.DOWN)  #: index of DOWN face for each fine cell
        z = fine_grid.face_centroids[:, 2]
        self.height = z[self.down_face] - z[self.up_face]  #: height of each fine cell, indexed by cell

        col_pos = coarse_grid.col_cellpos
        col_cells = coarse_grid.col_cells

        self.column_height = rl.RunLenData(self.num_cols, col_pos)  #: height of each block, column by column
        self.column_height.all()[:] = self.height[col_cells]
        acc_hgt, self.total_height = ck.running_totals(col_pos, col_cells, self.height)
        self.cumulative_height = rl.RunLenData(self.num_cols, col_pos)  #: height from top of column to base of block
        self.cumulative_height.all()[:] = acc_hgt

        acc_vol, self.total_volume = ck.running_totals(col_pos, col_cells, fine_grid.cell_volumes)
        self.cumulative_volume = np.empty(self.num_elems)  #: volume from top of column down to each cell, by cell
        self.cumulative_volume[col_cells] = acc_vol

        self._warn_degenerate('volume', self.total_volume)
        self._warn_degenerate('height', self.total_height)
        log.debug(f'upscale mapping built for {self.num_cols} columns from {self.num_elems} fine cells')

    def find_face(self, glob_elem_id, side):
        """Returns the index of the face of a fine cell which is on the given side.

        arguments:
           glob_elem_id (int): index of the cell in the fine grid
           side (int): side tag to locate, eg. UP or DOWN

        returns:
           int, being the face index of the first face of the cell with the side tag

        raises:
           MissingTopologyError if the cell has no such face
        """

        assert 0 <= glob_elem_id < self.num_elems, f'fine cell index out of range: {glob_elem_id}'
        faces = self.fine_grid.cell_faces()[glob_elem_id]
        tags = self.fine_grid.cell_face_tags()[glob_elem_id]
        matches = np.where(tags == side)[0]
        if len(matches) == 0:
            raise self._missing_topology(glob_elem_id, side)
        return int(faces[matches[0]])

    def find_height(self, glob_elem_id):
        """Returns the height of a fine cell: the z difference between the centres of its top and bottom faces."""

        z = self.fine_grid.face_centroids[:, 2]
        return float(z[self.find_face(glob_elem_id, vg.DOWN)] - z[self.find_face(glob_elem_id, vg.UP)])

    def vol_avg(self, fine_data, fine_ofs, fine_stride, col_data, col_ofs, col_stride):
        """Computes the volume weighted average of a fine grid property for every column.

        arguments:
           fine_data (numpy float array): input data, one record of fine_stride values per fine cell
           fine_ofs (int): index within each fine record of the value to be averaged
           fine_stride (int): number of values in each fine record; use 1 for a simple array
           col_data (numpy float vector): output data, one record of col_stride values per column; must be
              preallocated and is modified in place
           col_ofs (int): index within each column record at which the average is stored
           col_stride (int): number of values in each column record

        returns:
           col_data, with the average for column c stored at index c * col_stride + col_ofs

        raises:
           DegenerateColumnError if a column has zero total volume and the mapping's policy is 'raise'

        note:
           the same method serves scalar properties and each component of a tensor property
        """

        fine_data = np.ascontiguousarray(fine_data, dtype = np.float64).ravel()
        assert 0 <= fine_ofs < fine_stride, 'fine offset must lie within the record'
        assert len(fine_data) >= (self.num_elems - 1) * fine_stride + fine_ofs + 1, 'fine data too short'
        assert isinstance(col_data, np.ndarray) and col_data.ndim == 1, 'column data must be a numpy vector'
        assert 0 <= col_ofs < col_stride, 'column offset must lie within the record'
        assert len(col_data) >= (self.num_cols - 1) * col_stride + col_ofs + 1, 'column data too short'

        sums = ck.weighted_column_sums(self.coarse_grid.col_cellpos, self.coarse_grid.col_cells,
                                       self.fine_grid.cell_volumes, fine_data, int(fine_ofs), int(fine_stride))
        col_data[col_ofs + col_stride * np.arange(self.num_cols)] = self.ratio(sums, self.total_volume, 'volume')
        return col_data

    def ratio(self, numerator, denominator, quantity, columns = None):
        """Returns numerator / denominator for arrays with one element per column, applying the degenerate policy.

        arguments:
           numerator (numpy float array): values to be divided
           denominator (numpy float array): column totals of volume or height
           quantity (str): 'volume' or 'height', used in messages
           columns (numpy int array, optional): the column index of each element; if None, element i is column i

        returns:
           numpy float array; where the denominator is zero the result is NaN or zero depending on the policy

        raises:
           DegenerateColumnError if any denominator is zero and the policy is 'raise'
        """

        numerator = np.asarray(numerator, dtype = float)
        denominator = np.asarray(denominator, dtype = float)
        zero = (denominator == 0.0)
        if not np.any(zero):
            return numerator / denominator
        if self.degenerate == 'raise':
            bad = np.where(zero)[0]
            raise DegenerateColumnError(bad if columns is None else np.asarray(columns)[bad], quantity)
        result = np.full(numerator.shape, np.nan if self.degenerate == 'nan' else 0.0)
        result[~zero] = numerator[~zero] / denominator[~zero]
        return result

    def column_dataframe(self):
        """Returns a pandas dataframe with one row per column: column, cell_count, total_height, total_volume."""

        return pd.DataFrame({
            'column': np.arange(self.num_cols),
            'cell_count': self.blk_id.sizes(),
            'total_height': self.total_height,
            'total_volume': self.total_volume
        })

    def _find_faces(self, side):
        fg = self.fine_grid
        slots = ck.find_tagged_slots(fg.faces_per_cell_pos, fg.face_tags, side)
        missing = np.where(slots < 0)[0]
        if len(missing):
            raise self._missing_topology(int(missing[0]), side)
        return fg.faces_per_cell[slots]

    def _missing_topology(self, cell, side):
        name = vg.side_names[side] if 0 <= side < len(vg.side_names) else str(side)
        message = f'fine grid cell {cell} has no {name} face'
        log.error(message)
        return MissingTopologyError(cell, side, message = message)

    def _warn_degenerate(self, quantity, totals):
        zero_count = np.count_nonzero(totals == 0.0)
        if zero_count and self.degenerate != 'raise':
            log.warning(f'{zero_count} column(s) have zero total {quantity}; '
                        f'averages will be {self.degenerate} for these columns')
