"""Submodule containing the TopSurface class, the two dimensional grid of columns over a fine grid."""

import logging

log = logging.getLogger(__name__)

import numpy as np

import verteqpy.olio.runlen as rl


class TopSurface:
    """Class for a two dimensional grid whose elements are the columns of a three dimensional fine grid.

    notes:
       each column owns an ordered, top to bottom, list of fine cell indices (its blocks); the columns partition
       the fine cells completely and exclusively; columns without any fine cells are not represented
    """

    dimensions = 2  #: number of dimensions of the coarse grid

    def __init__(self, fine_col, sort_key = None):
        """Create a top surface from the column membership of each fine cell.

        arguments:
           fine_col (numpy int array of shape (N,)): an identifier of the column for each fine cell; identifiers
              need not be contiguous
           sort_key (numpy array of shape (N,), optional): a key which increases downwards within each column,
              such as a k index or a depth; if None, fine cell index order is used within each column

        returns:
           the newly created TopSurface object

        note:
           columns are numbered in increasing order of their identifiers in fine_col; the original identifier of
           each column is kept in the source_column attribute
        """

        fine_col = np.asarray(fine_col)
        assert fine_col.ndim == 1 and len(fine_col) > 0, 'column identifiers must be a non-empty vector'
        n = len(fine_col)
        if sort_key is None:
            sort_key = np.arange(n)
        sort_key = np.asarray(sort_key)
        assert sort_key.shape == fine_col.shape, 'sort key does not match column identifiers'

        self.source_column, col_index = np.unique(fine_col, return_inverse = True)  #: identifier of each column
        col_index = col_index.ravel()
        self.column_count = len(self.source_column)  #: the number of columns, M
        self.fine_cell_count = n  #: the number of fine cells, N
        self.fine_col = col_index.astype(np.int64)  #: column index for each fine cell
        sizes = np.bincount(col_index, minlength = self.column_count)
        self.col_cellpos = rl.offsets_from_sizes(sizes).astype(np.int64)  #: offsets into col_cells per column
        self.col_cells = np.lexsort((sort_key, col_index)).astype(np.int64)  #: fine cells, column by column
        self.max_vert_res = int(np.max(sizes))  #: largest number of blocks in any column
        self.column_ji0 = None  #: (j, i) indices of each column, for a top surface over a regular grid
        log.debug(f'top surface built with {self.column_count} columns over {n} fine cells')

    @classmethod
    def from_fine_grid(cls, fine_grid):
        """Returns a TopSurface for a structured fine grid, with blocks ordered by increasing k.

        arguments:
           fine_grid (FineGrid): a grid with extent_kji and cell_kji0 set, eg. from regular_fine_grid()

        returns:
           the newly created TopSurface object, with column_ji0 populated
        """

        assert fine_grid.cell_kji0 is not None, 'logical cell indices needed to build top surface'
        ni = fine_grid.extent_kji[2]
        k = fine_grid.cell_kji0[:, 0]
        ji = fine_grid.cell_kji0[:, 1] * ni + fine_grid.cell_kji0[:, 2]
        ts = cls(ji, sort_key = k)
        ts.column_ji0 = np.stack(np.divmod(ts.source_column, ni), axis = -1)
        return ts

    def columns(self):
        """Returns a run-length view of the fine cells in each column."""
        return rl.RunLenView(self.column_count, self.col_cellpos, self.col_cells)

    def column(self, col):
        """Returns numpy int array of the fine cells in the column, ordered top to bottom."""
        return self.col_cells[self.col_cellpos[col]:self.col_cellpos[col + 1]]

    def num_rows(self, col):
        """Returns the number of blocks in the column."""
        return int(self.col_cellpos[col + 1] - self.col_cellpos[col])
