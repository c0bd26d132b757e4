"""runlen.py: Run-length encoded matrices, ie. a variable number of values held for each of a fixed set of columns.

note:
   the layout is the one used for jagged arrays throughout verteqpy: an offset array pos with one more element
   than there are columns, with pos[0] == 0 and pos[col + 1] - pos[col] being the number of values in column col;
   the values for all the columns are held contiguously in a flat array, column after column; the sparsity
   pattern is fixed once a matrix is constructed, only the values may be changed
"""

import logging

log = logging.getLogger(__name__)

import numpy as np


def offsets_from_sizes(sizes):
    """Returns a numpy int array of offsets, with a leading zero, for a sequence of column sizes.

    arguments:
       sizes (sequence or numpy vector of int): the number of values in each column

    returns:
       numpy int array of length len(sizes) + 1 suitable for use as the pos argument of a RunLenView
    """

    sizes = np.asarray(sizes, dtype = int)
    assert sizes.ndim == 1, 'column sizes must be a one dimensional array'
    assert np.all(sizes >= 0), 'negative column size'
    pos = np.zeros(len(sizes) + 1, dtype = int)
    np.cumsum(sizes, out = pos[1:])
    return pos


class RunLenView:
    """Class for accessing an existing run-length encoded matrix without taking ownership of its arrays.

    example:
       faces_in_cell = RunLenView(grid.cell_count, grid.faces_per_cell_pos, grid.faces_per_cell)
       n_local_faces = faces_in_cell.size(cell)
       first_local_face = faces_in_cell[cell][0]
    """

    def __init__(self, num_cols, pos, values):
        """Create a view onto offset and value arrays which are held elsewhere.

        arguments:
           num_cols (int): the number of columns in the matrix
           pos (numpy int array of length num_cols + 1): starting index in values for each column, with a final
              element holding the total number of values
           values (numpy array): the values for all columns, held contiguously

        notes:
           neither array is copied; the view is only meaningful while the underlying arrays remain unchanged
           in size; values written through the view are seen by the owner of the arrays and vice versa
        """

        assert num_cols >= 0
        assert isinstance(pos, np.ndarray) and isinstance(values, np.ndarray), 'run-length arrays must be numpy'
        assert pos.ndim == 1 and len(pos) == num_cols + 1, 'offsets must have one more element than columns'
        assert pos[0] == 0, 'first offset must be zero'
        assert np.all(pos[1:] >= pos[:-1]), 'offsets must not decrease'
        assert len(values) >= pos[num_cols], 'value array too short for offsets'
        self.num_cols = int(num_cols)  #: the number of columns
        self.pos = pos  #: the offsets, borrowed
        self.data = values  #: the values, borrowed

    def __getitem__(self, col):
        """Returns a writable numpy view of the values in column col."""
        return self.data[self.pos[col]:self.pos[col + 1]]

    def __len__(self):
        return self.num_cols

    def size(self, col):
        """Returns the number of values held in column col."""
        return int(self.pos[col + 1] - self.pos[col])

    def sizes(self):
        """Returns a numpy int array holding the number of values in every column."""
        return self.pos[1:] - self.pos[:-1]

    def last(self, col):
        """Returns the last value in column col; for cumulative data this is the column total.

        note:
           undefined for an empty column
        """
        return self.data[self.pos[col + 1] - 1]

    def columns(self):
        """Returns a range over all the column indices."""
        return range(self.num_cols)

    def each(self, col):
        """Returns the values in column col, for iteration; same as indexing by col."""
        return self[col]

    def all(self):
        """Returns a writable numpy view of all the values, regardless of column."""
        return self.data[:self.pos[self.num_cols]]


class RunLenData(RunLenView):
    """Class for a run-length encoded matrix which allocates and owns its own value array.

    note:
       the offsets are still borrowed, typically from a grid; use this class to attach extra data to
       each element of an existing run-length structure
    """

    def __init__(self, num_cols, pos, dtype = float):
        """Allocate a zero filled value array sized from the offsets.

        arguments:
           num_cols (int): the number of columns in the matrix
           pos (numpy int array of length num_cols + 1): offsets, as for RunLenView
           dtype (numpy dtype, default float): the data type for the values
        """

        assert isinstance(pos, np.ndarray) and len(pos) == num_cols + 1
        super().__init__(num_cols, pos, np.zeros(int(pos[num_cols]), dtype = dtype))
