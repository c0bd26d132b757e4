"""Compiled loops over the columns (or cells) of run-length encoded grid data.

note:
   every kernel iterates over an index range with numba.prange; each iteration reads only its own slice of the
   input and writes only its own output slots, so iterations are independent of each other; callers should pass
   contiguous numpy arrays of int64 offsets and indices and float64 values
"""

import logging

log = logging.getLogger(__name__)

import numpy as np
import numba  # type: ignore
from numba import njit  # type: ignore


@njit  # pragma: no cover
def find_tagged_slots(pos: np.ndarray, tags: np.ndarray, tag: int) -> np.ndarray:
    """Finds, for each row of a run-length encoded tag array, the first slot holding the given tag.

    arguments:
       pos (numpy int64 array of shape (n + 1,)): offsets into tags for each of n rows
       tags (numpy int64 array): the tag values, run-length encoded by pos
       tag (int): the tag value to search for

    returns:
       numpy int64 array of shape (n,) holding the flat slot index of the first matching tag in each row,
       or -1 where the row has no such tag
    """
    n = len(pos) - 1
    slots = np.full(n, -1, dtype = np.int64)
    for row in numba.prange(n):
        for slot in range(pos[row], pos[row + 1]):
            if tags[slot] == tag:
                slots[row] = slot
                break
    return slots


@njit  # pragma: no cover
def running_totals(col_pos: np.ndarray, col_cells: np.ndarray, cell_values: np.ndarray):
    """Accumulates a per cell quantity down each column.

    arguments:
       col_pos (numpy int64 array of shape (m + 1,)): offsets into col_cells for each of m columns
       col_cells (numpy int64 array): fine cell indices for each column, ordered top to bottom
       cell_values (numpy float64 array): the quantity for every fine cell, indexed by cell

    returns:
       (numpy float64 array of same length as col_cells, numpy float64 array of shape (m,)) being the running
       total after including each cell, in column slot order, and the total for each column
    """
    m = len(col_pos) - 1
    acc = np.zeros(len(col_cells), dtype = np.float64)
    totals = np.zeros(m, dtype = np.float64)
    for col in numba.prange(m):
        running_total = 0.0
        for slot in range(col_pos[col], col_pos[col + 1]):
            running_total += cell_values[col_cells[slot]]
            acc[slot] = running_total
        totals[col] = running_total
    return acc, totals


@njit  # pragma: no cover
def weighted_column_sums(col_pos: np.ndarray, col_cells: np.ndarray, weights: np.ndarray, fine_data: np.ndarray,
                         fine_ofs: int, fine_stride: int) -> np.ndarray:
    """Sums a strided fine cell property multiplied by a per cell weight over each column.

    arguments:
       col_pos (numpy int64 array of shape (m + 1,)): offsets into col_cells for each of m columns
       col_cells (numpy int64 array): fine cell indices for each column
       weights (numpy float64 array): weight for every fine cell, indexed by cell
       fine_data (numpy float64 array): flat property data; the value for cell c is at c * fine_stride + fine_ofs
       fine_ofs (int): offset of the component of interest within each record
       fine_stride (int): number of values in each record

    returns:
       numpy float64 array of shape (m,) holding the weighted sum for each column
    """
    m = len(col_pos) - 1
    sums = np.zeros(m, dtype = np.float64)
    for col in numba.prange(m):
        s = 0.0
        for slot in range(col_pos[col], col_pos[col + 1]):
            cell = col_cells[slot]
            s += fine_data[cell * fine_stride + fine_ofs] * weights[cell]
        sums[col] = s
    return sums
