"""Custom exceptions used in verteqpy."""


class MissingTopologyError(Exception):
    """Raised when a fine grid cell has no face carrying an expected side tag."""

    def __init__(self, cell, side, message = None):
        self.cell = cell  #: index of the offending cell in the fine grid
        self.side = side  #: side tag which could not be found amongst the cell's faces
        if message is None:
            message = f'no face with side tag {side} found for fine grid cell {cell}'
        super().__init__(message)


class DegenerateColumnError(Exception):
    """Raised when a column has zero total volume or height and cannot be averaged."""

    def __init__(self, columns, quantity):
        self.columns = tuple(int(c) for c in columns)  #: indices of the degenerate columns
        self.quantity = quantity  #: either 'volume' or 'height'
        shown = ', '.join(str(c) for c in self.columns[:5])
        if len(self.columns) > 5:
            shown += ', ...'
        super().__init__(f'zero total {quantity} in {len(self.columns)} column(s): {shown}')
