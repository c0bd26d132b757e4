"""The Grid Module: fine grids and the top surfaces of columns built over them."""

__all__ = ['FineGrid', 'TopSurface', 'regular_fine_grid']

from ._fine_grid import FineGrid, regular_fine_grid
from ._fine_grid import UP, DOWN, I_MINUS, I_PLUS, J_MINUS, J_PLUS, K_MINUS, K_PLUS, side_names
from ._top_surface import TopSurface

# Set "module" attribute of all public objects to this path.
for _name in __all__:
    _obj = eval(_name)
    if hasattr(_obj, "__module__"):
        _obj.__module__ = __name__
