"""The Property Module: fine scale and upscaled rock and fluid properties."""

__all__ = ['BaseIncompressibleProperties', 'IncompressibleProperties', 'VertEqProps']

from ._incompressible import BaseIncompressibleProperties, IncompressibleProperties
from ._vert_eq_props import VertEqProps

# Set "module" attribute of all public objects to this path.
for _name in __all__:
    _obj = eval(_name)
    if hasattr(_obj, "__module__"):
        _obj.__module__ = __name__
