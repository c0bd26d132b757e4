"""The Upscale Module: column geometry, elevations and depth integration for vertical equilibrium."""

__all__ = ['UpscaleMapping', 'Elevation', 'VertEqUpscaler']

from ._mapping import UpscaleMapping
from ._elevation import Elevation
from ._upscaler import VertEqUpscaler

# Set "module" attribute of all public objects to this path.
for _name in __all__:
    _obj = eval(_name)
    if hasattr(_obj, "__module__"):
        _obj.__module__ = __name__
