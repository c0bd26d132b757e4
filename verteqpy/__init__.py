"""Vertical equilibrium upscaling library.

.. autosummary::
    :toctree: _autosummary
    :caption: API Reference
    :template: custom-module-template.rst
    :recursive:

    verteq
    grid
    upscale
    property
    olio
"""

import logging

__version__ = "0.0.0"  # Set at build time
log = logging.getLogger(__name__)
log.info(f"Imported verteqpy version {__version__}")
