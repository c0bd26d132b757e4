"""Submodule containing the base class for incompressible rock and fluid properties, and the fine scale holder."""

import logging

log = logging.getLogger(__name__)

from abc import ABCMeta, abstractmethod

import numpy as np


class BaseIncompressibleProperties(metaclass = ABCMeta):
    """Base class for the rock and fluid properties of an incompressible multiphase model.

    notes:
       permeability is returned as a flat array holding a row major d x d tensor for each cell, where d is
       num_dimensions(); fluid properties have one value per phase and do not vary spatially; relative
       permeability, capillary pressure and saturation range are not supported
    """

    @abstractmethod
    def num_dimensions(self):
        """Returns the number of spatial dimensions of the grid the properties belong to."""
        raise NotImplementedError

    @abstractmethod
    def num_cells(self):
        """Returns the number of cells the rock properties are given for."""
        raise NotImplementedError

    @abstractmethod
    def porosity(self):
        """Returns numpy float vector of porosity, one value per cell."""
        raise NotImplementedError

    @abstractmethod
    def permeability(self):
        """Returns flat numpy float array of absolute permeability, num_dimensions() squared values per cell."""
        raise NotImplementedError

    @abstractmethod
    def num_phases(self):
        raise NotImplementedError

    @abstractmethod
    def viscosity(self):
        raise NotImplementedError

    @abstractmethod
    def density(self):
        raise NotImplementedError

    @abstractmethod
    def surface_density(self):
        raise NotImplementedError

    def relperm(self, s, cells, derivatives = False):
        """Not implemented: relative permeability has no model here."""
        raise NotImplementedError(f'relative permeability not implemented for {type(self).__name__}')

    def cap_press(self, s, cells, derivatives = False):
        """Not implemented: capillary pressure has no model here."""
        raise NotImplementedError(f'capillary pressure not implemented for {type(self).__name__}')

    def sat_range(self, cells):
        """Not implemented: saturation range has no model here."""
        raise NotImplementedError(f'saturation range not implemented for {type(self).__name__}')


class IncompressibleProperties(BaseIncompressibleProperties):
    """Class holding fine scale rock and fluid properties for a three dimensional grid."""

    def __init__(self, porosity, permeability, viscosity, density, surface_density = None):
        """Create a fine scale property set.

        arguments:
           porosity (numpy float array of shape (N,)): porosity for each cell
           permeability (numpy float array of shape (N, 3, 3), (N, 9) or (9 * N,)): absolute permeability tensor
              for each cell, row major
           viscosity (sequence of float): viscosity of each phase
           density (sequence of float): density of each phase at reservoir conditions
           surface_density (sequence of float, optional): density of each phase at surface conditions; defaults
              to density

        returns:
           the newly created IncompressibleProperties object
        """

        self._porosity = np.ascontiguousarray(porosity, dtype = float).ravel()
        n = len(self._porosity)
        assert n > 0, 'no cells in property set'
        self._permeability = np.ascontiguousarray(permeability, dtype = float).ravel()
        assert len(self._permeability) == 9 * n, 'permeability must hold a 3 x 3 tensor for each cell'
        self._viscosity = np.array(viscosity, dtype = float).ravel()
        self._density = np.array(density, dtype = float).ravel()
        if surface_density is None:
            surface_density = self._density
        self._surface_density = np.array(surface_density, dtype = float).ravel()
        assert len(self._viscosity) > 0, 'at least one phase required'
        assert len(self._density) == len(self._viscosity) == len(self._surface_density), 'phase count mismatch'

    @classmethod
    def from_diagonal(cls, porosity, kx, ky, kz, viscosity, density, surface_density = None):
        """Returns a property set with diagonal permeability tensors built from per cell kx, ky, kz values."""

        porosity = np.asarray(porosity, dtype = float).ravel()
        n = len(porosity)
        perm = np.zeros((n, 3, 3))
        perm[:, 0, 0] = np.broadcast_to(np.asarray(kx, dtype = float).ravel(), (n,))
        perm[:, 1, 1] = np.broadcast_to(np.asarray(ky, dtype = float).ravel(), (n,))
        perm[:, 2, 2] = np.broadcast_to(np.asarray(kz, dtype = float).ravel(), (n,))
        return cls(porosity, perm, viscosity, density, surface_density = surface_density)

    def num_dimensions(self):
        return 3

    def num_cells(self):
        return len(self._porosity)

    def porosity(self):
        return self._porosity

    def permeability(self):
        return self._permeability

    def num_phases(self):
        return len(self._viscosity)

    def viscosity(self):
        return self._viscosity

    def density(self):
        return self._density

    def surface_density(self):
        return self._surface_density
