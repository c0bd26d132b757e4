"""Submodule containing the VertEqProps class, upscaled properties for the columns of a top surface."""

import logging

log = logging.getLogger(__name__)

import numpy as np
import pandas as pd

from ._incompressible import BaseIncompressibleProperties

TWO_DIMS = 2
THREE_DIMS = 3

# offsets into flattened, row major, permeability tensors
_kxx_ofs_3d = 0 * THREE_DIMS + 0
_kxy_ofs_3d = 0 * THREE_DIMS + 1
_kyy_ofs_3d = 1 * THREE_DIMS + 1
_kxx_ofs_2d = 0 * TWO_DIMS + 0
_kxy_ofs_2d = 0 * TWO_DIMS + 1
_kyx_ofs_2d = 1 * TWO_DIMS + 0
_kyy_ofs_2d = 1 * TWO_DIMS + 1


class VertEqProps(BaseIncompressibleProperties):
    """Class for rock properties upscaled to the columns of a top surface, with fluid properties passed through.

    notes:
       porosity and each independent entry of the horizontal permeability tensor are volume weighted averages
       over each column; the (y, x) entry is a copy of the (x, y) entry, so the tensor is exactly symmetric;
       fluid properties are taken unchanged from the fine scale property set; the arrays are computed once, at
       initialisation, and are not resized afterwards
    """

    def __init__(self, mapping, fine_props):
        """Upscales porosity and permeability for every column.

        arguments:
           mapping (UpscaleMapping): the geometry of the columns
           fine_props (BaseIncompressibleProperties): properties for the fine grid, with 3 x 3 permeability

        returns:
           the newly created VertEqProps object

        raises:
           DegenerateColumnError if a column has zero total volume and the mapping's policy is 'raise'
        """

        assert fine_props.num_cells() == mapping.num_elems, 'fine properties do not match fine grid'
        assert fine_props.num_dimensions() == THREE_DIMS
        self.mapping = mapping  #: the upscale mapping
        self.fine_props = fine_props  #: the fine scale property set, source of fluid properties

        perm_matrix_2d = TWO_DIMS * TWO_DIMS
        perm_matrix_3d = THREE_DIMS * THREE_DIMS
        self.poro = np.zeros(mapping.num_cols)  #: upscaled porosity, one value per column
        self.absperm = np.zeros(mapping.num_cols * perm_matrix_2d)  #: upscaled permeability, 2 x 2 per column

        mapping.vol_avg(fine_props.porosity(), 0, 1, self.poro, 0, 1)

        fine_perm = fine_props.permeability()
        mapping.vol_avg(fine_perm, _kxx_ofs_3d, perm_matrix_3d, self.absperm, _kxx_ofs_2d, perm_matrix_2d)
        mapping.vol_avg(fine_perm, _kxy_ofs_3d, perm_matrix_3d, self.absperm, _kxy_ofs_2d, perm_matrix_2d)
        mapping.vol_avg(fine_perm, _kyy_ofs_3d, perm_matrix_3d, self.absperm, _kyy_ofs_2d, perm_matrix_2d)
        self.absperm[_kyx_ofs_2d::perm_matrix_2d] = self.absperm[_kxy_ofs_2d::perm_matrix_2d]

        log.debug(f'porosity and permeability upscaled for {mapping.num_cols} columns')

    def num_dimensions(self):
        return self.mapping.num_dims

    def num_cells(self):
        return self.mapping.num_cols

    def porosity(self):
        return self.poro

    def permeability(self):
        return self.absperm

    def num_phases(self):
        return self.fine_props.num_phases()

    def viscosity(self):
        return self.fine_props.viscosity()

    def density(self):
        return self.fine_props.density()

    def surface_density(self):
        return self.fine_props.surface_density()

    def dataframe(self):
        """Returns a pandas dataframe with one row per column: porosity, kxx, kxy, kyx, kyy."""

        perm = self.absperm.reshape((-1, TWO_DIMS * TWO_DIMS))
        return pd.DataFrame({
            'porosity': self.poro,
            'kxx': perm[:, _kxx_ofs_2d],
            'kxy': perm[:, _kxy_ofs_2d],
            'kyx': perm[:, _kyx_ofs_2d],
            'kyy': perm[:, _kyy_ofs_2d]
        })
