"""verteq.py: Vertical equilibrium upscaling of a fine grid and its properties onto a top surface."""

import logging

log = logging.getLogger(__name__)

import verteqpy.grid as vg
import verteqpy.property as vp
import verteqpy.upscale as vu


class VertEq:
    """Class bundling the top surface, upscale mapping, upscaled properties and column upscaler for a fine grid.

    example:
       ve = VertEq(fine_grid, fine_props, title = 'co2 plume')
       coarse = ve.grid
       props = ve.props
       zeta = ve.upscaler.find(col, dpt, target)
    """

    def __init__(self, fine_grid, fine_props, title = None, top_surface = None, degenerate = None):
        """Builds the two dimensional upscaled model from a fine grid and its properties.

        arguments:
           fine_grid (FineGrid): the three dimensional grid
           fine_props (BaseIncompressibleProperties): the fine scale rock and fluid properties
           title (str, optional): a name for the model, used in log messages
           top_surface (TopSurface, optional): the columns to upscale to; if None, a top surface is built from
              the logical indices of the fine grid
           degenerate (str, optional): policy for columns with zero total volume or height, one of 'raise',
              'nan' or 'zero'; see UpscaleMapping

        returns:
           the newly created VertEq object
        """

        self.title = 'vertical equilibrium' if title is None else title  #: name of the model
        self.fine_grid = fine_grid  #: the three dimensional grid
        self.fine_props = fine_props  #: the fine scale properties
        if top_surface is None:
            top_surface = vg.TopSurface.from_fine_grid(fine_grid)
        self.grid = top_surface  #: the top surface, ie. the coarse grid
        self.mapping = vu.UpscaleMapping(fine_grid, top_surface, degenerate = degenerate)  #: column geometry
        self.props = vp.VertEqProps(self.mapping, fine_props)  #: upscaled properties
        self.upscaler = vu.VertEqUpscaler(self.mapping)  #: depth integration within columns
        log.info(f"'{self.title}': {fine_grid.cell_count} fine cells upscaled to {top_surface.column_count} columns")
