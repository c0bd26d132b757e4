"""Submodule containing the Elevation class, a discretized depth within a column."""

from dataclasses import dataclass


@dataclass(frozen = True)
class Elevation:
    """Class for a depth within a column, held as a number of whole blocks and a fraction of the next block.

    notes:
       storing the number of blocks rather than an absolute height allows properties to be found with a simple
       table lookup; the same Elevation refers to different heights in different columns, as the top of each
       column is at a different z and block heights differ; the invariant 0.0 <= fraction < 1.0 holds except
       for the bottom of a column, which is (last block, 1.0) by convention
    """

    block: int  #: number of whole blocks to skip before reaching this height
    fraction: float  #: fraction of the next block above this height

    def __post_init__(self):
        assert self.block >= 0, f'negative block in elevation: {self.block}'
        assert 0.0 <= self.fraction <= 1.0, f'elevation fraction out of range: {self.fraction}'
