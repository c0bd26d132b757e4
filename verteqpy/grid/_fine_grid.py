"""Submodule containing the FineGrid class, side tags and a builder for regular fine grids."""

import logging

log = logging.getLogger(__name__)

import numpy as np

import verteqpy.olio.runlen as rl

# side tags attached to each face of a cell, in the order I-, I+, J-, J+, K-, K+
I_MINUS, I_PLUS, J_MINUS, J_PLUS, K_MINUS, K_PLUS = range(6)
UP = K_MINUS  #: side tag of the face on top of a cell (smaller z, with z increasing downwards)
DOWN = K_PLUS  #: side tag of the face on the bottom of a cell
side_names = ('I-', 'I+', 'J-', 'J+', 'K-', 'K+')  #: human readable names for side tags, indexed by tag


class FineGrid:
    """Class for the in-memory three dimensional grid from which columns are upscaled.

    notes:
       cells may have any number of faces; the faces of each cell are held as a run-length encoded list of face
       indices, with a parallel list of side tags saying which side of the cell each face is on; only the UP and
       DOWN faces are used when upscaling, and each cell is expected to have exactly one of each
    """

    def __init__(self,
                 cell_volumes,
                 faces_per_cell_pos,
                 faces_per_cell,
                 face_tags,
                 face_centroids,
                 extent_kji = None,
                 cell_kji0 = None):
        """Create a fine grid from its arrays.

        arguments:
           cell_volumes (numpy float array of shape (N,)): the volume of each cell
           faces_per_cell_pos (numpy int array of shape (N + 1,)): offsets into faces_per_cell for each cell
           faces_per_cell (numpy int array): face indices for each cell, run-length encoded by faces_per_cell_pos
           face_tags (numpy int array): side tag for each entry in faces_per_cell
           face_centroids (numpy float array of shape (F, 3)): centre point (x, y, z) of each face
           extent_kji (triple int, optional): logical extent (nk, nj, ni) if the grid is structured
           cell_kji0 (numpy int array of shape (N, 3), optional): logical (k, j, i) indices of each cell

        returns:
           the newly created FineGrid object
        """

        self.cell_volumes = np.ascontiguousarray(cell_volumes, dtype = np.float64)  #: volume of each cell
        self.cell_count = len(self.cell_volumes)  #: the number of cells, N
        self.faces_per_cell_pos = np.ascontiguousarray(faces_per_cell_pos, dtype = np.int64)
        self.faces_per_cell = np.ascontiguousarray(faces_per_cell, dtype = np.int64)
        self.face_tags = np.ascontiguousarray(face_tags, dtype = np.int64)
        self.face_centroids = np.asarray(face_centroids, dtype = np.float64)  #: centre of each face
        self.face_count = len(self.face_centroids)  #: the number of faces, F
        self.extent_kji = None if extent_kji is None else tuple(extent_kji)
        self.cell_kji0 = None if cell_kji0 is None else np.asarray(cell_kji0, dtype = int)
        self.check_indices()

    def check_indices(self):
        """Asserts that the arrays of the grid are mutually consistent."""

        assert self.cell_count > 0, 'fine grid has no cells'
        assert self.face_centroids.ndim == 2 and self.face_centroids.shape[1] == 3
        assert len(self.faces_per_cell_pos) == self.cell_count + 1
        assert self.faces_per_cell_pos[0] == 0
        assert np.all(self.faces_per_cell_pos[1:] >= self.faces_per_cell_pos[:-1])
        assert len(self.faces_per_cell) == self.faces_per_cell_pos[-1]
        assert len(self.face_tags) == len(self.faces_per_cell), 'side tag count does not match face count'
        if len(self.faces_per_cell):
            assert 0 <= np.min(self.faces_per_cell) and np.max(self.faces_per_cell) < self.face_count
        if self.cell_kji0 is not None:
            assert self.cell_kji0.shape == (self.cell_count, 3)
            assert self.extent_kji is not None and len(self.extent_kji) == 3

    def cell_faces(self):
        """Returns a run-length view of the face indices for each cell."""
        return rl.RunLenView(self.cell_count, self.faces_per_cell_pos, self.faces_per_cell)

    def cell_face_tags(self):
        """Returns a run-length view of the side tags of the faces of each cell."""
        return rl.RunLenView(self.cell_count, self.faces_per_cell_pos, self.face_tags)

    def face_indices_for_cell(self, cell):
        """Returns numpy int array of face indices for the given cell."""
        return self.cell_faces()[cell].copy()


def regular_fine_grid(extent_kji, dxyz = (1.0, 1.0, 1.0), dz = None, top_depth = 0.0, origin = (0.0, 0.0, 0.0),
                      active = None):
    """Returns a FineGrid of hexahedral cells aligned with the xyz axes, with z increasing downwards.

    arguments:
       extent_kji (triple int): the number of cells in each axis (nk, nj, ni)
       dxyz (triple float, default unit cube): the size of each cell (dx, dy, dz)
       dz (float or numpy float array of shape (nk,) or (nk, nj, ni), optional): layer thicknesses overriding
          dxyz[2]; zero values give pinched out cells of zero volume
       top_depth (float or numpy float array of shape (nj, ni), default 0.0): depth of the top of each column,
          relative to the origin
       origin (triple float, default zero): xyz location of the corner of the grid
       active (numpy bool array of shape (nk, nj, ni), optional): if present, only cells flagged True are
          included in the grid, which gives columns of differing length

    returns:
       a new FineGrid with extent_kji and cell_kji0 set; faces are shared between neighbouring cells

    note:
       lateral face centroids are placed at the mean depth of the cells either side of the face
    """

    nk, nj, ni = extent_kji
    assert nk > 0 and nj > 0 and ni > 0
    dx, dy = float(dxyz[0]), float(dxyz[1])
    assert dx > 0.0 and dy > 0.0
    if dz is None:
        dz = dxyz[2]
    dz = np.asarray(dz, dtype = float)
    if dz.ndim == 1:
        assert len(dz) == nk, 'layer thickness vector does not match nk'
        dz = dz.reshape((nk, 1, 1))
    dz = np.broadcast_to(dz, (nk, nj, ni)).astype(float)
    assert np.all(dz >= 0.0), 'negative layer thickness'

    top = np.broadcast_to(np.asarray(top_depth, dtype = float), (nj, ni)) + float(origin[2])
    z_k = np.empty((nk + 1, nj, ni))
    z_k[0] = top
    z_k[1:] = top + np.cumsum(dz, axis = 0)
    zc = 0.5 * (z_k[:-1] + z_k[1:])
    xc = float(origin[0]) + (np.arange(ni) + 0.5) * dx
    yc = float(origin[1]) + (np.arange(nj) + 0.5) * dy

    nkf = (nk + 1) * nj * ni
    njf = nk * (nj + 1) * ni
    nif = nk * nj * (ni + 1)
    face_centroids = np.empty((nkf + njf + nif, 3))

    k_faces = face_centroids[:nkf].reshape((nk + 1, nj, ni, 3))
    k_faces[..., 0] = xc.reshape((1, 1, ni))
    k_faces[..., 1] = yc.reshape((1, nj, 1))
    k_faces[..., 2] = z_k

    j_faces = face_centroids[nkf:nkf + njf].reshape((nk, nj + 1, ni, 3))
    j_faces[..., 0] = xc.reshape((1, 1, ni))
    j_faces[..., 1] = (float(origin[1]) + np.arange(nj + 1) * dy).reshape((1, nj + 1, 1))
    lo = np.clip(np.arange(nj + 1) - 1, 0, nj - 1)
    hi = np.clip(np.arange(nj + 1), 0, nj - 1)
    j_faces[..., 2] = 0.5 * (zc[:, lo, :] + zc[:, hi, :])

    i_faces = face_centroids[nkf + njf:].reshape((nk, nj, ni + 1, 3))
    i_faces[..., 0] = (float(origin[0]) + np.arange(ni + 1) * dx).reshape((1, 1, ni + 1))
    i_faces[..., 1] = yc.reshape((1, nj, 1))
    lo = np.clip(np.arange(ni + 1) - 1, 0, ni - 1)
    hi = np.clip(np.arange(ni + 1), 0, ni - 1)
    i_faces[..., 2] = 0.5 * (zc[:, :, lo] + zc[:, :, hi])

    k, j, i = (a.ravel() for a in np.meshgrid(np.arange(nk), np.arange(nj), np.arange(ni), indexing = 'ij'))
    faces = np.stack([
        nkf + njf + (k * nj + j) * (ni + 1) + i,  # I-
        nkf + njf + (k * nj + j) * (ni + 1) + i + 1,  # I+
        nkf + (k * (nj + 1) + j) * ni + i,  # J-
        nkf + (k * (nj + 1) + j + 1) * ni + i,  # J+
        (k * nj + j) * ni + i,  # K-
        ((k + 1) * nj + j) * ni + i  # K+
    ], axis = -1)
    tags = np.broadcast_to(np.arange(6, dtype = np.int64), faces.shape)
    volumes = (dx * dy * dz).ravel()
    kji0 = np.stack((k, j, i), axis = -1)

    if active is not None:
        active = np.asarray(active, dtype = bool)
        assert active.shape == (nk, nj, ni), 'active mask does not match extent'
        keep = active.ravel()
        faces, tags, volumes, kji0 = faces[keep], tags[keep], volumes[keep], kji0[keep]

    cell_count = len(volumes)
    log.debug(f'regular fine grid built with {cell_count} cells and {len(face_centroids)} faces')
    return FineGrid(cell_volumes = volumes,
                    faces_per_cell_pos = rl.offsets_from_sizes(np.full(cell_count, 6, dtype = int)),
                    faces_per_cell = faces.ravel(),
                    face_tags = tags.ravel(),
                    face_centroids = face_centroids,
                    extent_kji = (nk, nj, ni),
                    cell_kji0 = kji0)
