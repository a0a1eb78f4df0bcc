"""
Spatial Partition (SciPy adapter)
=================================
Thin adapter over ``scipy.spatial`` that exposes the Voronoi partition of the
current points in the shape the rest of the application needs: one closed
polygon per point for drawing, and neighbor indices for the click handler.

The cells are bounded to the [0, width] x [0, height] rectangle by mirroring
all sites across the four edges before running Qhull: the cells of the
original sites then come out finite and end exactly at the rectangle.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
from scipy.spatial import QhullError, Voronoi, cKDTree

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Neighbor index reported for a cell that touches the rectangle edge
BOUNDARY: int = -1

# Relative distance by which sites on an edge are moved inside
EDGE_OFFSET: float = 1e-6


class Partition:
    """
    Voronoi cells and adjacency of a set of sites inside a rectangle.

    Use ``Partition.from_points`` to build one; an instance is immutable and
    describes one state of the diagram.
    """

    def __init__(
        self,
        width: float,
        height: float,
        sites: npt.NDArray[np.float64],
        polygons: list[npt.NDArray[np.float64]],
        neighbors: list[list[int]],
    ) -> None:
        self.width = width
        self.height = height
        self.sites = sites
        self._polygons = polygons
        self._neighbors = neighbors
        self._tree: Optional[cKDTree] = cKDTree(sites) if len(sites) else None

    def __len__(self) -> int:
        return len(self.sites)

    @classmethod
    def from_points(
        cls,
        coords: Sequence[tuple[float, float]] | npt.NDArray[np.float64],
        width: float,
        height: float,
    ) -> Partition:
        sites = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        n = len(sites)
        if n == 0:
            return cls(width, height, sites, [], [])

        # Coincident sites share one cell
        unique, inverse = np.unique(sites, axis=0, return_inverse=True)
        inverse = inverse.reshape(-1)
        m = len(unique)

        empty = [np.empty((0, 2)) for _ in range(n)]
        try:
            vor = Voronoi(_mirror_sites(unique, width, height))
        except (QhullError, ValueError) as e:
            logger.warning(f"Voronoi construction failed for {n} sites: {e}")
            return cls(width, height, sites, empty, [[] for _ in range(n)])

        cell_polygons: list[npt.NDArray[np.float64]] = []
        for u in range(m):
            region_index = vor.point_region[u]
            region = vor.regions[region_index] if region_index >= 0 else []
            if not region or -1 in region:
                cell_polygons.append(np.empty((0, 2)))
                continue
            poly = vor.vertices[region]
            # Qhull leaves round-off just outside the rectangle
            poly[:, 0] = np.clip(poly[:, 0], 0.0, width)
            poly[:, 1] = np.clip(poly[:, 1], 0.0, height)
            cell_polygons.append(poly)

        adjacency: list[set[int]] = [set() for _ in range(m)]
        for p, q in vor.ridge_points:
            p, q = int(p), int(q)
            if p < m:
                adjacency[p].add(q if q < m else BOUNDARY)
            if q < m:
                adjacency[q].add(p if p < m else BOUNDARY)

        members: list[list[int]] = [[] for _ in range(m)]
        for i, u in enumerate(inverse):
            members[int(u)].append(i)

        polygons = [cell_polygons[int(u)] for u in inverse]
        neighbors: list[list[int]] = []
        for u in inverse:
            indices: list[int] = []
            for v in adjacency[int(u)]:
                indices.extend([BOUNDARY] if v == BOUNDARY else members[v])
            neighbors.append(sorted(indices))

        logger.debug(f"Partitioned {n} sites ({m} distinct) into Voronoi cells.")
        return cls(width, height, sites, polygons, neighbors)

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    def polygon(self, index: int) -> npt.NDArray[np.float64]:
        """Ordered (k, 2) vertices of the cell, empty if the cell is unavailable."""
        if not 0 <= index < len(self._polygons):
            return np.empty((0, 2))
        return self._polygons[index]

    def polygons(self) -> list[npt.NDArray[np.float64]]:
        return list(self._polygons)

    def neighbors(self, index: int) -> list[int]:
        """
        Indices of the cells sharing an edge with cell ``index``.

        ``BOUNDARY`` comes first if the cell touches the rectangle edge; the
        remaining indices are ascending.
        """
        if not 0 <= index < len(self._neighbors):
            return []
        return list(self._neighbors[index])

    def find_cell(self, x: float, y: float) -> Optional[int]:
        """Index of the cell containing (x, y), i.e. of the nearest site."""
        if self._tree is None:
            return None
        if not (0.0 <= x <= self.width and 0.0 <= y <= self.height):
            return None
        _, index = self._tree.query((x, y))
        return int(index)


def _mirror_sites(
    sites: npt.NDArray[np.float64], width: float, height: float
) -> npt.NDArray[np.float64]:
    """
    Sites followed by their reflections across the four edges.

    Sites on (or outside) an edge are pulled just inside it so no site
    coincides with its own reflection.
    """
    eps = EDGE_OFFSET * max(width, height)
    x = np.clip(sites[:, 0], eps, width - eps)
    y = np.clip(sites[:, 1], eps, height - eps)
    sites = np.c_[x, y]
    left = np.c_[-x, y]
    right = np.c_[2.0 * width - x, y]
    bottom = np.c_[x, -y]
    top = np.c_[x, 2.0 * height - y]
    return np.vstack((sites, left, right, bottom, top))
