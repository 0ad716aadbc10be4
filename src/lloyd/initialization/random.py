"""
Random initialization strategy for clustering algorithms.

Samples initial cluster centers uniformly inside the bounding box of the data.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..representations.centroid import CentroidRepresentation
from ..utils.nearest import closest_point_index
from ..utils.validation import check_n_clusters


def random_point_in_bounds(points: Tensor,
                           generator: Optional[torch.Generator] = None) -> Tensor:
    """Draw one point uniformly inside the per-dimension min/max of ``points``.

    Coordinates are drawn on the CPU so a seeded generator yields the same
    point on every device.
    """
    lower = points.min(dim=0)[0].cpu()
    upper = points.max(dim=0)[0].cpu()
    u = torch.rand(points.shape[1], generator=generator, dtype=points.dtype)
    return (lower + u * (upper - lower)).to(points.device)


class RandomInit(InitializationStrategy):
    """Random initialization inside the bounding box of the data.

    Each of the n_clusters centers is sampled independently; every coordinate
    is uniform between that dimension's minimum and maximum, so a center need
    not coincide with any input point.
    """

    def __init__(self, snap_to_points: bool = False):
        """
        Args:
            snap_to_points: If True, move each sampled center onto its nearest
                input point not already used by an earlier center.
        """
        self.snap_to_points = snap_to_points

    def initialize(self, points: Tensor, n_clusters: int,
                  generator: Optional[torch.Generator] = None,
                  **kwargs) -> List[ClusterRepresentation]:
        """Initialize clusters with random points in the bounding box.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Source of randomness

        Returns:
            List of initialized CentroidRepresentations
        """
        n_points = points.shape[0]
        check_n_clusters(n_clusters, n_points)

        representations = []
        used = []
        for _ in range(n_clusters):
            center = random_point_in_bounds(points, generator)

            if self.snap_to_points:
                idx = closest_point_index(center, points, exclude=used)
                used.append(idx)
                center = points[idx]

            representations.append(CentroidRepresentation.from_point(center))

        return representations
