"""
Euclidean distance, the only metric the engine measures with.

Assignment, k-means++ weighting and nearest-point queries all go through
``EuclideanDistance.compute`` so the three agree on every tie.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """||x - c||², or ||x - c|| with ``squared=False``."""

    def __init__(self, squared: bool = True):
        self.squared = squared

    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        """Distances from the (n, d) ``points`` to the (d,) ``center``."""
        sq = (points - center).pow(2).sum(dim=-1)
        return sq if self.squared else sq.sqrt()

    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """(n, k) matrix whose column j is ``compute(points, centers[j])``."""
        if centers.shape[0] == 0:
            return points.new_empty((points.shape[0], 0))
        return torch.stack([self.compute(points, c) for c in centers], dim=1)
