"""
Centroid representation: a cluster is one point, the mean of its members.
"""

from typing import Dict, Optional
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation
from ..distances.euclidean import EuclideanDistance


class CentroidRepresentation(ClusterRepresentation):
    """Cluster represented by a single center point.

    Points are measured by squared Euclidean distance. The center starts at
    the origin until it is set or estimated.
    """

    metric = EuclideanDistance(squared=True)

    def __init__(self, dimension: int, device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float32):
        self._dimension = dimension
        self._device = torch.device('cpu') if device is None else device
        self._dtype = dtype
        self._mean = torch.zeros(dimension, device=self._device, dtype=dtype)

    @classmethod
    def from_point(cls, point: Tensor) -> 'CentroidRepresentation':
        """Centroid sitting exactly on the (d,) ``point``."""
        rep = cls(point.shape[0], point.device, point.dtype)
        rep.mean = point.clone()
        return rep

    @property
    def mean(self) -> Tensor:
        """The (d,) center."""
        return self._mean

    @mean.setter
    def mean(self, value: Tensor):
        if tuple(value.shape) != (self._dimension,):
            raise ValueError(f"Expected center of shape ({self._dimension},), "
                             f"got {tuple(value.shape)}")
        self._mean = value.to(device=self._device, dtype=self._dtype)

    def _check_points(self, points: Tensor) -> None:
        if points.dim() != 2 or points.shape[1] != self._dimension:
            raise ValueError(f"Expected points of shape (n, {self._dimension}), "
                             f"got {tuple(points.shape)}")

    def distance_to_point(self, points: Tensor) -> Tensor:
        """Squared Euclidean distance from each of the (n, d) points to the center."""
        self._check_points(points)
        return self.metric.compute(points, self._mean)

    def update_from_points(self, points: Tensor, **kwargs) -> bool:
        """Move the center to the componentwise mean of ``points``.

        An empty ``points`` leaves the center where it is and returns False.
        """
        self._check_points(points)

        if points.shape[0] == 0:
            return False

        self._mean = points.mean(dim=0).to(device=self._device, dtype=self._dtype)
        return True

    def get_parameters(self) -> Dict[str, Tensor]:
        return {'mean': self._mean.clone()}

    def __repr__(self) -> str:
        return f"CentroidRepresentation(mean={self._mean.tolist()})"
