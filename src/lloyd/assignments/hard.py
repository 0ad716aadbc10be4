"""
Nearest-center assignment.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation


class HardAssignment(AssignmentStrategy):
    """Label every point with the cluster whose representation is closest.

    Equally close clusters resolve to the lower label.
    """

    def compute_distances(self, points: Tensor,
                          representations: List[ClusterRepresentation]) -> Tensor:
        """(n, K) matrix; column k holds the distances to cluster k."""
        columns = [rep.distance_to_point(points) for rep in representations]
        return torch.stack(columns, dim=1)

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        distances = self.compute_distances(points, representations)
        # first minimum of each row
        return distances.argmin(dim=1)
