"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..representations.centroid import CentroidRepresentation
from ..utils.sampling import select_weighted_index, uniform_index
from ..utils.validation import check_n_clusters


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute squared distance from each not-yet-chosen point to its
         nearest chosen center (chosen points get weight 0)
       - Choose next center with probability proportional to that distance
    3. If every remaining point duplicates a chosen center, pick uniformly
       among the points not chosen yet, so no index is chosen twice
    """

    def __init__(self, n_local_trials: int = 1):
        """
        Args:
            n_local_trials: Number of candidates to draw for each center.
                With more than one, the candidate that most reduces the total
                squared distance is kept (greedy k-means++).
        """
        if n_local_trials < 1:
            raise ValueError(f"n_local_trials must be at least 1, got {n_local_trials}")
        self.n_local_trials = n_local_trials
        self.center_indices_: List[int] = []

    def _draw_candidate(self, distances: Tensor, chosen: Tensor,
                        generator: Optional[torch.Generator]) -> int:
        weights = torch.where(chosen, torch.zeros_like(distances), distances)
        if weights.sum() > 0:
            return select_weighted_index(weights, generator)

        remaining = torch.nonzero(~chosen).flatten()
        return int(remaining[uniform_index(len(remaining), generator)].item())

    def initialize(self, points: Tensor, n_clusters: int,
                  generator: Optional[torch.Generator] = None,
                  **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Source of randomness

        Returns:
            List of initialized CentroidRepresentations
        """
        n_points = points.shape[0]
        check_n_clusters(n_clusters, n_points)

        chosen = torch.zeros(n_points, dtype=torch.bool, device=points.device)
        center_indices = []

        first_idx = uniform_index(n_points, generator)
        center_indices.append(first_idx)
        chosen[first_idx] = True

        # Squared distance from every point to its nearest chosen center
        distances = CentroidRepresentation.metric.compute(points, points[first_idx])

        for _ in range(1, n_clusters):
            best_candidate = None
            best_distances = None
            best_potential = float('inf')

            for _ in range(self.n_local_trials):
                idx = self._draw_candidate(distances, chosen, generator)
                candidate_distances = torch.minimum(
                    distances, CentroidRepresentation.metric.compute(points, points[idx]))
                potential = candidate_distances.sum().item()

                if potential < best_potential:
                    best_potential = potential
                    best_candidate = idx
                    best_distances = candidate_distances

            center_indices.append(best_candidate)
            chosen[best_candidate] = True
            distances = best_distances

        self.center_indices_ = center_indices
        return [CentroidRepresentation.from_point(points[idx]) for idx in center_indices]
