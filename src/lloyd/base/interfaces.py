"""
Extension points of the Lloyd loop.

``BaseClusteringAlgorithm._fit`` only talks to these abstract classes: a
seeding strategy produces one representation per cluster, an assignment
strategy labels every point, an updater re-estimates each cluster from its
members and a convergence criterion decides when the labels have settled.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
import torch
from torch import Tensor


class ClusterRepresentation(ABC):
    """Parameters of a single cluster.

    Subclasses measure points against the cluster and re-estimate the
    parameters from the points assigned to it.
    """

    @abstractmethod
    def distance_to_point(self, points: Tensor) -> Tensor:
        """(n,) cost of each of the (n, d) ``points`` under this cluster."""

    @abstractmethod
    def update_from_points(self, points: Tensor, **kwargs) -> bool:
        """Re-estimate from the (m, d) member points.

        Returns False, leaving the parameters untouched, when ``points`` is empty.
        """

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        pass


class AssignmentStrategy(ABC):
    """Maps every point to one cluster index."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """
        Args:
            points: (n, d) data points
            representations: The K clusters, in label order

        Returns:
            (n,) long tensor of labels in [0, K)
        """


class ParameterUpdater(ABC):
    """Re-estimates one cluster from the points currently labeled with it."""

    @abstractmethod
    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               cluster_idx: Optional[int] = None,
               **kwargs) -> None:
        """
        Args:
            representation: Cluster to update in place
            points: (m, d) members; m may be 0
            cluster_idx: Label of the cluster, used in error reports
        """


class DistanceMetric(ABC):
    """Point-to-center distance."""

    @abstractmethod
    def compute(self, points: Tensor, center: Tensor) -> Tensor:
        """(n,) distances from (n, d) ``points`` to the (d,) ``center``."""


class InitializationStrategy(ABC):
    """Produces the K starting clusters of a run.

    All randomness must come from ``generator`` so a seeded generator
    reproduces the same seeds.
    """

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """
        Args:
            points: (n, d) data points
            n_clusters: Number of clusters K, with 1 <= K <= n
            generator: Random source; None falls back to torch's global RNG

        Returns:
            K cluster representations
        """


class ConvergenceCriterion(ABC):
    """Decides, once per assignment round, whether the loop may stop.

    ``history`` collects one record per call to ``check``.
    """

    def __init__(self):
        self.history: List[Dict[str, Any]] = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """True when the run has reached its stopping point.

        ``current_state`` holds at least 'iteration' and 'assignments'.
        """

    def reset(self):
        self.history = []


class ClusteringObjective(ABC):
    """Scalar quality of a labeling under the current clusters."""

    @abstractmethod
    def compute(self, points: Tensor,
                representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        pass
