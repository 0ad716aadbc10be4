"""
Containers passed between the stages of a clustering run: the point set,
the cluster centers, the labels of one round and the per-round record kept
in ``history_``.
"""

from numbers import Integral
from typing import Optional, Tuple
from enum import Enum
import torch
from torch import Tensor
from dataclasses import dataclass

from ..exceptions import InvalidQueryError


class FitPhase(Enum):
    """Lifecycle of a clustering run.

    UNINITIALIZED -> SEEDED -> ITERATING -> CONVERGED, or STOPPED when the
    iteration cap ends the loop first. Results are only exposed in the two
    terminal phases.
    """
    UNINITIALIZED = 'uninitialized'
    SEEDED = 'seeded'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    STOPPED = 'stopped'

    @property
    def is_terminal(self) -> bool:
        return self in (FitPhase.CONVERGED, FitPhase.STOPPED)


@dataclass(frozen=True)
class PointSet:
    """Ordered, immutable collection of N points of dimension D.

    Build one through ``lloyd.utils.validation.validate_data`` so the
    non-empty and uniform-dimension invariants hold.
    """

    data: Tensor  # (N, D)

    def __post_init__(self):
        if self.data.dim() != 2:
            raise ValueError(f"PointSet needs an (N, D) tensor, got shape {tuple(self.data.shape)}")

    @property
    def n_points(self) -> int:
        return self.data.shape[0]

    @property
    def dimension(self) -> int:
        return self.data.shape[1]

    @property
    def device(self) -> torch.device:
        return self.data.device

    def __len__(self) -> int:
        return self.n_points

    def __getitem__(self, idx):
        return self.data[idx]

    def bounds(self) -> Tuple[Tensor, Tensor]:
        """Per-dimension (minimum, maximum) of the points: the bounding box."""
        return self.data.min(dim=0)[0], self.data.max(dim=0)[0]


@dataclass
class ClusterState:
    """Snapshot of all K centers."""

    means: Tensor  # (K, D)
    n_clusters: int
    dimension: int

    def __post_init__(self):
        if tuple(self.means.shape) != (self.n_clusters, self.dimension):
            raise ValueError(f"Expected means of shape ({self.n_clusters}, {self.dimension}), "
                             f"got {tuple(self.means.shape)}")

    @property
    def device(self) -> torch.device:
        return self.means.device


class AssignmentMatrix:
    """Labels of one assignment round, one cluster index per point."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) labels in [0, n_clusters)
            n_clusters: Number of clusters K
        """
        if assignments.dim() != 1:
            raise ValueError(f"Expected 1D labels, got shape {tuple(assignments.shape)}")
        if assignments.numel() and (assignments.min() < 0 or assignments.max() >= n_clusters):
            raise ValueError(f"Labels must lie in [0, {n_clusters})")
        self.n_clusters = n_clusters
        self._assignments = assignments.long()

    @property
    def n_points(self) -> int:
        return self._assignments.shape[0]

    def get_hard(self) -> Tensor:
        """The (n,) label tensor."""
        return self._assignments

    def check_cluster(self, cluster_idx: int) -> None:
        """Raise InvalidQueryError unless cluster_idx is in [0, K)."""
        if isinstance(cluster_idx, bool) or not isinstance(cluster_idx, Integral):
            raise InvalidQueryError(f"Label must be an int, got {type(cluster_idx).__name__}")
        if not 0 <= cluster_idx < self.n_clusters:
            raise InvalidQueryError(f"Label {cluster_idx} is outside [0, {self.n_clusters})")

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Positions labeled ``cluster_idx``, in increasing order."""
        self.check_cluster(cluster_idx)
        return torch.where(self._assignments == int(cluster_idx))[0]

    def count_per_cluster(self) -> Tensor:
        """(K,) member count of every cluster, zeros included."""
        return torch.bincount(self._assignments, minlength=self.n_clusters)

    def n_changed(self, previous: Tensor) -> int:
        """Number of positions whose label differs from ``previous``."""
        return int((self._assignments != previous.to(self._assignments.device)).sum().item())


@dataclass(frozen=True)
class ClusteringResult:
    """Final output of a clustering run."""
    labels: Tensor           # (n,)
    cluster_centers: Tensor  # (K, d)
    initial_centers: Tensor  # (K, d)
    n_iter: int
    converged: bool
    inertia: float


@dataclass
class AlgorithmState:
    """Record of one assignment round.

    ``cluster_state`` holds the centers the round assigned against;
    ``n_changed`` counts labels that differ from the previous round.
    """
    iteration: int
    cluster_state: ClusterState
    assignments: AssignmentMatrix
    objective_value: float
    n_changed: Optional[int] = None
    converged: bool = False
