"""
K-means by Lloyd's algorithm.

Seed K centers, then alternate nearest-center assignment and mean
re-estimation until an assignment round leaves every label unchanged.
"""

from numbers import Integral
from typing import Optional, List, Union, TextIO, Dict, Any
import sys
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusterRepresentation, ClusteringObjective, InitializationStrategy
from ..assignments.hard import HardAssignment
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import ChangeInAssignments
from ..utils.validation import validate_init_params
from ..updates.mean import MeanUpdater, EMPTY_CLUSTER_POLICIES


def _check_options(empty_cluster: str, n_local_trials: int) -> None:
    if empty_cluster not in EMPTY_CLUSTER_POLICIES:
        raise ValueError(f"empty_cluster must be one of {list(EMPTY_CLUSTER_POLICIES)}, "
                         f"got '{empty_cluster}'")
    if isinstance(n_local_trials, bool) or not isinstance(n_local_trials, Integral) \
            or n_local_trials < 1:
        raise ValueError(f"n_local_trials must be a positive int, got {n_local_trials!r}")


class KMeansObjective(ClusteringObjective):
    """Within-cluster sum of squares under the current centers."""

    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        distances = HardAssignment().compute_distances(points, representations)
        return distances.gather(1, assignments.long().unsqueeze(1)).sum()


class KMeans(BaseClusteringAlgorithm):
    """Lloyd's K-means.

    Splits the points into K clusters, each summarized by the mean of its
    members, so that every point is labeled with its nearest center.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, InitializationStrategy or array-like, default='k-means++'
        Where the starting centers come from:
        - 'k-means++' : K-means++ seeding
        - 'random' : uniform sampling inside the bounding box of the data
        - InitializationStrategy : used as-is
        - array of shape (n_clusters, n_features) : Use as initial centers
    max_iter : int, default=300
        Maximum number of assignment rounds
    random : bool, default=True
        If False, all random draws come from a fixed seeded sequence and
        repeated runs on the same input are identical
    random_state : int or torch.Generator, optional
        Seed (or generator) for the random draws
    empty_cluster : {'keep', 'error'}, default='keep'
        What to do when a cluster receives no points
    snap_to_points : bool, default=False
        With init='random', move each seed onto its nearest input point
    n_local_trials : int, default=1
        With init='k-means++', candidates drawn per center (greedy if > 1)
    verbose : int, default=0
        Verbosity level
    device : str or torch.device, optional
        Device for computation

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Label of every fitted point
    inertia_ : float
        Sum of squared distances to assigned cluster center
    n_iter_ : int
        Number of assignment rounds run
    phase_ : FitPhase
        Where the estimator is in its lifecycle
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, InitializationStrategy, Tensor] = 'k-means++',
                 max_iter: int = 300,
                 random: bool = True,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 empty_cluster: str = 'keep',
                 snap_to_points: bool = False,
                 n_local_trials: int = 1,
                 verbose: int = 0,
                 device: Optional[Union[str, torch.device]] = None):
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random=random,
            random_state=random_state,
            device=device
        )
        _check_options(empty_cluster, n_local_trials)
        self.init = validate_init_params(init, n_clusters)
        self.empty_cluster = empty_cluster
        self.snap_to_points = snap_to_points
        self.n_local_trials = n_local_trials

    def _create_components(self) -> None:
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater(empty_cluster=self.empty_cluster)

        init = validate_init_params(self.init, self.n_clusters, self._points.dimension)
        if isinstance(init, InitializationStrategy):
            self.initialization_strategy = init
        elif isinstance(init, Tensor):
            self.initialization_strategy = FromPreviousInit(init)
        elif init == 'k-means++':
            self.initialization_strategy = KMeansPlusPlusInit(n_local_trials=self.n_local_trials)
        else:
            self.initialization_strategy = RandomInit(snap_to_points=self.snap_to_points)

        self.convergence_criterion = ChangeInAssignments()
        self.objective = KMeansObjective()

    def get_params(self, deep: bool = True) -> dict:
        params = super().get_params(deep)
        params.update({
            'init': self.init,
            'empty_cluster': self.empty_cluster,
            'snap_to_points': self.snap_to_points,
            'n_local_trials': self.n_local_trials
        })
        return params

    def _check_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = super()._check_params(params)
        _check_options(params.get('empty_cluster', self.empty_cluster),
                       params.get('n_local_trials', self.n_local_trials))
        if 'init' in params or 'n_clusters' in params:
            params['init'] = validate_init_params(params.get('init', self.init),
                                                  params.get('n_clusters', self.n_clusters))
        return params

    def cluster(self, X=None):
        """Run clustering to convergence and return the ClusteringResult."""
        return self.fit(X).result_

    def get_indices_with_label(self, label: int) -> List[int]:
        """Indices of the fitted points whose label equals ``label``.

        Raises:
            InvalidQueryError: If label is outside [0, K)
        """
        self._check_fitted()
        return self.history_[-1].assignments.get_cluster_indices(label).tolist()

    def get_points_with_label(self, label: int) -> Tensor:
        """The (m, d) fitted points whose label equals ``label``, in input order.

        Raises:
            InvalidQueryError: If label is outside [0, K)
        """
        self._check_fitted()
        indices = self.history_[-1].assignments.get_cluster_indices(label)
        return self._points.data[indices]

    def output_cluster_centers(self, stream: Optional[TextIO] = None) -> None:
        """Write one line per cluster center: its id, then its components."""
        stream = sys.stdout if stream is None else stream
        for k, center in enumerate(self.cluster_centers_.tolist()):
            stream.write(f"{k}: " + " ".join(repr(float(c)) for c in center) + "\n")

    def score(self, X, y=None) -> float:
        """Negated within-cluster sum of squares of X under the fitted centers.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of sum of squared distances to centers
        """
        labels = self.predict(X)
        X = self._validate_data(X)
        return -self.objective.compute(X, self.representations, labels).item()
