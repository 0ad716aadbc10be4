"""
Lloyd-style alternating optimization over pluggable components.

A run moves through the phases of ``FitPhase``:

    UNINITIALIZED -> SEEDED -> ITERATING -> CONVERGED (or STOPPED)

Seeding happens once; every round then assigns all points, compares the
labels with the previous round, and either stops at the fixed point or
re-estimates each cluster from its members. Results can only be read once
the run is in a terminal phase.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    PointSet, ClusterState, AssignmentMatrix, AlgorithmState, ClusteringResult, FitPhase
)
from ..exceptions import (
    InvalidConfigurationError, NotFittedError, ConvergenceWarning
)
from ..utils.device import parse_device
from ..utils.metrics import inertia
from ..utils.validation import validate_data, check_n_clusters, check_random_state


def _check_max_iter(max_iter: int) -> None:
    if max_iter < 1:
        raise InvalidConfigurationError(f"max_iter must be at least 1, got {max_iter}")


class BaseClusteringAlgorithm:
    """Estimator skeleton shared by centroid-style clustering algorithms.

    ``_create_components`` in a subclass wires up the five collaborators the
    loop needs: an initialization strategy, an assignment strategy, an
    update strategy, a convergence criterion and an objective.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 300,
                 verbose: int = 0,
                 random: bool = True,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[Union[str, torch.device]] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Cap on assignment rounds
            verbose: 0 is silent, 1 reports every tenth round, 2 every round
            random: If False, draw from a fixed seeded sequence so repeated
                runs are identical
            random_state: Seed or torch.Generator for all random draws
            device: Torch device (None for CPU, 'auto' for best available)
        """
        check_n_clusters(n_clusters)
        _check_max_iter(max_iter)

        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random = random
        self.random_state = random_state
        self.device = parse_device(device)

        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        self._points: Optional[PointSet] = None
        self._reset_results()

    def _reset_results(self) -> None:
        """Forget the outcome of any earlier run."""
        self.phase_ = FitPhase.UNINITIALIZED
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.initial_centers_: Optional[Tensor] = None
        self._labels: Optional[Tensor] = None
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []

    @abstractmethod
    def _create_components(self) -> None:
        """Instantiate the strategies used by the next run."""

    # ------------------------------------------------------------------
    # Input

    def set_points(self, X) -> 'BaseClusteringAlgorithm':
        """Replace the points to cluster and drop any previous results.

        Args:
            X: (n, d) points as tensor, numpy array, or sequence of sequences
        """
        self._points = PointSet(self._validate_data(X))
        self._reset_results()
        return self

    @property
    def points_(self) -> Tensor:
        if self._points is None:
            raise NotFittedError("No points have been set")
        return self._points.data

    def _validate_data(self, X) -> Tensor:
        return validate_data(X, dtype=torch.float32, device=self.device)

    # ------------------------------------------------------------------
    # Running

    def fit(self, X=None, y=None) -> 'BaseClusteringAlgorithm':
        """Cluster ``X``, or the points from ``set_points`` when X is None.

        y is accepted and ignored.
        """
        if X is not None:
            self.set_points(X)
        elif self._points is None:
            raise InvalidConfigurationError("No points to cluster; call set_points first")
        return self._fit(self._points)

    def fit_predict(self, X=None, y=None) -> Tensor:
        return self.fit(X).labels_

    def predict(self, X) -> Tensor:
        """Label new points with their nearest fitted cluster."""
        self._check_fitted()
        X = self._validate_data(X)
        if X.shape[1] != self._points.dimension:
            raise InvalidConfigurationError(
                f"Points have dimension {X.shape[1]}, model was fit on {self._points.dimension}")
        return self.assignment_strategy.compute_assignments(X, self.representations)

    def _seed(self, X: Tensor) -> None:
        generator = check_random_state(self.random_state, self.random)
        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters from {X.shape[0]} points...")
        self.representations = self.initialization_strategy.initialize(
            X, self.n_clusters, generator=generator)
        self.initial_centers_ = self._extract_cluster_state().means
        self.convergence_criterion.reset()
        self.phase_ = FitPhase.SEEDED

    def _assign(self, X: Tensor, iteration: int) -> AlgorithmState:
        """One assignment round, recorded in ``history_``."""
        labels = self.assignment_strategy.compute_assignments(X, self.representations)
        converged = self.convergence_criterion.check({
            'iteration': iteration,
            'assignments': labels
        })
        state = AlgorithmState(
            iteration=iteration,
            cluster_state=self._extract_cluster_state(),
            assignments=AssignmentMatrix(labels, self.n_clusters),
            objective_value=float(self.objective.compute(X, self.representations, labels)),
            n_changed=getattr(self.convergence_criterion, 'last_n_changed', None),
            converged=converged
        )
        self.history_.append(state)
        self.n_iter_ = iteration + 1
        return state

    def _reestimate(self, X: Tensor, assignments: AssignmentMatrix) -> None:
        for k, rep in enumerate(self.representations):
            members = X[assignments.get_cluster_indices(k)]
            self.update_strategy.update(rep, members, cluster_idx=k)

    def _fit(self, points: PointSet) -> 'BaseClusteringAlgorithm':
        X = points.data
        check_n_clusters(self.n_clusters, points.n_points)

        self._reset_results()
        self._create_components()

        t_start = time.time()
        self._seed(X)

        state = None
        for iteration in range(self.max_iter):
            self.phase_ = FitPhase.ITERATING
            t_round = time.time()
            state = self._assign(X, iteration)

            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: objective = {state.objective_value:.6f} "
                      f"changed = {state.n_changed} ({time.time() - t_round:.3f}s)")

            if state.converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

            self._reestimate(X, state.assignments)

        self._labels = state.assignments.get_hard()
        self.converged_ = state.converged
        self.fitted_ = True
        self.phase_ = FitPhase.CONVERGED if state.converged else FitPhase.STOPPED

        if not state.converged:
            warnings.warn(f"Labels still changing after {self.max_iter} iterations",
                          ConvergenceWarning)
        if self.verbose:
            print(f"Total fitting time: {time.time() - t_start:.3f}s")

        return self

    # ------------------------------------------------------------------
    # Results

    def _check_fitted(self) -> None:
        if not self.phase_.is_terminal:
            raise NotFittedError(f"No finished run to read from (phase: {self.phase_.value})")

    def _extract_cluster_state(self) -> ClusterState:
        means = torch.stack([rep.get_parameters()['mean'] for rep in self.representations])
        return ClusterState(means=means, n_clusters=len(self.representations),
                            dimension=means.shape[1])

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) centers at the end of the run."""
        self._check_fitted()
        return self._extract_cluster_state().means

    @property
    def labels_(self) -> Tensor:
        """(n,) labels of the fitted points."""
        self._check_fitted()
        return self._labels

    @property
    def inertia_(self) -> float:
        self._check_fitted()
        return inertia(self._points.data, self._labels, self.cluster_centers_)

    @property
    def result_(self) -> ClusteringResult:
        self._check_fitted()
        return ClusteringResult(
            labels=self._labels.clone(),
            cluster_centers=self.cluster_centers_,
            initial_centers=self.initial_centers_.clone(),
            n_iter=self.n_iter_,
            converged=self.converged_,
            inertia=self.inertia_
        )

    # ------------------------------------------------------------------
    # Configuration

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        return dict(n_clusters=self.n_clusters, max_iter=self.max_iter,
                    verbose=self.verbose, random=self.random,
                    random_state=self.random_state, device=self.device)

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Update constructor parameters; results of a previous run are discarded."""
        unknown = set(params) - set(self.get_params())
        if unknown:
            raise ValueError(f"Invalid parameter(s) {sorted(unknown)} for {type(self).__name__}")

        # Nothing is assigned unless every value passes
        params = self._check_params(dict(params))
        for name, value in params.items():
            setattr(self, name, value)

        if 'device' in params and self._points is not None:
            self._points = PointSet(self._points.data.to(self.device))

        self._reset_results()
        return self

    def _check_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Validate incoming parameter values; returns them in stored form."""
        if 'n_clusters' in params:
            check_n_clusters(params['n_clusters'])
        if 'max_iter' in params:
            _check_max_iter(params['max_iter'])
        if 'device' in params:
            params['device'] = parse_device(params['device'])
        return params
