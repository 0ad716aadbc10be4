"""
lloyd: K-means clustering by Lloyd's algorithm.

This package partitions N points in D dimensions into K clusters by
alternating nearest-center assignment and mean re-estimation until the
labels reach a fixed point. Initial centers come from one of:
- k-means++ seeding
- uniform random sampling inside the bounding box of the data
- explicit starting centers

Example usage:
    >>> import torch
    >>> from lloyd import KMeans
    >>>
    >>> # Generate sample data
    >>> X = torch.randn(1000, 10)
    >>>
    >>> # Fit K-means with a reproducible random sequence
    >>> kmeans = KMeans(n_clusters=5, random=False)
    >>> kmeans.fit(X)
    >>>
    >>> # Get cluster assignments
    >>> labels = kmeans.labels_
    >>> members = kmeans.get_points_with_label(0)
"""

__version__ = '0.1.0'

from .algorithms.kmeans import KMeans, KMeansObjective

from .base import (
    PointSet,
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    ClusteringResult,
    FitPhase
)

from .initialization import RandomInit, KMeansPlusPlusInit, FromPreviousInit

from .exceptions import (
    InvalidConfigurationError,
    InvalidQueryError,
    NoCandidateError,
    DegenerateClusterError,
    NotFittedError,
    DegenerateClusterWarning,
    ConvergenceWarning
)

__all__ = [
    # Algorithms
    'KMeans',
    'KMeansObjective',

    # Initialization
    'RandomInit',
    'KMeansPlusPlusInit',
    'FromPreviousInit',

    # Core data structures
    'PointSet',
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',
    'ClusteringResult',
    'FitPhase',

    # Errors
    'InvalidConfigurationError',
    'InvalidQueryError',
    'NoCandidateError',
    'DegenerateClusterError',
    'NotFittedError',
    'DegenerateClusterWarning',
    'ConvergenceWarning',

    # Version
    '__version__'
]
