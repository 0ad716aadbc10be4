"""Base classes and interfaces for the clustering engine."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    PointSet,
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    ClusteringResult,
    FitPhase
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'PointSet',
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',
    'ClusteringResult',
    'FitPhase',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
