"""Utility functions for the clustering engine."""

from .convergence import ChangeInAssignments, SENTINEL_LABEL

from .metrics import pairwise_distances, inertia

from .nearest import (
    closest_center,
    closest_point,
    closest_point_index,
    closest_point_distance
)

from .sampling import select_weighted_index, uniform_index

from .validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    validate_init_params,
    INIT_METHODS
)

from .device import get_default_device, parse_device

__all__ = [
    # Convergence criteria
    'ChangeInAssignments',
    'SENTINEL_LABEL',

    # Metrics
    'pairwise_distances',
    'inertia',

    # Nearest-neighbor queries
    'closest_center',
    'closest_point',
    'closest_point_index',
    'closest_point_distance',

    # Sampling
    'select_weighted_index',
    'uniform_index',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'validate_init_params',
    'INIT_METHODS',

    # Device management
    'get_default_device',
    'parse_device'
]
