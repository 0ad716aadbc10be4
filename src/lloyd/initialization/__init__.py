"""Initialization strategies for clustering algorithms."""

from .random import RandomInit, random_point_in_bounds
from .kmeans_plusplus import KMeansPlusPlusInit
from .from_previous import FromPreviousInit

__all__ = [
    'RandomInit',
    'random_point_in_bounds',
    'KMeansPlusPlusInit',
    'FromPreviousInit'
]
