"""Cluster representations."""

from .centroid import CentroidRepresentation

__all__ = [
    'CentroidRepresentation'
]
