"""
Clustering quality measures.
"""

from typing import Optional
import torch
from torch import Tensor

from ..distances.euclidean import EuclideanDistance


def pairwise_distances(X: Tensor, Y: Optional[Tensor] = None,
                       squared: bool = False) -> Tensor:
    """(n, m) Euclidean distances between the rows of X and the rows of Y.

    Y defaults to X.
    """
    return EuclideanDistance(squared=squared).pairwise(X, X if Y is None else Y)


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Within-cluster sum of squares: squared distance of each point to its center."""
    if X.shape[0] == 0:
        return 0.0
    residuals = X - centers[labels.long()]
    return float(residuals.pow(2).sum().item())
