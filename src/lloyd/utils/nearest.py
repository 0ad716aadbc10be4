"""
Brute-force nearest-neighbor queries.

Linear scans over cluster centers or over the full point set, Euclidean
distance only. No spatial index is built; every query is O(n * d).
"""

from numbers import Integral
from typing import Iterable, Optional, Tuple, Union
import torch
from torch import Tensor

from ..distances.euclidean import EuclideanDistance
from ..exceptions import NoCandidateError


_SQUARED = EuclideanDistance(squared=True)

Exclusion = Optional[Union[int, Iterable[int], Tensor]]


def closest_center(point: Tensor, centers: Tensor) -> int:
    """Index of the center nearest to ``point``.

    Args:
        point: (d,) query point
        centers: (k, d) cluster centers

    Returns:
        Index of the minimum-distance center; ties go to the lowest index
    """
    distances = _SQUARED.compute(centers, point)
    return int(torch.argmin(distances).item())


def _exclusion_mask(n_points: int, exclude: Exclusion, device: torch.device) -> Tensor:
    """Boolean mask that is True for every point still eligible."""
    mask = torch.ones(n_points, dtype=torch.bool, device=device)
    if exclude is None:
        return mask

    if isinstance(exclude, Tensor):
        indices = exclude.to(device=device, dtype=torch.long).flatten()
    elif isinstance(exclude, Integral):
        indices = torch.tensor([int(exclude)], dtype=torch.long, device=device)
    else:
        indices = torch.tensor([int(i) for i in exclude], dtype=torch.long, device=device)

    if indices.numel() > 0:
        if (indices < 0).any() or (indices >= n_points).any():
            raise IndexError(f"Excluded index out of range for {n_points} points")
        mask[indices] = False
    return mask


def closest_point(point: Tensor, points: Tensor,
                  exclude: Exclusion = None) -> Tuple[int, float]:
    """Nearest point of ``points`` to ``point``, skipping excluded indices.

    Args:
        point: (d,) query point
        points: (n, d) point set
        exclude: One index, or a collection of indices, that may not be returned

    Returns:
        (index, Euclidean distance) of the nearest eligible point; ties go
        to the lowest index

    Raises:
        NoCandidateError: If every point is excluded
    """
    mask = _exclusion_mask(points.shape[0], exclude, points.device)
    if not mask.any():
        raise NoCandidateError(f"All {points.shape[0]} points are excluded")

    distances = _SQUARED.compute(points, point)
    distances = torch.where(mask, distances, torch.full_like(distances, float('inf')))

    index = int(torch.argmin(distances).item())
    return index, float(torch.sqrt(distances[index]).item())


def closest_point_index(point: Tensor, points: Tensor, exclude: Exclusion = None) -> int:
    """Index of the nearest eligible point. See ``closest_point``."""
    return closest_point(point, points, exclude)[0]


def closest_point_distance(point: Tensor, points: Tensor, exclude: Exclusion = None) -> float:
    """Distance to the nearest eligible point. See ``closest_point``."""
    return closest_point(point, points, exclude)[1]
