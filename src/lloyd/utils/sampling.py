"""
Discrete sampling primitives driven by an injected torch.Generator.
"""

from typing import Optional, Sequence, Union
import torch
from torch import Tensor
import numpy as np


def uniform_index(n: int, generator: Optional[torch.Generator] = None) -> int:
    """Draw an index uniformly from [0, n)."""
    if n <= 0:
        raise ValueError(f"Cannot sample an index from {n} items")
    return int(torch.randint(n, (1,), generator=generator).item())


def select_weighted_index(weights: Union[Tensor, np.ndarray, Sequence[float]],
                          generator: Optional[torch.Generator] = None) -> int:
    """Draw an index with probability proportional to its weight.

    A uniform value u in [0, S) is drawn, S being the total weight, and the
    first index whose running cumulative sum exceeds u is returned, so
    zero-weight entries are never chosen. When every weight is zero the draw
    falls back to a uniform choice over all indices.

    Args:
        weights: Non-negative, finite weights
        generator: Source of randomness; None uses torch's global RNG

    Returns:
        Selected index

    Raises:
        ValueError: If weights are empty, negative, or non-finite
    """
    if isinstance(weights, Tensor):
        w = weights.detach().to(device='cpu', dtype=torch.float64).flatten()
    else:
        w = torch.as_tensor(np.asarray(weights, dtype=np.float64)).flatten()

    n = w.numel()
    if n == 0:
        raise ValueError("Cannot sample from an empty weight vector")
    if not torch.isfinite(w).all():
        raise ValueError("Weights must be finite")
    if (w < 0).any():
        raise ValueError("Weights must be non-negative")

    cumulative = torch.cumsum(w, dim=0)
    total = cumulative[-1].item()
    if total <= 0.0:
        return uniform_index(n, generator)

    u = torch.rand(1, generator=generator, dtype=torch.float64) * total
    index = int(torch.searchsorted(cumulative, u, right=True).item())

    if index >= n:
        # u rounded up to the total; take the last index that carries weight
        index = int(torch.nonzero(w > 0)[-1].item())
    return index
