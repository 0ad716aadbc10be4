"""
Input validation utilities.

Provides functions for validating data, cluster counts, random sources and
initialization parameters before clustering. Configuration problems are
reported as InvalidConfigurationError before any computation starts.
"""

from numbers import Integral
from typing import Optional, Union, Sequence
import torch
from torch import Tensor
import numpy as np

from ..base.interfaces import InitializationStrategy
from ..exceptions import InvalidConfigurationError


INIT_METHODS = ('random', 'k-means++')

_INIT_ALIASES = {
    'random': 'random',
    'k-means++': 'k-means++',
    'kmeans++': 'k-means++',
    'kmeanspp': 'k-means++',
}


def _check_row_lengths(rows: Sequence) -> None:
    """Reject ragged python input; the first row fixes the dimension."""
    if len(rows) == 0:
        raise InvalidConfigurationError("Cannot cluster an empty point set")

    sequence_types = (list, tuple, np.ndarray, Tensor)
    first = rows[0]
    # 1D input is one scalar per point
    dimension = len(first) if isinstance(first, sequence_types) else 1

    for i, row in enumerate(rows):
        length = len(row) if isinstance(row, sequence_types) else 1
        if length != dimension or isinstance(row, sequence_types) != isinstance(first, sequence_types):
            raise InvalidConfigurationError(
                f"Point {i} has dimension {length}, but point 0 has dimension {dimension}")


def validate_data(X: Union[Tensor, np.ndarray, Sequence],
                 dtype: torch.dtype = torch.float32,
                 device: Optional[torch.device] = None,
                 ensure_finite: bool = True) -> Tensor:
    """Validate and convert input points to a 2D tensor.

    Args:
        X: Input points (tensor, numpy array, or sequence of sequences)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to check for inf/nan

    Returns:
        Validated (n, d) tensor

    Raises:
        InvalidConfigurationError: If the points are empty, ragged, or
            contain non-finite values
        TypeError: If X cannot be converted
    """
    if isinstance(X, Tensor):
        X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        if X.dtype == object:
            _check_row_lengths(list(X))
            X = np.asarray(list(X), dtype=np.float64)
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        _check_row_lengths(X)
        X = torch.tensor(np.asarray(X, dtype=np.float64), dtype=dtype, device=device)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise InvalidConfigurationError(f"Expected 2D array of points, got {X.dim()}D")

    n_samples, n_features = X.shape
    if n_samples == 0:
        raise InvalidConfigurationError("Cannot cluster an empty point set")
    if n_features == 0:
        raise InvalidConfigurationError("Points must have at least one dimension")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InvalidConfigurationError("Input contains NaN values")
        if torch.isinf(X).any():
            raise InvalidConfigurationError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: Optional[int] = None) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples, if known yet

    Raises:
        TypeError: If n_clusters is not an integer
        InvalidConfigurationError: If K == 0 or K > N
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, Integral):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise InvalidConfigurationError(f"n_clusters must be positive, got {n_clusters}")

    if n_samples is not None and n_clusters > n_samples:
        raise InvalidConfigurationError(f"n_clusters ({n_clusters}) cannot be larger than "
                                        f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]] = None,
                       random: bool = True) -> torch.Generator:
    """Create the CPU generator that drives all random draws of a run.

    Args:
        random_state: Seed or generator. A generator is used as-is.
        random: If True and no seed is given, draw from a nondeterministic
            seed. If False, use ``random_state`` (default 0) so repeated
            runs reproduce the same sequence.

    Returns:
        torch.Generator
    """
    if isinstance(random_state, torch.Generator):
        return random_state

    if random_state is not None and (isinstance(random_state, bool)
                                     or not isinstance(random_state, Integral)):
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")

    generator = torch.Generator()
    if random_state is None and random:
        generator.seed()
    else:
        generator.manual_seed(int(random_state) if random_state is not None else 0)
    return generator


def validate_init_params(init: Union[str, InitializationStrategy, Tensor, np.ndarray, list],
                        n_clusters: int,
                        n_features: Optional[int] = None
                        ) -> Union[str, InitializationStrategy, Tensor]:
    """Validate initialization parameters.

    Args:
        init: Initialization method name, strategy instance, or initial centers
        n_clusters: Number of clusters
        n_features: Number of features, if known yet

    Returns:
        Canonical method name, the strategy, or a (K, d) tensor of centers
    """
    if isinstance(init, str):
        key = init.lower()
        if key not in _INIT_ALIASES:
            raise ValueError(f"init must be one of {list(INIT_METHODS)}, got '{init}'")
        return _INIT_ALIASES[key]

    if isinstance(init, InitializationStrategy):
        return init

    if isinstance(init, (Tensor, np.ndarray, list, tuple)):
        centers = validate_data(init)
        if centers.shape[0] != n_clusters:
            raise InvalidConfigurationError(
                f"init array has {centers.shape[0]} centers, but n_clusters={n_clusters}")
        if n_features is not None and centers.shape[1] != n_features:
            raise InvalidConfigurationError(
                f"init array has dimension {centers.shape[1]}, but data has dimension {n_features}")
        return centers

    raise TypeError(f"init must be str, InitializationStrategy, or array, got {type(init)}")
