# tests/test_initialization.py
"""
Seeding strategies: bounding-box random, k-means++ and explicit centers.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from data_gen import make_blobs, make_distinct_grid
from lloyd.base.data_structures import ClusterState
from lloyd.exceptions import InvalidConfigurationError
from lloyd.initialization import (
    RandomInit,
    KMeansPlusPlusInit,
    FromPreviousInit,
    random_point_in_bounds,
)


def _means(representations) -> torch.Tensor:
    return torch.stack([rep.mean for rep in representations])


@pytest.fixture
def blobs(seed_all) -> torch.Tensor:
    X, _ = make_blobs(n_per=40, centers=[[0, 0, 0], [4, 4, 4], [-4, 2, 0]], seed=seed_all)
    return torch.from_numpy(X)


def test_random_point_in_bounds_stays_in_box(blobs, generator):
    lower = blobs.min(dim=0)[0]
    upper = blobs.max(dim=0)[0]
    for _ in range(100):
        p = random_point_in_bounds(blobs, generator)
        assert p.shape == (3,)
        assert torch.all(p >= lower) and torch.all(p <= upper)


def test_random_init_centers_in_bounding_box(blobs, generator):
    reps = RandomInit().initialize(blobs, 5, generator=generator)
    centers = _means(reps)

    assert centers.shape == (5, 3)
    assert torch.all(centers >= blobs.min(dim=0)[0])
    assert torch.all(centers <= blobs.max(dim=0)[0])


def test_random_init_is_repeatable_with_same_seed(blobs):
    c1 = _means(RandomInit().initialize(blobs, 4, generator=torch.Generator().manual_seed(3)))
    c2 = _means(RandomInit().initialize(blobs, 4, generator=torch.Generator().manual_seed(3)))
    c3 = _means(RandomInit().initialize(blobs, 4, generator=torch.Generator().manual_seed(4)))

    assert torch.equal(c1, c2)
    assert not torch.equal(c1, c3)


def test_random_init_snap_to_points_uses_distinct_data_points(blobs, generator):
    reps = RandomInit(snap_to_points=True).initialize(blobs, 6, generator=generator)
    centers = _means(reps)

    matches = [int(torch.nonzero((blobs == c).all(dim=1))[0]) for c in centers]
    assert len(set(matches)) == 6


def test_random_init_snap_with_k_equal_n(square_points, generator):
    reps = RandomInit(snap_to_points=True).initialize(square_points, 4, generator=generator)
    centers = _means(reps)
    rows = sorted(tuple(c.tolist()) for c in centers)
    assert rows == sorted(tuple(p.tolist()) for p in square_points)


@pytest.mark.parametrize("strategy", [RandomInit(), KMeansPlusPlusInit()])
def test_too_many_clusters_rejected(square_points, strategy):
    with pytest.raises(InvalidConfigurationError):
        strategy.initialize(square_points, 5)


def test_kmeanspp_k_equal_n_uses_every_point(generator):
    points = torch.from_numpy(make_distinct_grid(5))
    init = KMeansPlusPlusInit()
    reps = init.initialize(points, 25, generator=generator)

    assert sorted(init.center_indices_) == list(range(25))
    assert torch.equal(_means(reps), points[init.center_indices_])


def test_kmeanspp_never_repeats_an_index(blobs):
    for seed in range(20):
        init = KMeansPlusPlusInit()
        init.initialize(blobs, 10, generator=torch.Generator().manual_seed(seed))
        assert len(set(init.center_indices_)) == 10


def test_kmeanspp_duplicates_still_distinct_indices(generator):
    points = torch.tensor([[0.0, 0.0]] * 3 + [[1.0, 1.0]])
    init = KMeansPlusPlusInit()
    init.initialize(points, 4, generator=generator)
    assert sorted(init.center_indices_) == [0, 1, 2, 3]


def test_kmeanspp_picks_the_outlier():
    # Duplicates of a chosen point carry zero weight, so the second seed
    # must land on the other location whichever point comes first.
    points = torch.tensor([[0.0, 0.0]] * 50 + [[100.0, 100.0]])
    for seed in range(10):
        init = KMeansPlusPlusInit()
        reps = init.initialize(points, 2, generator=torch.Generator().manual_seed(seed))
        rows = sorted(tuple(c.tolist()) for c in _means(reps))
        assert rows == [(0.0, 0.0), (100.0, 100.0)]


def test_kmeanspp_greedy_trials(blobs, generator):
    init = KMeansPlusPlusInit(n_local_trials=4)
    reps = init.initialize(blobs, 3, generator=generator)
    assert len(reps) == 3
    assert len(set(init.center_indices_)) == 3

    with pytest.raises(ValueError):
        KMeansPlusPlusInit(n_local_trials=0)


def test_kmeanspp_is_repeatable_with_same_seed(blobs):
    i1, i2 = KMeansPlusPlusInit(), KMeansPlusPlusInit()
    i1.initialize(blobs, 5, generator=torch.Generator().manual_seed(11))
    i2.initialize(blobs, 5, generator=torch.Generator().manual_seed(11))
    assert i1.center_indices_ == i2.center_indices_


def test_from_previous_tensor_and_cluster_state(square_points):
    centers = torch.tensor([[0.0, 0.0], [10.0, 0.0]])

    reps = FromPreviousInit(centers).initialize(square_points, 2)
    assert torch.equal(_means(reps), centers)

    state = ClusterState(means=centers, n_clusters=2, dimension=2)
    reps = FromPreviousInit(state).initialize(square_points, 2)
    assert torch.equal(_means(reps), centers)


def test_from_previous_shape_mismatch(square_points):
    with pytest.raises(InvalidConfigurationError):
        FromPreviousInit(torch.zeros(3, 2)).initialize(square_points, 2)
    with pytest.raises(InvalidConfigurationError):
        FromPreviousInit(torch.zeros(2, 3)).initialize(square_points, 2)
    with pytest.raises(TypeError):
        FromPreviousInit(np.zeros((2, 2))).initialize(square_points, 2)
