# tests/integration/test_kmeans_properties.py
"""
End-to-end properties of a finished run on synthetic data.

- Fixed point: reassigning the fitted points to the final centers
  reproduces the final labels.
- Mean: every non-empty cluster center is the mean of its members.
- Determinism: with random=False (or a fixed seed) repeated runs are
  bit-identical for both seeding methods.
- Objective trace never increases across assignment rounds.
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

import utils  # time_block, labels_equal_up_to_perm
import data_gen  # make_blobs, make_distinct_grid

from lloyd import KMeans, FitPhase
from lloyd.assignments import HardAssignment


CENTERS_3D = [[0.0, 0.0, 0.0], [6.0, 0.0, 0.0], [0.0, 6.0, 0.0], [0.0, 0.0, 6.0]]


@pytest.fixture
def blobs(seed_all):
    X, y = data_gen.make_blobs(n_per=60, centers=CENTERS_3D, scale=0.5, seed=seed_all)
    return torch.from_numpy(X), torch.from_numpy(y)


@pytest.mark.parametrize("init", ["k-means++", "random"])
def test_final_labels_are_a_fixed_point(blobs, init):
    X, _ = blobs
    km = KMeans(n_clusters=4, init=init, random=False).fit(X)
    assert km.phase_ is FitPhase.CONVERGED

    reassigned = HardAssignment().compute_assignments(X, km.representations)
    assert torch.equal(reassigned, km.labels_)
    assert torch.equal(km.predict(X), km.labels_)


@pytest.mark.parametrize("init", ["k-means++", "random"])
def test_centers_are_member_means(blobs, init):
    X, _ = blobs
    km = KMeans(n_clusters=4, init=init, random=False).fit(X)

    for k in range(4):
        members = km.get_points_with_label(k)
        if members.shape[0] == 0:
            continue
        assert torch.allclose(km.cluster_centers_[k], members.mean(dim=0), atol=1e-5)


def test_kmeanspp_recovers_separated_blobs(blobs):
    X, y = blobs
    with utils.time_block("kmeans++ restarts", {"n": X.shape[0], "K": 4, "restarts": 5}):
        runs = [KMeans(n_clusters=4, random_state=seed).fit(X) for seed in range(5)]
    best = min(runs, key=lambda km: km.inertia_)

    assert utils.labels_equal_up_to_perm(y, best.labels_, K=4)


@pytest.mark.parametrize("init", ["k-means++", "random"])
def test_runs_without_randomness_are_identical(blobs, init):
    X, _ = blobs
    a = KMeans(n_clusters=4, init=init, random=False).fit(X)
    b = KMeans(n_clusters=4, init=init, random=False).fit(X)

    assert torch.equal(a.initial_centers_, b.initial_centers_)
    assert torch.equal(a.labels_, b.labels_)
    assert torch.equal(a.cluster_centers_, b.cluster_centers_)
    assert a.n_iter_ == b.n_iter_


def test_refit_on_same_estimator_is_identical(blobs):
    X, _ = blobs
    km = KMeans(n_clusters=4, init="random", random=False)
    first = km.cluster(X)
    second = km.cluster()

    assert torch.equal(first.initial_centers, second.initial_centers)
    assert torch.equal(first.labels, second.labels)


def test_seeded_runs_are_identical(blobs):
    X, _ = blobs
    a = KMeans(n_clusters=4, random_state=123).fit(X)
    b = KMeans(n_clusters=4, random_state=123).fit(X)
    assert torch.equal(a.initial_centers_, b.initial_centers_)
    assert torch.equal(a.labels_, b.labels_)


def test_kmeanspp_seeds_are_distinct_input_points():
    X = torch.from_numpy(data_gen.make_distinct_grid(4, d=2))
    km = KMeans(n_clusters=16, random=False).fit(X)

    seeds = km.initial_centers_
    assert torch.unique(seeds, dim=0).shape[0] == 16
    for seed in seeds:
        assert (X == seed).all(dim=1).any()

    # Every point is its own cluster
    assert sorted(km.labels_.tolist()) == list(range(16))
    assert km.inertia_ == pytest.approx(0.0)


def test_snapped_random_seeds_are_input_points(blobs):
    X, _ = blobs
    km = KMeans(n_clusters=4, init="random", snap_to_points=True, random=False).fit(X)

    for seed in km.initial_centers_:
        assert (X == seed).all(dim=1).any()


def test_random_seeds_lie_in_bounding_box(blobs):
    X, _ = blobs
    km = KMeans(n_clusters=4, init="random", random=False).fit(X)

    lo, hi = X.min(dim=0)[0], X.max(dim=0)[0]
    assert (km.initial_centers_ >= lo).all()
    assert (km.initial_centers_ <= hi).all()


def test_objective_never_increases(blobs):
    X, _ = blobs
    km = KMeans(n_clusters=4, init="random", random=False).fit(X)

    trace = np.array([state.objective_value for state in km.history_])
    assert np.all(np.diff(trace) <= 1e-3 * max(1.0, trace[0]))
    assert trace[-1] == pytest.approx(km.inertia_, rel=1e-4)
