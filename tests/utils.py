# tests/utils.py
"""
Helpers shared by the lloyd tests.

Cluster ids are arbitrary, so label comparisons here ignore renaming.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def _as_array(x) -> np.ndarray:
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()
    return np.asarray(x)


def perm_invariant_accuracy(y_pred, split_index: int) -> float:
    """
    Accuracy of a two-cluster labeling whose truth is "the first
    `split_index` points form one group, the rest the other", under
    whichever naming of the two clusters fits better.
    """
    y_pred = _as_array(y_pred)
    if y_pred.ndim != 1:
        raise ValueError(f"Expected 1D labels, got shape {y_pred.shape}")
    if not 0 <= split_index <= y_pred.size:
        raise ValueError(f"split_index {split_index} outside [0, {y_pred.size}]")

    truth = (np.arange(y_pred.size) >= split_index).astype(y_pred.dtype)
    agree = float(np.mean(y_pred == truth)) if y_pred.size else 1.0
    return max(agree, 1.0 - agree) if set(np.unique(y_pred)) <= {0, 1} else agree


def labels_equal_up_to_perm(y1, y2, K: int) -> bool:
    """True when renaming the clusters of `y2` can make it equal to `y1`."""
    y1, y2 = _as_array(y1), _as_array(y2)
    return any(np.array_equal(y1, np.asarray(p)[y2])
               for p in itertools.permutations(range(K)))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """One line: `[timing] <label> <json meta> <seconds>s`."""
    extra = f" {json.dumps(meta, separators=(',', ':'))}" if meta else ""
    print(f"[timing] {label}{extra} {seconds:.3f}s")


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """Time the enclosed block and report it with `print_timing`."""
    start = time.perf_counter()
    try:
        yield
    finally:
        print_timing(label, time.perf_counter() - start, **(meta or {}))
