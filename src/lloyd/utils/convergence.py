"""
Stopping rule of the Lloyd loop.

A run ends at a fixed point: an assignment round that reproduces the labels
of the round before it. Before the first round the previous labels are all
``SENTINEL_LABEL``, which no real label equals, so the first round always
counts every point as changed.
"""

from typing import Dict, Any, Optional
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion

SENTINEL_LABEL = -1


class ChangeInAssignments(ConvergenceCriterion):
    """Stop at the first round in which no label changed."""

    def __init__(self):
        super().__init__()
        self.reset()

    @property
    def previous_assignments(self) -> Optional[Tensor]:
        """Labels of the last checked round, or None before the first."""
        return self._previous

    def check(self, current_state: Dict[str, Any]) -> bool:
        labels = current_state['assignments']
        if not isinstance(labels, Tensor):
            labels = labels.get_hard()

        previous = self._previous
        if previous is None:
            previous = torch.full_like(labels, SENTINEL_LABEL)

        n_changed = int((labels != previous).sum().item())

        self.last_n_changed = n_changed
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
        })
        self._previous = labels.clone()

        return n_changed == 0

    def reset(self):
        super().reset()
        self._previous: Optional[Tensor] = None
        self.last_n_changed: Optional[int] = None
