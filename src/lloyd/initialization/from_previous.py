"""
Seeding from centers the caller already has.

Covers warm starts from an earlier run and exact, scripted starting
positions.
"""

from typing import List, Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation
from ..base.data_structures import ClusterState
from ..representations.centroid import CentroidRepresentation
from ..exceptions import InvalidConfigurationError


class FromPreviousInit(InitializationStrategy):
    """Use fixed starting centers: a (K, d) tensor or a ClusterState.

    No random draws are made, so the generator is ignored.
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState]):
        if not isinstance(initial_state, (Tensor, ClusterState)):
            raise TypeError(f"initial_state must be a Tensor or ClusterState, "
                            f"got {type(initial_state)}")
        self.initial_state = initial_state

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        centers = self.initial_state
        if isinstance(centers, ClusterState):
            centers = centers.means
        centers = centers.to(device=points.device, dtype=points.dtype)

        expected = (n_clusters, points.shape[1])
        if tuple(centers.shape) != expected:
            raise InvalidConfigurationError(
                f"Initial centers have shape {tuple(centers.shape)}, expected {expected}")

        return [CentroidRepresentation.from_point(center) for center in centers]
