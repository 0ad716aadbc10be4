"""
Mean update strategy for centroid-based clustering.
"""

from typing import Optional
import warnings
from torch import Tensor

from ..base.interfaces import ParameterUpdater, ClusterRepresentation
from ..exceptions import DegenerateClusterError, DegenerateClusterWarning


EMPTY_CLUSTER_POLICIES = ('keep', 'error')


class MeanUpdater(ParameterUpdater):
    """Updates cluster representation by computing mean of assigned points.

    A cluster that receives no points never gets a NaN center. With
    ``empty_cluster='keep'`` it retains its previous center and a
    DegenerateClusterWarning is issued; with
    ``empty_cluster='error'`` a DegenerateClusterError is raised.
    """

    def __init__(self, empty_cluster: str = 'keep'):
        """
        Args:
            empty_cluster: Policy for clusters with no members ('keep' or 'error')
        """
        if empty_cluster not in EMPTY_CLUSTER_POLICIES:
            raise ValueError(f"empty_cluster must be one of {list(EMPTY_CLUSTER_POLICIES)}, "
                             f"got '{empty_cluster}'")
        self.empty_cluster = empty_cluster
        self.n_empty_ = 0

    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               cluster_idx: Optional[int] = None,
               **kwargs) -> None:
        """Update cluster mean.

        Args:
            representation: Cluster representation to update
            points: Points assigned to this cluster (already filtered)
            cluster_idx: Which cluster is being updated
            **kwargs: Ignored
        """
        if len(points) == 0:
            if self.empty_cluster == 'error':
                raise DegenerateClusterError(cluster_idx)

            self.n_empty_ += 1
            warnings.warn(f"Cluster {cluster_idx} is empty; keeping its previous center",
                          DegenerateClusterWarning)
            return

        representation.update_from_points(points, **kwargs)
