"""
Exceptions and warnings raised by the clustering engine.

All errors are raised at the point of detection and are never retried:
they describe configuration or usage mistakes, not transient conditions.
"""


class InvalidConfigurationError(ValueError):
    """K, the point set, or the point dimensionality cannot be clustered.

    Raised for K == 0, K > N, an empty point set, or ragged points.
    """


class InvalidQueryError(ValueError):
    """A label query asked for a cluster id outside [0, K)."""


class NoCandidateError(LookupError):
    """A nearest-point query excluded every available point."""


class DegenerateClusterError(RuntimeError):
    """A cluster received no members and the empty-cluster policy is 'error'."""

    def __init__(self, cluster_idx: int):
        super().__init__(f"Cluster {cluster_idx} has no assigned points")
        self.cluster_idx = cluster_idx


class NotFittedError(RuntimeError):
    """Results were requested before a clustering run finished."""


class DegenerateClusterWarning(UserWarning):
    """A cluster received no members and kept its previous center."""


class ConvergenceWarning(UserWarning):
    """The iteration cap was reached before the labels stopped changing."""
