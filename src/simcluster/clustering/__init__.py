"""Batch clustering of fingerprinted documents."""

from .grouper import (
    DEFAULT_THRESHOLD,
    build_clusters,
    build_partitioned_clusters,
    cluster_index,
    partition_documents,
)
from .metrics import ClusterMetrics

__all__ = [
    "DEFAULT_THRESHOLD",
    "build_clusters",
    "build_partitioned_clusters",
    "cluster_index",
    "partition_documents",
    "ClusterMetrics",
]
