"""Cluster output writers."""

from .base import ClusterWriter
from .registry import get_cluster_writer, list_cluster_writers, register_cluster_writer

__all__ = ["ClusterWriter", "get_cluster_writer", "list_cluster_writers", "register_cluster_writer"]
