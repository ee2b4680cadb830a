"""Writer registry.

Add new writers without changing pipeline code by registering them here.
"""

from __future__ import annotations
from typing import Dict
from .base import ClusterWriter
from .jsonl import JSONLClusterWriter
from .parquet import ParquetClusterWriter

_WRITERS: Dict[str, ClusterWriter] = {
    "jsonl": JSONLClusterWriter(),
    "parquet": ParquetClusterWriter(),
}


def register_cluster_writer(name: str, writer: ClusterWriter) -> None:
    """Register a new cluster writer at runtime."""
    if name in _WRITERS:
        raise ValueError(f"Cluster writer '{name}' already registered")
    _WRITERS[name] = writer


def list_cluster_writers() -> list[str]:
    return list(_WRITERS.keys())


def get_cluster_writer(name: str) -> ClusterWriter:
    if name not in _WRITERS:
        raise KeyError(
            f"Unknown cluster writer: {name}. "
            f"Available: {list(_WRITERS)}. "
            f"Register with register_cluster_writer()"
        )
    return _WRITERS[name]
