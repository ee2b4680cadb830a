"""Parquet cluster writer.

Writes two tables:
- `clusters.parquet`: one row per cluster
- `memberships.parquet`: one row per document (doc_id -> cluster_id, is_center, position)
"""

from __future__ import annotations
import os
from typing import List, Sequence
import pyarrow as pa
import pyarrow.parquet as pq
from .base import ClusterWriter
from ..fingerprints.schema import Cluster


def clusters_schema() -> pa.Schema:
    return pa.schema([
        ("cluster_id", pa.string()),
        ("center_id", pa.string()),
        ("member_ids", pa.list_(pa.string())),
        ("size", pa.int64()),
        ("average_distance", pa.float64()),
    ], metadata={"schema_version": "v1"})


def memberships_schema() -> pa.Schema:
    return pa.schema([
        ("doc_id", pa.string()),
        ("cluster_id", pa.string()),
        ("is_center", pa.bool_()),
        ("position", pa.int32()),
    ], metadata={"schema_version": "v1"})


class ParquetClusterWriter(ClusterWriter):
    name = "parquet"

    def write(self, clusters: Sequence[Cluster], *, out_dir: str) -> List[str]:
        os.makedirs(out_dir, exist_ok=True)
        cluster_rows = [
            {
                "cluster_id": c.cluster_id,
                "center_id": c.center_id,
                "member_ids": list(c.member_ids),
                "size": c.size,
                "average_distance": float(c.average_distance),
            }
            for c in clusters
        ]
        member_rows = [
            {"doc_id": doc_id, "cluster_id": c.cluster_id, "is_center": pos == 0, "position": pos}
            for c in clusters
            for pos, doc_id in enumerate(c.member_ids)
        ]
        clusters_path = os.path.join(out_dir, "clusters.parquet")
        members_path = os.path.join(out_dir, "memberships.parquet")
        pq.write_table(pa.Table.from_pylist(cluster_rows, schema=clusters_schema()), clusters_path, compression="zstd")
        pq.write_table(pa.Table.from_pylist(member_rows, schema=memberships_schema()), members_path, compression="zstd")
        return [clusters_path, members_path]
