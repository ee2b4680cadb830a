from __future__ import annotations
import os, json
from typing import List, Sequence
from .base import ClusterWriter
from ..fingerprints.schema import Cluster


class JSONLClusterWriter(ClusterWriter):
    name = "jsonl"

    def write(self, clusters: Sequence[Cluster], *, out_dir: str) -> List[str]:
        os.makedirs(out_dir, exist_ok=True)
        path = os.path.join(out_dir, "clusters.jsonl")
        with open(path, "w", encoding="utf-8") as f:
            for c in clusters:
                f.write(json.dumps(c.to_dict(), ensure_ascii=False) + "\n")
        return [path]
