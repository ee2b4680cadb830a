"""Pipeline runner.

One run = one batch:
- read every configured source (fingerprinting documents that lack one)
- cluster the whole batch, or each partition when `clustering.partition_by` is set
- write clusters with every configured writer
- write `manifest.json` with config echo, outputs and metrics

Clusters are transient; nothing is carried between runs.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List
import json
import logging
import os
import time

from ..config import ClusterConfig
from ..clustering.grouper import build_clusters, build_partitioned_clusters
from ..clustering.metrics import ClusterMetrics
from ..errors import DocumentFormatError
from ..fingerprints.schema import Cluster, ClusterDocument
from ..sources.local_jsonl import LocalJSONLSource
from ..writers.registry import get_cluster_writer

log = logging.getLogger("simcluster.build")


@dataclass
class RunResult:
    run_id: str
    out_dir: str
    documents: List[ClusterDocument] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    metrics: ClusterMetrics = field(default_factory=ClusterMetrics)
    outputs: Dict[str, List[str]] = field(default_factory=dict)
    skipped_records: int = 0


def load_documents(cfg: ClusterConfig) -> tuple[List[ClusterDocument], int]:
    """Read all sources in config order. Returns (documents, skipped line count)."""
    docs: List[ClusterDocument] = []
    skipped = 0
    for spec in cfg.sources:
        src = LocalJSONLSource(spec, max_tokens=cfg.fingerprint.max_tokens, recompute=cfg.fingerprint.recompute)
        meta = src.metadata()
        log.info(f"Source {spec.name}: {meta['file_count']} files, {meta['total_size_bytes']:,} bytes")
        before = len(docs)
        docs.extend(src.stream())
        skipped += src.skipped
        log.info(f"Source {spec.name}: loaded {len(docs) - before} documents ({src.skipped} skipped)")
    return docs, skipped


def write_manifest(path: str, manifest: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)


def cluster_documents(cfg: ClusterConfig, docs: List[ClusterDocument]) -> List[Cluster]:
    cl = cfg.clustering
    if cl.partition_by:
        return build_partitioned_clusters(
            docs,
            threshold=cl.threshold,
            by=cl.partition_by,
            window=cl.window,
            validate=cl.validate,
        )
    return build_clusters(docs, threshold=cl.threshold, validate=cl.validate)


def run_clustering(cfg: ClusterConfig) -> RunResult:
    start = time.time()
    os.makedirs(cfg.out_dir, exist_ok=True)
    log.info(f"Run {cfg.run_id}: writing to {cfg.out_dir}")

    docs, skipped = load_documents(cfg)
    ids = [d.doc_id for d in docs]
    if len(set(ids)) != len(ids):
        dupes = sorted(i for i, n in Counter(ids).items() if n > 1)
        raise DocumentFormatError(f"Duplicate document ids across sources: {dupes[:10]}")

    clusters = cluster_documents(cfg, docs)
    metrics = ClusterMetrics.from_clusters(clusters, docs)
    log.info(metrics.summary())

    outputs: Dict[str, List[str]] = {}
    for name in cfg.outputs:
        writer = get_cluster_writer(name)
        outputs[name] = writer.write(clusters, out_dir=cfg.out_dir)
        log.info(f"Writer {name}: {outputs[name]}")

    write_manifest(
        os.path.join(cfg.out_dir, "manifest.json"),
        {
            "run_id": cfg.run_id,
            "config": asdict(cfg),
            "outputs": outputs,
            "metrics": metrics.to_dict(),
            "skipped_records": skipped,
            "elapsed_sec": round(time.time() - start, 3),
        },
    )
    return RunResult(
        run_id=cfg.run_id,
        out_dir=cfg.out_dir,
        documents=docs,
        clusters=clusters,
        metrics=metrics,
        outputs=outputs,
        skipped_records=skipped,
    )
