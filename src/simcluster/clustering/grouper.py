"""Greedy center-comparison clustering.

Documents are ordered newest first; the first unassigned document becomes a
cluster center and absorbs every unassigned document within `threshold` bits
of *the center*. Members are never compared with each other, so two members
of one cluster can be further apart than the threshold. Cluster membership
depends on this, keep it.

Cost is O(n^2) comparisons in the worst case. For large batches pre-partition
by source or time window (`build_partitioned_clusters`) and keep batches to a
few thousand documents.
"""

from __future__ import annotations
import logging
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Hashable, List, Optional, Sequence

from ..errors import DocumentFormatError
from ..fingerprints.schema import Cluster, ClusterDocument
from ..fingerprints.similarity import hamming_distance, validate_fingerprint

log = logging.getLogger("simcluster.clustering")

DEFAULT_THRESHOLD = 3


def _recency_order(documents: Sequence[ClusterDocument]) -> List[ClusterDocument]:
    # Equal timestamps keep input order: the index is part of the key.
    indexed = sorted(enumerate(documents), key=lambda p: (-p[1].timestamp, p[0]))
    return [d for _, d in indexed]


def build_clusters(
    documents: Sequence[ClusterDocument],
    threshold: int = DEFAULT_THRESHOLD,
    validate: bool = False,
    id_prefix: str = "cluster",
) -> List[Cluster]:
    """
    Partition a batch into near-duplicate clusters.

    Args:
        documents: Documents with precomputed fingerprints.
        threshold: Maximum Hamming distance from a center to join its cluster.
        validate: Check every fingerprint's format before clustering.
        id_prefix: Cluster ids are ``f"{id_prefix}-{n}"`` with n starting at 1.

    Returns:
        Clusters in creation order (newest center first). Every input document
        appears in exactly one cluster.
    """
    if not documents:
        return []
    if threshold < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold}")

    seen: set = set()
    for d in documents:
        if d.doc_id in seen:
            raise DocumentFormatError(f"Duplicate document id in batch: {d.doc_id!r}")
        seen.add(d.doc_id)
        if validate:
            validate_fingerprint(d.fingerprint)

    ordered = _recency_order(documents)
    assigned: set = set()
    clusters: List[Cluster] = []

    for center in ordered:
        if center.doc_id in assigned:
            continue
        cluster = Cluster(
            cluster_id=f"{id_prefix}-{len(clusters) + 1}",
            center_id=center.doc_id,
            member_ids=[center.doc_id],
        )
        total_distance = 0
        for candidate in ordered:
            if candidate.doc_id == center.doc_id or candidate.doc_id in assigned:
                continue
            distance = hamming_distance(center.fingerprint, candidate.fingerprint)
            if distance <= threshold:
                cluster.member_ids.append(candidate.doc_id)
                assigned.add(candidate.doc_id)
                total_distance += distance
        if cluster.size > 1:
            cluster.average_distance = total_distance / (cluster.size - 1)
        assigned.add(center.doc_id)
        clusters.append(cluster)

    log.debug(f"Clustered {len(documents)} documents into {len(clusters)} clusters (threshold={threshold})")
    return clusters


def cluster_index(clusters: Sequence[Cluster]) -> Dict[str, str]:
    """Map document id -> cluster id."""
    return {doc_id: c.cluster_id for c in clusters for doc_id in c.member_ids}


def _window_key(window: timedelta) -> Callable[[ClusterDocument], Hashable]:
    if window <= timedelta(0):
        raise ValueError(f"window must be positive, got {window}")
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    size = window.total_seconds()

    def key(doc: ClusterDocument) -> Hashable:
        start = epoch + timedelta(seconds=((doc.published_at - epoch).total_seconds() // size) * size)
        return start.strftime("%Y%m%dT%H%M%S")

    return key


def partition_documents(
    documents: Sequence[ClusterDocument],
    by: str = "source",
    window: Optional[timedelta] = None,
) -> "OrderedDict[Hashable, List[ClusterDocument]]":
    """
    Split a batch before clustering.

    by="source" groups on ``doc.source``; by="window" buckets on fixed
    ``window``-sized slices of publication time (aligned to the Unix epoch).
    Partition order follows first appearance in the input; documents keep input
    order inside each partition.
    """
    if by == "source":
        key_fn: Callable[[ClusterDocument], Hashable] = lambda d: d.source
    elif by == "window":
        if window is None:
            raise ValueError("partition by 'window' requires a window")
        key_fn = _window_key(window)
    else:
        raise ValueError(f"Unknown partition key: {by!r} (expected 'source' or 'window')")

    parts: "OrderedDict[Hashable, List[ClusterDocument]]" = OrderedDict()
    for d in documents:
        parts.setdefault(key_fn(d), []).append(d)
    return parts


def build_partitioned_clusters(
    documents: Sequence[ClusterDocument],
    threshold: int = DEFAULT_THRESHOLD,
    by: str = "source",
    window: Optional[timedelta] = None,
    validate: bool = False,
) -> List[Cluster]:
    """Run `build_clusters` per partition; cluster ids are prefixed with the partition key."""
    clusters: List[Cluster] = []
    for key, part in partition_documents(documents, by=by, window=window).items():
        part_clusters = build_clusters(part, threshold=threshold, validate=validate, id_prefix=f"{key or 'none'}/cluster")
        log.info(f"Partition {key or 'none'}: {len(part)} documents -> {len(part_clusters)} clusters")
        clusters.extend(part_clusters)
    return clusters
