"""Batch clustering metrics. Logged at the end of every run and written to the manifest."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..fingerprints.schema import Cluster, ClusterDocument
from ..fingerprints.similarity import classify_match, hamming_distance


@dataclass
class ClusterMetrics:
    """Metrics: cluster counts, duplication rate, per-source volume, member match types."""

    total_documents: int = 0
    total_clusters: int = 0
    singleton_clusters: int = 0
    clustered_documents: int = 0  # documents in clusters of size > 1
    largest_cluster_size: int = 0
    source_document_counts: Dict[str, int] = field(default_factory=dict)
    match_type_counts: Dict[str, int] = field(default_factory=dict)
    top_clusters: List[tuple] = field(default_factory=list)

    @property
    def duplication_rate_pct(self) -> float:
        if self.total_documents == 0:
            return 0.0
        return 100.0 * (self.total_documents - self.total_clusters) / self.total_documents

    @classmethod
    def from_clusters(
        cls,
        clusters: Sequence[Cluster],
        documents: Optional[Sequence[ClusterDocument]] = None,
        top_n: int = 10,
    ) -> ClusterMetrics:
        m = cls()
        m.total_clusters = len(clusters)
        by_id = {d.doc_id: d for d in documents or []}
        for c in clusters:
            m.total_documents += c.size
            if c.is_singleton:
                m.singleton_clusters += 1
            else:
                m.clustered_documents += c.size
            m.largest_cluster_size = max(m.largest_cluster_size, c.size)
            center = by_id.get(c.center_id)
            if center is None:
                continue
            for member_id in c.member_ids[1:]:
                member = by_id.get(member_id)
                if member is None:
                    continue
                mt = classify_match(hamming_distance(center.fingerprint, member.fingerprint)).value
                m.match_type_counts[mt] = m.match_type_counts.get(mt, 0) + 1
        for d in documents or []:
            m.source_document_counts[d.source] = m.source_document_counts.get(d.source, 0) + 1
        m.top_clusters = [
            (c.cluster_id, c.size)
            for c in sorted(clusters, key=lambda c: -c.size)[:top_n]
            if not c.is_singleton
        ]
        return m

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_documents": self.total_documents,
            "total_clusters": self.total_clusters,
            "singleton_clusters": self.singleton_clusters,
            "clustered_documents": self.clustered_documents,
            "largest_cluster_size": self.largest_cluster_size,
            "duplication_rate_pct": self.duplication_rate_pct,
            "source_document_counts": dict(self.source_document_counts),
            "match_type_counts": dict(self.match_type_counts),
            "top_clusters": [list(t) for t in self.top_clusters],
        }

    def summary(self) -> str:
        lines = [
            "=== Cluster Metrics ===",
            f"Total documents: {self.total_documents}",
            f"Total clusters: {self.total_clusters}",
            f"Singleton clusters: {self.singleton_clusters}",
            f"Documents in multi-member clusters: {self.clustered_documents}",
            f"Largest cluster: {self.largest_cluster_size}",
            f"Duplication rate: {self.duplication_rate_pct:.2f}%",
            "Member match types:",
        ]
        for mt, cnt in sorted(self.match_type_counts.items()):
            lines.append(f"  {mt}: {cnt}")
        lines.append("Largest clusters:")
        for cid, size in self.top_clusters:
            lines.append(f"  {cid}: {size}")
        return "\n".join(lines)
