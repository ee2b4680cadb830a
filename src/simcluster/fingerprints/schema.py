"""Clustering data model.

ClusterDocument carries a *precomputed* fingerprint. The builder never
re-derives fingerprints from text, so callers can cache them at ingestion.

Cluster is transient: clusters are recomputed on every builder call and have
no identity across batches.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import DocumentFormatError
from .similarity import validate_fingerprint


def parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 strings, epoch seconds, or datetimes into an aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, bool):
        raise DocumentFormatError(f"Invalid timestamp: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise DocumentFormatError(f"Timestamp out of range: {value!r}") from e
    elif isinstance(value, str) and value.strip():
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError as e:
            raise DocumentFormatError(f"Invalid timestamp: {value!r}") from e
    else:
        raise DocumentFormatError(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class ClusterDocument:
    # identity
    doc_id: str
    fingerprint: str
    published_at: datetime
    source: str = ""

    # optional payload, never read by the builder
    headline: Optional[str] = None
    text: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.published_at = parse_timestamp(self.published_at)

    @property
    def timestamp(self) -> float:
        return self.published_at.timestamp()

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> ClusterDocument:
        """Build from a loosely-keyed record (accepts camelCase aliases)."""
        doc_id = obj.get("id", obj.get("doc_id"))
        if doc_id is None or str(doc_id) == "":
            raise DocumentFormatError(f"Document is missing an id: {obj!r}")
        fp = obj.get("fingerprint", obj.get("simhash", obj.get("simHash")))
        published = obj.get("published_at", obj.get("publishedAt"))
        source = obj.get("source", obj.get("source_domain", obj.get("sourceDomain", ""))) or ""
        known = {
            "id", "doc_id", "fingerprint", "simhash", "simHash", "published_at", "publishedAt",
            "source", "source_domain", "sourceDomain", "headline", "text", "content",
        }
        return cls(
            doc_id=str(doc_id),
            fingerprint=validate_fingerprint(fp),
            published_at=parse_timestamp(published),
            source=str(source),
            headline=obj.get("headline"),
            text=obj.get("text", obj.get("content")),
            extra={k: v for k, v in obj.items() if k not in known},
        )


@dataclass
class Cluster:
    cluster_id: str
    center_id: str
    member_ids: List[str]  # center first
    average_distance: float = 0.0

    @property
    def size(self) -> int:
        return len(self.member_ids)

    @property
    def is_singleton(self) -> bool:
        return len(self.member_ids) == 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "center_id": self.center_id,
            "member_ids": list(self.member_ids),
            "average_distance": self.average_distance,
            "size": self.size,
        }
