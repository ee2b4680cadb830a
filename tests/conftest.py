"""Shared test fixtures: document factories and JSONL helpers."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from simcluster.fingerprints.schema import ClusterDocument

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_doc(doc_id: str, fingerprint: str, minutes_ago: int = 0, source: str = "example.com") -> ClusterDocument:
    return ClusterDocument(
        doc_id=doc_id,
        fingerprint=fingerprint,
        published_at=T0 - timedelta(minutes=minutes_ago),
        source=source,
    )


@pytest.fixture
def doc_factory():
    return make_doc


@pytest.fixture
def scenario_batch() -> list[ClusterDocument]:
    """a1 newest, a2 one bit away from a1, a3 64 bits away."""
    return [
        make_doc("a1", "ffffffffffffffff", 0),
        make_doc("a2", "efffffffffffffff", 1),
        make_doc("a3", "0000000000000000", 2),
    ]


@pytest.fixture
def write_jsonl(tmp_path: Path):
    def _write(name: str, rows: list) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for r in rows:
                f.write((r if isinstance(r, str) else json.dumps(r)) + "\n")
        return path
    return _write
