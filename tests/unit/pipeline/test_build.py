"""Tests for pipeline.build — end-to-end batch run."""

from __future__ import annotations

import json
import os

import pytest

from simcluster.config import parse_config
from simcluster.errors import DocumentFormatError
from simcluster.pipeline.build import run_clustering

ROWS = [
    {"id": "a1", "fingerprint": "ffffffffffffffff", "published_at": "2024-05-01T12:00:00Z", "domain": "a.com"},
    {"id": "a2", "fingerprint": "efffffffffffffff", "published_at": "2024-05-01T11:59:00Z", "domain": "b.com"},
    {"id": "a3", "fingerprint": "0000000000000000", "published_at": "2024-05-01T11:58:00Z", "domain": "a.com"},
]


def _cfg(tmp_path, path, **clustering):
    return parse_config({
        "run": {"run_id": "test", "out_dir": str(tmp_path / "out" / "{run_id}")},
        "sources": [{"name": "wire", "dataset": str(path), "source_field": "domain"}],
        "clustering": clustering,
        "outputs": ["jsonl", "parquet"],
    })


class TestRunClustering:
    def test_end_to_end(self, tmp_path, write_jsonl):
        path = write_jsonl("docs.jsonl", ROWS)
        result = run_clustering(_cfg(tmp_path, path))
        assert [c.member_ids for c in result.clusters] == [["a1", "a2"], ["a3"]]
        assert result.metrics.total_clusters == 2
        out = tmp_path / "out" / "test"
        assert (out / "clusters.jsonl").exists()
        assert (out / "clusters.parquet").exists()
        assert (out / "memberships.parquet").exists()
        with open(out / "manifest.json", encoding="utf-8") as f:
            manifest = json.load(f)
        assert manifest["run_id"] == "test"
        assert manifest["metrics"]["total_documents"] == 3
        assert manifest["config"]["clustering"]["threshold"] == 3

    def test_partition_by_source(self, tmp_path, write_jsonl):
        path = write_jsonl("docs.jsonl", ROWS)
        result = run_clustering(_cfg(tmp_path, path, partition_by="source"))
        assert [c.member_ids for c in result.clusters] == [["a1"], ["a3"], ["a2"]]

    def test_empty_batch(self, tmp_path, write_jsonl):
        path = write_jsonl("docs.jsonl", [])
        result = run_clustering(_cfg(tmp_path, path))
        assert result.clusters == []
        assert os.path.exists(tmp_path / "out" / "test" / "manifest.json")

    def test_duplicate_ids_across_sources(self, tmp_path, write_jsonl):
        a = write_jsonl("a.jsonl", ROWS[:1])
        b = write_jsonl("b.jsonl", ROWS[:1])
        cfg = parse_config({
            "run": {"run_id": "dup", "out_dir": str(tmp_path / "{run_id}")},
            "sources": [{"name": "a", "dataset": str(a)}, {"name": "b", "dataset": str(b)}],
        })
        with pytest.raises(DocumentFormatError):
            run_clustering(cfg)
