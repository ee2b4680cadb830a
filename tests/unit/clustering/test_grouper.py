"""Tests for clustering.grouper — greedy center-comparison clustering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from simcluster.clustering.grouper import (
    build_clusters,
    build_partitioned_clusters,
    cluster_index,
    partition_documents,
)
from simcluster.errors import DocumentFormatError, FingerprintFormatError
from simcluster.fingerprints.schema import ClusterDocument


def _assert_partition(clusters, docs):
    members = [m for c in clusters for m in c.member_ids]
    assert len(members) == len(set(members))
    assert set(members) == {d.doc_id for d in docs}


class TestBuildClusters:
    def test_empty_batch(self):
        assert build_clusters([]) == []
        assert build_clusters([], 3) == []

    def test_spec_scenario(self, scenario_batch):
        clusters = build_clusters(scenario_batch, 3)
        assert len(clusters) == 2
        first, second = clusters
        assert first.cluster_id == "cluster-1"
        assert first.center_id == "a1"
        assert first.member_ids == ["a1", "a2"]
        assert first.average_distance == 1.0
        assert second.cluster_id == "cluster-2"
        assert second.center_id == "a3"
        assert second.member_ids == ["a3"]
        assert second.average_distance == 0.0

    def test_one_bit_apart_single_cluster(self, doc_factory):
        docs = [doc_factory("x", "ffffffffffffffff"), doc_factory("y", "fffffffffffffffe", 5)]
        clusters = build_clusters(docs, 3)
        assert len(clusters) == 1
        assert clusters[0].member_ids == ["x", "y"]

    def test_64_bits_apart_two_singletons(self, doc_factory):
        docs = [doc_factory("x", "ffffffffffffffff"), doc_factory("y", "0000000000000000", 5)]
        clusters = build_clusters(docs, 3)
        assert [c.member_ids for c in clusters] == [["x"], ["y"]]

    def test_newest_document_is_center(self, doc_factory):
        docs = [
            doc_factory("old", "ffffffffffffffff", 60),
            doc_factory("new", "efffffffffffffff", 0),
        ]
        clusters = build_clusters(docs, 3)
        assert clusters[0].center_id == "new"
        assert clusters[0].member_ids == ["new", "old"]

    def test_equal_timestamps_keep_input_order(self, doc_factory):
        docs = [
            doc_factory("b", "ffffffffffffffff"),
            doc_factory("a", "efffffffffffffff"),
            doc_factory("c", "0000000000000000"),
        ]
        clusters = build_clusters(docs, 3)
        assert clusters[0].member_ids == ["b", "a"]
        reversed_clusters = build_clusters(list(reversed(docs)), 3)
        assert reversed_clusters[0].center_id == "c"
        assert reversed_clusters[1].member_ids == ["a", "b"]

    def test_center_only_comparison_is_not_transitive(self, doc_factory):
        # center -> m1: 3 bits, center -> m2: 3 bits, m1 -> m2: 6 bits
        center = doc_factory("center", "0000000000000000", 0)
        m1 = doc_factory("m1", "0000000000000007", 1)
        m2 = doc_factory("m2", "0000000000000070", 2)
        clusters = build_clusters([center, m1, m2], 3)
        assert len(clusters) == 1
        assert clusters[0].member_ids == ["center", "m1", "m2"]
        assert clusters[0].average_distance == 3.0

    def test_no_reassignment_of_claimed_documents(self, doc_factory):
        # "mid" is claimed by the newest center even though it is exactly equal to "late"
        docs = [
            doc_factory("newest", "000000000000000f", 0),
            doc_factory("mid", "0000000000000003", 1),
            doc_factory("late", "0000000000000003", 2),
        ]
        clusters = build_clusters(docs, 2)
        assert clusters[0].member_ids == ["newest", "mid", "late"]
        clusters = build_clusters(docs, 1)
        assert [c.member_ids for c in clusters] == [["newest"], ["mid", "late"]]

    def test_threshold_zero_groups_exact_only(self, doc_factory):
        docs = [
            doc_factory("a", "ffffffffffffffff", 0),
            doc_factory("b", "ffffffffffffffff", 1),
            doc_factory("c", "efffffffffffffff", 2),
        ]
        clusters = build_clusters(docs, 0)
        assert [c.member_ids for c in clusters] == [["a", "b"], ["c"]]

    def test_average_distance(self, doc_factory):
        docs = [
            doc_factory("c", "0000000000000000", 0),
            doc_factory("d1", "0000000000000001", 1),
            doc_factory("d3", "0000000000000007", 2),
        ]
        assert build_clusters(docs, 3)[0].average_distance == 2.0

    def test_partition_invariant(self, doc_factory):
        fps = ["ffffffffffffffff", "efffffffffffffff", "0000000000000000", "0000000000000001",
               "f0f0f0f0f0f0f0f0", "f0f0f0f0f0f0f0f1", "0f0f0f0f0f0f0f0f", "ffffffff00000000"]
        docs = [doc_factory(f"d{i}", fp, i % 3) for i, fp in enumerate(fps)]
        for threshold in (0, 1, 3, 10, 64):
            _assert_partition(build_clusters(docs, threshold), docs)

    def test_threshold_64_single_cluster(self, scenario_batch):
        clusters = build_clusters(scenario_batch, 64)
        assert len(clusters) == 1
        assert clusters[0].member_ids == ["a1", "a2", "a3"]

    def test_duplicate_ids_rejected(self, doc_factory):
        docs = [doc_factory("a", "ffffffffffffffff"), doc_factory("a", "0000000000000000")]
        with pytest.raises(DocumentFormatError):
            build_clusters(docs)

    def test_validate_flag(self, doc_factory):
        docs = [doc_factory("a", "ffffffffffffffff"), doc_factory("b", "ffff")]
        with pytest.raises(FingerprintFormatError):
            build_clusters(docs, validate=True)

    def test_negative_threshold(self, scenario_batch):
        with pytest.raises(ValueError):
            build_clusters(scenario_batch, -1)

    def test_input_not_mutated(self, scenario_batch):
        snapshot = [d.doc_id for d in scenario_batch]
        build_clusters(list(reversed(scenario_batch)))
        assert [d.doc_id for d in scenario_batch] == snapshot


class TestClusterIndex:
    def test_maps_every_member(self, scenario_batch):
        idx = cluster_index(build_clusters(scenario_batch))
        assert idx == {"a1": "cluster-1", "a2": "cluster-1", "a3": "cluster-2"}


class TestPartitioning:
    def test_by_source(self, doc_factory):
        docs = [
            doc_factory("1", "ffffffffffffffff", source="a.com"),
            doc_factory("2", "ffffffffffffffff", source="b.com"),
            doc_factory("3", "ffffffffffffffff", source="a.com"),
        ]
        parts = partition_documents(docs, by="source")
        assert list(parts) == ["a.com", "b.com"]
        assert [d.doc_id for d in parts["a.com"]] == ["1", "3"]

    def test_by_window(self, doc_factory):
        docs = [
            doc_factory("1", "ffffffffffffffff", minutes_ago=10),
            doc_factory("2", "ffffffffffffffff", minutes_ago=40),
            doc_factory("3", "ffffffffffffffff", minutes_ago=24 * 60),
        ]
        parts = partition_documents(docs, by="window", window=timedelta(hours=1))
        assert len(parts) == 2

    def test_window_required(self, scenario_batch):
        with pytest.raises(ValueError):
            partition_documents(scenario_batch, by="window")

    def test_unknown_key(self, scenario_batch):
        with pytest.raises(ValueError):
            partition_documents(scenario_batch, by="language")

    def test_partitioned_clusters_do_not_cross_sources(self, doc_factory):
        docs = [
            doc_factory("1", "ffffffffffffffff", 0, source="a.com"),
            doc_factory("2", "ffffffffffffffff", 1, source="b.com"),
            doc_factory("3", "efffffffffffffff", 2, source="a.com"),
        ]
        clusters = build_partitioned_clusters(docs, threshold=3, by="source")
        assert [c.cluster_id for c in clusters] == ["a.com/cluster-1", "b.com/cluster-1"]
        assert [c.member_ids for c in clusters] == [["1", "3"], ["2"]]
        _assert_partition(clusters, docs)


class TestNaiveTimestamps:
    def test_window_partition_with_naive_datetime(self):
        docs = [
            ClusterDocument("a", "ffffffffffffffff", datetime(2024, 5, 1, 12, 10)),
            ClusterDocument("b", "ffffffffffffffff", datetime(2024, 5, 1, 12, 50, tzinfo=timezone.utc)),
        ]
        parts = partition_documents(docs, by="window", window=timedelta(hours=1))
        assert list(parts.values()) == [docs]

    def test_naive_and_aware_recency_order(self):
        docs = [
            ClusterDocument("older", "ffffffffffffffff", datetime(2024, 5, 1, 11, tzinfo=timezone.utc)),
            ClusterDocument("newer", "ffffffffffffffff", datetime(2024, 5, 1, 12)),
        ]
        assert build_clusters(docs)[0].center_id == "newer"
