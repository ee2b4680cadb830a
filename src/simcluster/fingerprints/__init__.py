"""Fingerprint layer: hash primitive, SimHash generator, comparator, data model."""

from .hashing import fnv1a64, FNV_OFFSET_BASIS, FNV_PRIME, MASK_64
from .simhash import (
    EMPTY_FINGERPRINT,
    compute_fingerprint,
    simhash64,
    fingerprint_to_int,
    int_to_fingerprint,
)
from .similarity import (
    MatchType,
    validate_fingerprint,
    hamming_distance,
    hamming_distance_validated,
    similarity_from_distance,
    classify_match,
    is_near_duplicate,
    are_documents_similar,
)
from .schema import ClusterDocument, Cluster, parse_timestamp

__all__ = [
    "fnv1a64",
    "FNV_OFFSET_BASIS",
    "FNV_PRIME",
    "MASK_64",
    "EMPTY_FINGERPRINT",
    "compute_fingerprint",
    "simhash64",
    "fingerprint_to_int",
    "int_to_fingerprint",
    "MatchType",
    "validate_fingerprint",
    "hamming_distance",
    "hamming_distance_validated",
    "similarity_from_distance",
    "classify_match",
    "is_near_duplicate",
    "are_documents_similar",
    "ClusterDocument",
    "Cluster",
    "parse_timestamp",
]
