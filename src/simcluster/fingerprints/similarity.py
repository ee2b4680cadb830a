"""Fingerprint comparison: Hamming distance, similarity score, match type.

Two distance functions exist on purpose:
- `hamming_distance` trusts its inputs and is used in the clustering loop
- `hamming_distance_validated` checks format first and is used at boundaries
"""

from __future__ import annotations
import re
from datetime import timedelta
from enum import Enum
from typing import Optional, TYPE_CHECKING

from ..errors import FingerprintFormatError
from .simhash import FINGERPRINT_BITS

if TYPE_CHECKING:
    from .schema import ClusterDocument

_HEX16_RE = re.compile(r"[0-9a-fA-F]{16}")


class MatchType(str, Enum):
    EXACT = "exact"
    NEAR = "near"
    SIMILAR = "similar"
    DIFFERENT = "different"


def validate_fingerprint(fp: str) -> str:
    """Return `fp` unchanged if it is exactly 16 hex chars, else raise FingerprintFormatError."""
    if not isinstance(fp, str) or _HEX16_RE.fullmatch(fp) is None:
        raise FingerprintFormatError(fp)
    return fp


def hamming_distance(a: str, b: str) -> int:
    return bin(int(a, 16) ^ int(b, 16)).count("1")


def hamming_distance_validated(a: str, b: str) -> int:
    validate_fingerprint(a)
    validate_fingerprint(b)
    return hamming_distance(a, b)


def similarity_from_distance(distance: int) -> float:
    return 1.0 - distance / FINGERPRINT_BITS


def classify_match(distance: int) -> MatchType:
    if distance == 0:
        return MatchType.EXACT
    if distance <= 3:
        return MatchType.NEAR
    if distance <= 10:
        return MatchType.SIMILAR
    return MatchType.DIFFERENT


def are_documents_similar(
    a: "ClusterDocument",
    b: "ClusterDocument",
    threshold: int = 3,
    max_time_gap: Optional[timedelta] = None,
) -> bool:
    """Fingerprint distance within threshold and, optionally, publication times within max_time_gap."""
    if hamming_distance_validated(a.fingerprint, b.fingerprint) > threshold:
        return False
    if max_time_gap is not None and abs(a.published_at - b.published_at) > max_time_gap:
        return False
    return True


def is_near_duplicate(a: str, b: str, threshold: int = 3) -> bool:
    return hamming_distance(a, b) <= threshold
