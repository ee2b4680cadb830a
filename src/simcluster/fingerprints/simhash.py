"""SimHash fingerprint generator.

Standard SimHash: each token votes +1/-1 on all 64 bit positions according to
its FNV-1a hash; positions with a strictly positive tally become 1 bits.
A zero tally resolves to 0.

Fingerprints are 16-char lowercase hex strings. Text with no usable tokens
maps to the all-zero sentinel so empty content still groups deterministically.
"""

from __future__ import annotations
from typing import Iterable, Optional

from ..text.tokenizer import simhash_tokens
from .hashing import fnv1a64, MASK_64

FINGERPRINT_BITS = 64
FINGERPRINT_HEX_LEN = 16
EMPTY_FINGERPRINT = "0" * FINGERPRINT_HEX_LEN


def simhash64(tokens: Iterable[str]) -> int:
    v = [0] * FINGERPRINT_BITS
    for t in tokens:
        h = fnv1a64(t)
        for i in range(FINGERPRINT_BITS):
            v[i] += 1 if (h >> i) & 1 else -1
    out = 0
    for i in range(FINGERPRINT_BITS):
        if v[i] > 0:
            out |= (1 << i)
    return out & MASK_64


def int_to_fingerprint(value: int) -> str:
    return format(value & MASK_64, "016x")


def fingerprint_to_int(fp: str) -> int:
    return int(fp, 16)


def compute_fingerprint(text: str, max_tokens: Optional[int] = None) -> str:
    """Compute the 64-bit SimHash of `text` as 16 lowercase hex chars.

    Args:
        text: Raw document text.
        max_tokens: Optional cap on the number of leading tokens considered.

    Returns:
        Fingerprint string; ``EMPTY_FINGERPRINT`` when no tokens survive.
    """
    tokens = simhash_tokens(text)
    if max_tokens is not None:
        tokens = tokens[:max_tokens]
    if not tokens:
        return EMPTY_FINGERPRINT
    return int_to_fingerprint(simhash64(tokens))
