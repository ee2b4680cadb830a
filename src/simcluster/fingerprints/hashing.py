"""Hashing utilities.

SimHash features are hashed with 64-bit FNV-1a rather than Python's builtin
`hash()`, which is salted per process (PYTHONHASHSEED) and would make
fingerprints differ between runs and machines.
"""

from __future__ import annotations

FNV_OFFSET_BASIS = 14695981039346656037
FNV_PRIME = 1099511628211
MASK_64 = (1 << 64) - 1


def fnv1a64(text: str) -> int:
    """FNV-1a 64-bit hash of a string, one code point at a time.

    The empty string hashes to the offset basis.
    """
    h = FNV_OFFSET_BASIS
    for ch in text:
        h ^= ord(ch)
        h = (h * FNV_PRIME) & MASK_64
    return h
