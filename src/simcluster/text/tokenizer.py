"""Tokenization and cheap text helpers.

Word characters are ASCII (`[A-Za-z0-9_]`), so every token the tokenizer
emits is plain ASCII. Anything else (accented letters, CJK, emoji, punctuation)
is treated as a separator.
"""

from __future__ import annotations
import re
from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

STOPWORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
    "used", "this", "that", "these", "those", "i", "you", "he", "she", "it",
    "we", "they", "what", "which", "who", "whom", "where", "when", "why", "how",
    "all", "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "s", "t", "just", "don", "now",
])

# General tokenizer keeps apostrophes and hyphens inside words.
_SEP_RE = re.compile(r"[^A-Za-z0-9_\s'-]")
# SimHash features are stricter: only word characters survive.
_SIMHASH_SEP_RE = re.compile(r"[^A-Za-z0-9_\s]")
_WS_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class TokenizeOptions:
    min_length: int = 2
    remove_stopwords: bool = False
    lowercase: bool = True


def tokenize(text: str, options: Optional[TokenizeOptions] = None, **overrides) -> List[str]:
    """Split text into word tokens.

    Args:
        text: Raw text.
        options: Tokenization options (defaults: min_length=2, lowercase, keep stopwords).
        **overrides: Individual option overrides, e.g. ``tokenize(t, min_length=1)``.

    Returns:
        Ordered list of tokens.
    """
    opts = options or TokenizeOptions()
    if overrides:
        opts = replace(opts, **overrides)

    processed = text.lower() if opts.lowercase else text
    tokens = [w for w in _WS_RE.split(_SEP_RE.sub(" ", processed)) if len(w) >= opts.min_length]
    if opts.remove_stopwords:
        return [w for w in tokens if w.lower() not in STOPWORDS]
    return tokens


def simhash_tokens(text: str, min_length: int = 2) -> List[str]:
    """Lowercase word features used by the fingerprint generator."""
    return [w for w in _WS_RE.split(_SIMHASH_SEP_RE.sub(" ", text.lower())) if len(w) >= min_length]


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_RE.split(text) if s.strip()]


def count_words(text: str) -> int:
    return len(tokenize(text, min_length=1))


def ngrams(tokens: List[str], n: int) -> List[str]:
    """Space-joined n-grams over a token list (empty if fewer than n tokens)."""
    if n <= 0 or len(tokens) < n:
        return []
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def word_frequency(text: str, options: Optional[TokenizeOptions] = None) -> Dict[str, int]:
    return dict(Counter(tokenize(text, options)))


def top_words(text: str, n: int = 10, options: Optional[TokenizeOptions] = None) -> List[Tuple[str, int]]:
    """Most frequent tokens; ties keep first-seen order."""
    freq = word_frequency(text, options)
    return sorted(freq.items(), key=lambda kv: -kv[1])[:n]
