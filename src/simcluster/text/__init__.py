"""Shared text utilities (tokenizer collaborator)."""

from .tokenizer import (
    STOPWORDS,
    TokenizeOptions,
    tokenize,
    simhash_tokens,
    split_sentences,
    count_words,
    ngrams,
    word_frequency,
    top_words,
)

__all__ = [
    "STOPWORDS",
    "TokenizeOptions",
    "tokenize",
    "simhash_tokens",
    "split_sentences",
    "count_words",
    "ngrams",
    "word_frequency",
    "top_words",
]
