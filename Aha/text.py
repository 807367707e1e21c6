# -*- coding: utf-8 -*-
"""
text.py — tokenization, similarity and small text helpers

Two token views are used by the engine:
  - ``content_tokens``: length > 2 and not a stop word (density)
  - ``token_set``: length > 2 only, deduplicated (similarity)
Stop words stay in the similarity view.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Set

from .lexicon import STOPWORDS

__all__ = [
    "Tokenizer",
    "SimilarityScorer",
    "make_title",
    "split_into_sentences",
]

# -------------------------------------------------------------
# Regexes (compiled once)
# -------------------------------------------------------------
NON_WORD_RE = re.compile(r"\W+")
WHITESPACE_RE = re.compile(r"\s+")
SENTENCE_END_RE = re.compile(r"[.!?]")


@dataclass(frozen=True)
class Tokenizer:
    stopwords: FrozenSet[str] = STOPWORDS
    min_length: int = 3

    def tokenize(self, text: Optional[str]) -> List[str]:
        if not text:
            return []
        return [t for t in NON_WORD_RE.split(text.lower()) if t]

    def filter(self, tokens: Iterable[str]) -> List[str]:
        return [t for t in tokens if len(t) >= self.min_length and t not in self.stopwords]

    def content_tokens(self, text: Optional[str]) -> List[str]:
        return self.filter(self.tokenize(text))

    def token_set(self, text: Optional[str]) -> Set[str]:
        return {t for t in self.tokenize(text) if len(t) >= self.min_length}


class SimilarityScorer:
    """Jaccard overlap of two texts' token sets."""

    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        self.tokenizer = tokenizer or Tokenizer()

    def score(self, a: Optional[str], b: Optional[str]) -> float:
        tokens_a = self.tokenizer.token_set(a)
        tokens_b = self.tokenizer.token_set(b)
        if not tokens_a or not tokens_b:
            return 0.0
        intersection = len(tokens_a & tokens_b)
        union = len(tokens_a) + len(tokens_b) - intersection
        return intersection / union


def make_title(text: Optional[str], max_words: int = 10) -> str:
    words = [w for w in WHITESPACE_RE.split(text or "") if w]
    short = " ".join(words[:max_words])
    return short + " …" if len(words) > max_words else short


def split_into_sentences(text: Optional[str], min_length: int = 15) -> List[str]:
    parts = (p.strip() for p in SENTENCE_END_RE.split(text or ""))
    return [p for p in parts if len(p) >= min_length]
