from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from .lexicon import DEFAULT_DIMENSION, DIMENSION_KEYWORDS


class DimensionClassifier:
    """Tags text with the categories whose keywords it contains.

    Never returns an empty list; text matching no category gets ``thought``.
    """

    def __init__(self, keywords: Optional[Mapping[str, Tuple[str, ...]]] = None, default: str = DEFAULT_DIMENSION):
        self.keywords = keywords if keywords is not None else DIMENSION_KEYWORDS
        self.default = default

    def classify(self, text: Optional[str]) -> List[str]:
        lower = (text or "").lower()
        dims = [label for label, words in self.keywords.items() if any(w in lower for w in words)]
        return dims or [self.default]
