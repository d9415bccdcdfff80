"""Utility functions for lingodrill."""

import difflib
import re
import unicodedata


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and collapse whitespace for comparison."""
    decomposed = unicodedata.normalize('NFKD', text or '')
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r'\s+', ' ', stripped).strip().lower()


def similarity(query: str, text: str, partial_discount: float = 0.9) -> float:
    """Approximate similarity of text to query in [0, 1].

    Strategy:
    1. Whole-text ratio using difflib.SequenceMatcher.
    2. Sliding token window over text with the same word count as the
       query, so "hello" still scores high against "hello there".
       Window hits are discounted so an identical text always ranks first.
    """
    norm_query = normalize_text(query)
    norm_text = normalize_text(text)
    if not norm_query or not norm_text:
        return 0.0
    if norm_query == norm_text:
        return 1.0

    best = difflib.SequenceMatcher(None, norm_query, norm_text).ratio()

    query_words = norm_query.split()
    text_words = norm_text.split()
    width = len(query_words)
    for i in range(len(text_words) - width + 1):
        window = ' '.join(text_words[i:i + width])
        ratio = difflib.SequenceMatcher(None, norm_query, window).ratio()
        best = max(best, ratio * partial_discount)

    return best
