"""Plausible wrong answers for multiple-choice questions."""

import random

from .config import PARTIAL_MATCH_DISCOUNT, QUIZ_DISTRACTOR_COUNT, SIMILARITY_THRESHOLD
from .models import Entry
from .utils import similarity
from .vocabulary import unique_by_identity


def rank_similar(correct: Entry, pool: list[Entry], rng: random.Random,
                 threshold: float = SIMILARITY_THRESHOLD) -> list[tuple[float, Entry]]:
    """Pool entries whose identity resembles correct's, best first.

    Excludes correct itself. Equal scores are ordered randomly.
    """
    candidates = [e for e in unique_by_identity(pool) if e.identity != correct.identity]
    rng.shuffle(candidates)
    scored = [(similarity(correct.identity, e.identity, PARTIAL_MATCH_DISCOUNT), e)
              for e in candidates]
    scored = [(score, e) for score, e in scored if score >= threshold]
    scored.sort(key=lambda s: s[0], reverse=True)
    return scored


def distractors(correct: Entry, pool: list[Entry], n: int = QUIZ_DISTRACTOR_COUNT,
                rng: random.Random = None) -> list[Entry]:
    """Up to n wrong-answer entries for correct.

    Similar-looking entries come first, then random ones fill the gap.
    Never includes correct and never repeats an identity.
    """
    rng = rng or random.Random()
    chosen = [e for _, e in rank_similar(correct, pool, rng)[:n]]

    taken = {correct.identity, *(e.identity for e in chosen)}
    remainder = [e for e in unique_by_identity(pool) if e.identity not in taken]
    while len(chosen) < n and remainder:
        chosen.append(remainder.pop(rng.randrange(len(remainder))))
    return chosen
