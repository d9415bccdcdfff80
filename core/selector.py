"""Mistake-weighted selection of practice items."""

import random

from .config import SELECTION_JITTER
from .models import Entry, PracticeItem
from .vocabulary import unique_by_identity


def select(pool: list[Entry], ledger: dict, k: int, rng: random.Random,
           jitter: float = SELECTION_JITTER) -> list[PracticeItem]:
    """Draw k distinct items, biased toward entries with more mistakes.

    The pool is shuffled so equal weights break ties randomly, stable-sorted
    by weight (highest first), then reordered by a noisy rank key. An entry
    nearer the front is never less likely to land in the first k than one
    further back, but nothing is guaranteed a place.

    Callers check the pool size first; ValueError if it is smaller than k.
    """
    candidates = unique_by_identity(pool)
    if len(candidates) < k:
        raise ValueError(f"Pool of {len(candidates)} entries cannot supply {k} items")

    items = [PracticeItem(entry, weight=int(ledger.get(entry.identity, 0) or 0))
             for entry in candidates]
    rng.shuffle(items)
    items.sort(key=lambda item: item.weight, reverse=True)

    spread = jitter * len(items)
    keyed = [(rank + rng.uniform(0, spread), rank, item) for rank, item in enumerate(items)]
    keyed.sort(key=lambda row: (row[0], row[1]))
    return [item for _, _, item in keyed[:k]]


def select_decoys(pool: list[Entry], chosen: list[PracticeItem], k: int,
                  rng: random.Random) -> list[PracticeItem]:
    """Up to k further items drawn uniformly from entries not already chosen."""
    taken = {item.identity for item in chosen}
    remainder = [e for e in unique_by_identity(pool) if e.identity not in taken]
    picked = rng.sample(remainder, min(k, len(remainder)))
    return [PracticeItem(entry) for entry in picked]
