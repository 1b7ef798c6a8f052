"""Daily set selection.

Every player gets the same five quotes on a given day. The set is derived
from the pool and the day index alone:

  1. Seed one PRNG stream from the day index.
  2. Group the pool by tier and shuffle each group.
  3. Pop one quote per slot of DESIRED_TIERS; empty tiers leave a gap.
  4. Fill any gaps from a shuffle of the whole pool.
  5. Shuffle the picks into display order.
  6. Keep a tier-4 quote out of the first slot when something easier exists.

All shuffles draw from the same stream, in that order, so changing any
step changes every later pick.
"""

from __future__ import annotations

from cue_the_line.models import QUESTIONS_PER_RUN, Closer, Quote
from cue_the_line.rng import create_rng, seeded_shuffle

SEED_BASE = 123456
SEED_MULTIPLIER = 99991

DESIRED_TIERS = (1, 2, 2, 3, 3)
HARDEST_TIER = 4

CLOSER_SEED_BASE = 777
CLOSER_SEED_MULTIPLIER = 1337
FALLBACK_CLOSER = Closer(quote="Well, nobody’s perfect.", source="Some Like It Hot")


def day_seed(day_index: int) -> int:
    return SEED_BASE + day_index * SEED_MULTIPLIER


def select_daily_set(pool: list[Quote], day_index: int) -> list[Quote]:
    """Return the ordered daily set: five quotes, or the whole pool if smaller."""
    rng = create_rng(day_seed(day_index))

    by_tier: dict[int, list[Quote]] = {}
    for q in pool:
        by_tier.setdefault(q.tier, []).append(q)
    for tier, group in by_tier.items():
        by_tier[tier] = seeded_shuffle(group, rng)

    chosen: list[Quote] = []
    for tier in DESIRED_TIERS:
        group = by_tier.get(tier)
        if group:
            chosen.append(group.pop())

    if len(chosen) < QUESTIONS_PER_RUN:
        taken = {q.id for q in chosen}
        for q in seeded_shuffle(pool, rng):
            if q.id in taken:
                continue
            chosen.append(q)
            taken.add(q.id)
            if len(chosen) == QUESTIONS_PER_RUN:
                break

    chosen = seeded_shuffle(chosen, rng)

    if chosen and chosen[0].tier == HARDEST_TIER:
        swap = next((i for i, q in enumerate(chosen) if q.tier != HARDEST_TIER), None)
        if swap is not None:
            chosen[0], chosen[swap] = chosen[swap], chosen[0]

    return chosen[:QUESTIONS_PER_RUN]


def pick_closer(closers: list[Closer], day_index: int) -> Closer:
    """Closing line for a perfect run, stable for the whole day."""
    if not closers:
        return FALLBACK_CLOSER
    rng = create_rng(CLOSER_SEED_BASE + day_index * CLOSER_SEED_MULTIPLIER)
    return closers[int(rng() * len(closers))]
