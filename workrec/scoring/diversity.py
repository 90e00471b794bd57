"""
Diversity Sampling.

Produces the final N recommendations by mixing a guaranteed top slice
with randomly drawn items, then shuffling the result so repeated
requests do not show a monotonous list.

Slots:
    num_random = floor(count * random_factor)   (clamped to [0, count])
    num_top    = count - num_random

Random pool policies:
    'top'  - draw from the first num_top fused items, i.e. the same slice
             as the guaranteed portion. Duplicates across the two parts
             are kept. This is the historical behaviour and the default.
    'tail' - draw from the items ranked below num_top, so the random
             portion surfaces lower-ranked works. No duplicates.

Example:
    >>> from workrec.scoring.diversity import sample_diverse
    >>> final = sample_diverse(fused, count=10, random_factor=0.2, seed=42)
"""

from typing import List, Optional, Sequence, Tuple
import math
import numpy as np
import logging

from workrec.models import ScoredItem

logger = logging.getLogger(__name__)

RANDOM_POOL_TOP = 'top'
RANDOM_POOL_TAIL = 'tail'
RANDOM_POOLS = (RANDOM_POOL_TOP, RANDOM_POOL_TAIL)


def plan_slots(count: int, random_factor: float) -> Tuple[int, int]:
    """
    Split `count` output slots into (num_top, num_random).

    Args:
        count: Requested number of recommendations
        random_factor: Share of random slots

    Returns:
        (num_top, num_random), both 0 when count <= 0
    """
    if count <= 0:
        return 0, 0
    num_random = math.floor(count * random_factor)
    num_random = min(max(num_random, 0), count)
    return count - num_random, num_random


def _random_pool(
    fused: Sequence[ScoredItem],
    num_top: int,
    random_pool: str
) -> List[ScoredItem]:
    if random_pool == RANDOM_POOL_TAIL:
        return list(fused[num_top:])
    return list(fused[:num_top])


def sample_diverse(
    fused: Sequence[ScoredItem],
    count: int,
    random_factor: float,
    seed: Optional[int] = None,
    random_pool: str = RANDOM_POOL_TOP,
    rng: Optional[np.random.Generator] = None
) -> List[ScoredItem]:
    """
    Select and shuffle the final recommendations.

    Args:
        fused: Fused ranking, sorted by score desc
        count: Requested number of recommendations
        random_factor: Share of slots filled by random draws
        seed: Seed for a fresh generator (None = OS entropy)
        random_pool: 'top' or 'tail' (see module docstring)
        rng: Generator to use instead of creating one from `seed`

    Returns:
        At most `count` items in shuffled order

    Raises:
        ValueError: If random_pool is not a known policy
    """
    if random_pool not in RANDOM_POOLS:
        raise ValueError(
            f"Unknown random_pool '{random_pool}', expected one of {RANDOM_POOLS}"
        )

    if count <= 0:
        return []

    num_top, num_random = plan_slots(count, random_factor)

    if rng is None:
        rng = np.random.default_rng(seed)

    selected = list(fused[:num_top])

    pool = _random_pool(fused, num_top, random_pool)
    num_draw = min(num_random, len(pool))
    if num_draw > 0:
        picks = rng.choice(len(pool), size=num_draw, replace=False)
        selected.extend(pool[int(i)] for i in picks)

    order = rng.permutation(len(selected))
    result = [selected[int(i)] for i in order]

    logger.debug(
        f"Diversity sampling: count={count}, top={num_top}, random={num_random}, "
        f"drawn={num_draw}, pool={random_pool}, output={len(result)}"
    )
    return result
