"""
Content-Based Scoring and Ranking.

Combines tag similarity with engagement metrics (views, interaction
time). Metrics are normalized by the catalog maximum, so every work's
metric score is relative to the catalog it is ranked in.

Formula:
    score = w_tags * cosine(user, work)
          + [use_metrics] (w_views * views / max_views + w_time * time / max_time)

Example:
    >>> from workrec.scoring.content import rank_content
    >>> ranked = rank_content(profile, catalog, MetricsConfig(weight_tags=1.0))
"""

from typing import List, Optional, Sequence, Tuple, Dict
import numpy as np
import logging

from workrec.models import MetricsConfig, ScoredItem, UserProfile, Work
from workrec.scoring.similarity import cosine_similarity, tag_norm

logger = logging.getLogger(__name__)


def _ratio(value: float, max_value: float) -> float:
    # Zero catalog maximum means the metric carries no signal
    if max_value <= 0:
        return 0.0
    return value / max_value


def catalog_maxima(catalog: Sequence[Work]) -> Tuple[float, float]:
    """
    Maximum view count and interaction time across the catalog.

    Returns:
        (max_views, max_time), both 0.0 for an empty catalog
    """
    if not catalog:
        return 0.0, 0.0

    views = np.array([work.view_count for work in catalog], dtype=np.float64)
    times = np.array([work.interaction_time for work in catalog], dtype=np.float64)

    # Maxima start at 0 so all-negative metrics still normalize against 0
    return max(0.0, float(views.max())), max(0.0, float(times.max()))


def score_work(
    user: UserProfile,
    work: Work,
    config: MetricsConfig,
    max_views: float,
    max_time: float,
    user_tags: Optional[Dict[str, float]] = None,
    user_norm: Optional[float] = None
) -> float:
    """
    Content score of a single work.

    Args:
        user: Target user profile
        work: Work to score
        config: Metric weights
        max_views: Catalog-wide maximum view count
        max_time: Catalog-wide maximum interaction time
        user_tags: Optional precomputed user tag map
        user_norm: Optional precomputed user tag norm

    Returns:
        Weighted content score
    """
    score = config.weight_tags * cosine_similarity(
        user, work, user_tags=user_tags, user_norm=user_norm
    )
    if config.use_metrics:
        norm_views = _ratio(work.view_count, max_views)
        norm_time = _ratio(work.interaction_time, max_time)
        score += config.weight_views * norm_views + config.weight_time * norm_time
    return score


def rank_content(
    user: UserProfile,
    catalog: Sequence[Work],
    config: MetricsConfig
) -> List[ScoredItem]:
    """
    Score every catalog work and sort descending.

    No work is dropped. Equal scores keep catalog order.

    Args:
        user: Target user profile
        catalog: Candidate works
        config: Metric weights

    Returns:
        One ScoredItem per catalog work, sorted by score desc
    """
    if not catalog:
        return []

    max_views, max_time = catalog_maxima(catalog)
    user_tags = user.tag_map()
    user_norm = tag_norm(user.tags)

    scored = [
        ScoredItem(
            work.id,
            score_work(
                user, work, config, max_views, max_time,
                user_tags=user_tags, user_norm=user_norm
            )
        )
        for work in catalog
    ]
    scored.sort(key=lambda x: x.score, reverse=True)

    logger.debug(
        f"Content ranking: {len(scored)} works, "
        f"max_views={max_views:.4g}, max_time={max_time:.4g}, "
        f"metrics={'on' if config.use_metrics else 'off'}"
    )
    return scored
