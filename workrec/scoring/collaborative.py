"""
Collaborative Ranking.

Aggregates neighbour similarity over liked works: a work's score is the
sum of `similarity` over every similar user who liked it. Works nobody
liked are absent (the result is sparse, not catalog-complete).
"""

from typing import Dict, List, Sequence
import logging

from workrec.models import ScoredItem, SimilarUser

logger = logging.getLogger(__name__)


def rank_collaborative(similar_users: Sequence[SimilarUser]) -> List[ScoredItem]:
    """
    Rank works by summed neighbour similarity.

    Args:
        similar_users: Neighbours with their liked work ids

    Returns:
        ScoredItems sorted by score desc; ties keep first-liked order
    """
    if not similar_users:
        return []

    scores: Dict[str, float] = {}
    for user in similar_users:
        for work_id in user.liked_works:
            scores[work_id] = scores.get(work_id, 0.0) + user.similarity

    ranked = [ScoredItem(work_id, score) for work_id, score in scores.items()]
    ranked.sort(key=lambda x: x.score, reverse=True)

    logger.debug(
        f"Collaborative ranking: {len(similar_users)} similar users, "
        f"{len(ranked)} liked works"
    )
    return ranked
