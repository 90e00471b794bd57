"""
Weighted Fusion of Rankings.

Linear combination of the content and collaborative rankings:

    final(id) = content_weight * content(id, default 0)
              + collab_weight * collab(id, default 0)

Every id from either list appears in the output.

Example:
    >>> from workrec.scoring.fusion import combine_rankings
    >>> fused = combine_rankings(content_ranked, collab_ranked, 0.7, 0.3)
"""

from typing import Dict, List, Sequence

from workrec.models import DEFAULT_COLLAB_WEIGHT, DEFAULT_CONTENT_WEIGHT, ScoredItem


def combine_rankings(
    content_ranked: Sequence[ScoredItem],
    collab_ranked: Sequence[ScoredItem],
    content_weight: float = DEFAULT_CONTENT_WEIGHT,
    collab_weight: float = DEFAULT_COLLAB_WEIGHT
) -> List[ScoredItem]:
    """
    Merge two rankings into one score per work id.

    Weights are not validated: negative or >1 values are accepted to
    emphasize or suppress a method.

    Args:
        content_ranked: Content-based ranking
        collab_ranked: Collaborative ranking
        content_weight: Multiplier for content scores
        collab_weight: Multiplier for collaborative scores

    Returns:
        Fused ranking sorted by score desc. Ties keep first-seen order
        (content ranking first, then collaborative-only ids).
    """
    combined: Dict[str, float] = {}

    for item in content_ranked:
        combined[item.work_id] = combined.get(item.work_id, 0.0) + content_weight * item.score

    for item in collab_ranked:
        combined[item.work_id] = combined.get(item.work_id, 0.0) + collab_weight * item.score

    fused = [ScoredItem(work_id, score) for work_id, score in combined.items()]
    fused.sort(key=lambda x: x.score, reverse=True)
    return fused
