"""
Tag-Vector Similarity.

Cosine similarity between a user's tag profile and a single work,
treating both tag sets as sparse vectors keyed by tag name.

Example:
    >>> from workrec.scoring.similarity import cosine_similarity
    >>> sim = cosine_similarity(profile, work)
"""

from typing import Dict, Iterable, Optional
import numpy as np

from workrec.models import Tag, UserProfile, Work


def tag_norm(tags: Iterable[Tag]) -> float:
    """Euclidean norm over a tag set's own values (0.0 for empty set)."""
    values = np.fromiter((tag.value for tag in tags), dtype=np.float64)
    if values.size == 0:
        return 0.0
    return float(np.sqrt(np.dot(values, values)))


def cosine_similarity(
    user: UserProfile,
    work: Work,
    user_tags: Optional[Dict[str, float]] = None,
    user_norm: Optional[float] = None
) -> float:
    """
    Cosine similarity between user profile and work tags.

    Dot product runs over the work's tags; a work tag contributes only
    when the user has a tag with the same name. Each norm uses that
    side's own values regardless of overlap.

    Args:
        user: Target user profile
        work: Catalog item
        user_tags: Precomputed user.tag_map() (reused across a catalog scan)
        user_norm: Precomputed norm of the user tags

    Returns:
        Similarity, 0.0 when either vector has zero norm
    """
    if user_tags is None:
        user_tags = user.tag_map()
    if user_norm is None:
        user_norm = tag_norm(user.tags)

    work_norm = tag_norm(work.tags)
    if user_norm == 0 or work_norm == 0:
        return 0.0

    dot = 0.0
    for tag in work.tags:
        user_value = user_tags.get(tag.name)
        if user_value is not None:
            dot += tag.value * user_value

    return dot / (user_norm * work_norm)
