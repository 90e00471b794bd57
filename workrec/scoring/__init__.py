"""
Scoring Stages.

Leaf-first ranking stages of the recommendation pipeline:
- similarity: tag-vector cosine similarity
- content: content score (similarity + normalized metrics) and ranking
- collaborative: similarity-weighted aggregation over liked works
- fusion: weighted combination of the two rankings
- diversity: top-N selection mixed with random draws

Example:
    >>> from workrec.scoring import rank_content, rank_collaborative, combine_rankings
    >>> fused = combine_rankings(rank_content(u, works, cfg), rank_collaborative(neighbours))
"""

from .similarity import cosine_similarity, tag_norm
from .content import score_work, rank_content, catalog_maxima
from .collaborative import rank_collaborative
from .fusion import combine_rankings
from .diversity import (
    sample_diverse,
    plan_slots,
    RANDOM_POOL_TOP,
    RANDOM_POOL_TAIL,
    RANDOM_POOLS
)

__all__ = [
    # Content
    'cosine_similarity',
    'tag_norm',
    'score_work',
    'rank_content',
    'catalog_maxima',

    # Collaborative
    'rank_collaborative',

    # Fusion
    'combine_rankings',

    # Diversity
    'sample_diverse',
    'plan_slots',
    'RANDOM_POOL_TOP',
    'RANDOM_POOL_TAIL',
    'RANDOM_POOLS',
]
