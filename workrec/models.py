"""
Data Model for Work Recommendations.

Value types shared by every stage of the scoring pipeline:
- Tag / UserProfile / Work: content side (tag vectors + engagement metrics)
- SimilarUser: collaborative side (neighbour similarity + liked works)
- MetricsConfig: influence of tags, views and interaction time
- ScoredItem: (work_id, score) pair produced and consumed by every ranker
- RecommendationRequest: one fully-materialized snapshot per invocation

All classes are frozen dataclasses holding tuples, so the core never
mutates its inputs and results can be recombined freely.

Example:
    >>> from workrec.models import Tag, UserProfile, Work
    >>> profile = UserProfile.from_pairs([("scifi", 1.0)])
    >>> work = Work("A", (Tag("scifi", 1.0),), view_count=10, interaction_time=5)
"""

from typing import Dict, Iterable, Optional, Sequence, Tuple
from dataclasses import dataclass, field


DEFAULT_CONTENT_WEIGHT = 0.5
DEFAULT_COLLAB_WEIGHT = 0.5


# ============================================================================
# Content Side
# ============================================================================

@dataclass(frozen=True)
class Tag:
    """Named tag with a numeric affinity/strength."""
    name: str
    value: float


def _as_tags(pairs: Iterable[Tuple[str, float]]) -> Tuple[Tag, ...]:
    return tuple(Tag(str(name), float(value)) for name, value in pairs)


@dataclass(frozen=True)
class UserProfile:
    """Tag affinity weights of the target user."""
    tags: Tuple[Tag, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, float]]) -> 'UserProfile':
        return cls(tags=_as_tags(pairs))

    def tag_map(self) -> Dict[str, float]:
        """
        Map tag name -> value.

        When a name occurs more than once the first occurrence wins,
        which is the entry a linear scan by name would stop at.
        """
        mapping: Dict[str, float] = {}
        for tag in self.tags:
            mapping.setdefault(tag.name, tag.value)
        return mapping


@dataclass(frozen=True)
class Work:
    """Catalog item: tags plus usage metrics."""
    id: str
    tags: Tuple[Tag, ...] = ()
    view_count: float = 0.0
    interaction_time: float = 0.0

    @classmethod
    def from_pairs(
        cls,
        work_id: str,
        pairs: Iterable[Tuple[str, float]],
        view_count: float = 0.0,
        interaction_time: float = 0.0
    ) -> 'Work':
        return cls(
            id=work_id,
            tags=_as_tags(pairs),
            view_count=float(view_count),
            interaction_time=float(interaction_time)
        )


# ============================================================================
# Collaborative Side
# ============================================================================

@dataclass(frozen=True)
class SimilarUser:
    """Neighbour of the target user with the works they liked."""
    id: str
    similarity: float
    liked_works: Tuple[str, ...] = ()


# ============================================================================
# Configuration / Results
# ============================================================================

@dataclass(frozen=True)
class MetricsConfig:
    """
    Influence of the content signals.

    Weights are caller-owned multipliers; no range is enforced.
    """
    use_metrics: bool = False
    weight_views: float = 0.0
    weight_time: float = 0.0
    weight_tags: float = 1.0


@dataclass(frozen=True)
class ScoredItem:
    """Work id with its score in a ranking."""
    work_id: str
    score: float

    def to_dict(self) -> Dict[str, object]:
        return {'id': self.work_id, 'score': self.score}


@dataclass(frozen=True)
class RecommendationRequest:
    """
    One scoring snapshot.

    Fusion weights left as None are resolved by the pipeline
    (pipeline config, then the 0.5/0.5 default).
    """
    profile: UserProfile
    catalog: Tuple[Work, ...] = ()
    similar_users: Tuple[SimilarUser, ...] = ()
    metrics_config: MetricsConfig = field(default_factory=MetricsConfig)
    num_recommendations: int = 10
    random_factor: float = 0.0
    content_weight: Optional[float] = None
    collab_weight: Optional[float] = None


def as_id_score_map(items: Sequence[ScoredItem]) -> Dict[str, float]:
    """Convert a ranking into a work_id -> score dict."""
    return {item.work_id: item.score for item in items}
