"""
Recommendation Pipeline.

Runs the full scoring pass for one snapshot:

    content ranking ─┐
                     ├─> fusion ─> diversity sampling ─> recommendations
    collab ranking ──┘

Includes:
- RecommendationPipeline: orchestrates the stages with a PipelineConfig
- RecommendationResult: final list plus intermediate rankings and timing
- recommend(): one-shot helper

Example:
    >>> from workrec.pipeline import RecommendationPipeline
    >>> pipeline = RecommendationPipeline(config_path='config/pipeline.yaml')
    >>> result = pipeline.recommend(request, seed=42)
    >>> [item.work_id for item in result.recommendations]
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
import logging
import time

from workrec.config import PipelineConfig, load_config
from workrec.logging_utils import format_params
from workrec.models import RecommendationRequest, ScoredItem
from workrec.scoring import (
    RANDOM_POOLS,
    combine_rankings,
    plan_slots,
    rank_collaborative,
    rank_content,
    sample_diverse,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class RecommendationResult:
    """Result of a pipeline run."""
    recommendations: List[ScoredItem]
    content_ranked: List[ScoredItem]
    collab_ranked: List[ScoredItem]
    fused: List[ScoredItem]
    weights_used: Dict[str, float]
    num_top: int
    num_random: int
    latency_ms: float

    @property
    def num_output(self) -> int:
        return len(self.recommendations)

    @property
    def num_duplicates(self) -> int:
        """Entries repeated in the output (possible with the 'top' pool)."""
        ids = [item.work_id for item in self.recommendations]
        return len(ids) - len(set(ids))

    def to_dict(self) -> Dict[str, object]:
        return {'recommendations': [item.to_dict() for item in self.recommendations]}


# ============================================================================
# RecommendationPipeline
# ============================================================================

class RecommendationPipeline:
    """
    Content + collaborative scoring with weighted fusion and diversity.

    The pipeline holds no per-request state; each call to recommend()
    owns its random generator, so one instance can serve concurrent
    callers as long as config is not updated meanwhile.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        config_path: Optional[str] = None
    ):
        """
        Initialize RecommendationPipeline.

        Args:
            config: PipelineConfig instance
            config_path: Path to config YAML file (used if config is None)
        """
        if config is not None:
            self.config = config
        elif config_path is not None:
            self.config = load_config(config_path)
        else:
            self.config = PipelineConfig()

        logger.debug(f"RecommendationPipeline initialized: {format_params(self.config.to_dict())}")

    def _resolve_weights(self, request: RecommendationRequest) -> Dict[str, float]:
        content_weight = request.content_weight
        if content_weight is None:
            content_weight = self.config.content_weight

        collab_weight = request.collab_weight
        if collab_weight is None:
            collab_weight = self.config.collab_weight

        return {'content': content_weight, 'collab': collab_weight}

    def recommend(
        self,
        request: RecommendationRequest,
        seed: Optional[int] = None
    ) -> RecommendationResult:
        """
        Score one snapshot and pick the final recommendations.

        Args:
            request: Snapshot with profile, catalog, similar users and params
            seed: Seed for the diversity sampler (overrides config.seed)

        Returns:
            RecommendationResult
        """
        start_time = time.perf_counter()

        if seed is None:
            seed = self.config.seed

        weights = self._resolve_weights(request)

        content_ranked = rank_content(request.profile, request.catalog, request.metrics_config)
        collab_ranked = rank_collaborative(request.similar_users)
        fused = combine_rankings(
            content_ranked,
            collab_ranked,
            content_weight=weights['content'],
            collab_weight=weights['collab']
        )

        num_top, num_random = plan_slots(request.num_recommendations, request.random_factor)
        recommendations = sample_diverse(
            fused,
            count=request.num_recommendations,
            random_factor=request.random_factor,
            seed=seed,
            random_pool=self.config.random_pool
        )

        latency = (time.perf_counter() - start_time) * 1000

        result = RecommendationResult(
            recommendations=recommendations,
            content_ranked=content_ranked,
            collab_ranked=collab_ranked,
            fused=fused,
            weights_used=weights,
            num_top=num_top,
            num_random=num_random,
            latency_ms=latency
        )

        logger.info(
            f"Recommended {result.num_output} of {len(fused)} works: "
            f"catalog={len(request.catalog)}, similar_users={len(request.similar_users)}, "
            f"top={num_top}, random={num_random}, duplicates={result.num_duplicates}, "
            f"latency={latency:.1f}ms"
        )
        return result

    def update_config(
        self,
        content_weight: Optional[float] = None,
        collab_weight: Optional[float] = None,
        random_pool: Optional[str] = None,
        seed: Optional[int] = None
    ) -> None:
        """
        Update pipeline configuration dynamically.

        Raises:
            ValueError: If random_pool is not a known policy or seed is negative
        """
        if random_pool is not None and random_pool not in RANDOM_POOLS:
            raise ValueError(f"random_pool must be one of {RANDOM_POOLS}, got '{random_pool}'")
        if seed is not None and seed < 0:
            raise ValueError(f"seed must be >= 0, got {seed}")

        if content_weight is not None:
            self.config.content_weight = content_weight
        if collab_weight is not None:
            self.config.collab_weight = collab_weight
        if random_pool is not None:
            self.config.random_pool = random_pool
        if seed is not None:
            self.config.seed = seed

        logger.info(f"Pipeline config updated: {self.config}")


def recommend(
    request: RecommendationRequest,
    seed: Optional[int] = None,
    config: Optional[PipelineConfig] = None
) -> List[ScoredItem]:
    """Run the pipeline once and return only the final recommendations."""
    return RecommendationPipeline(config=config).recommend(request, seed=seed).recommendations
