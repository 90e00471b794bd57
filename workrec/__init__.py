"""
Work Recommendation Package.

Batch scoring pass for a single user:
- Content-based ranking (tag cosine similarity + catalog-normalized metrics)
- Collaborative ranking (similarity-weighted likes of similar users)
- Weighted fusion of both rankings
- Diversity sampling of the final N items

Submodules:
    models: data model (Tag, Work, SimilarUser, ScoredItem, ...)
    scoring: ranking stages
    pipeline: RecommendationPipeline orchestration
    config: PipelineConfig + YAML loading
    io: snapshot reader and output writers
    cli: command-line entry point

Example:
    >>> from workrec import RecommendationPipeline, read_request
    >>> result = RecommendationPipeline().recommend(read_request('snapshot.txt'), seed=7)
"""

from .models import (
    Tag,
    UserProfile,
    Work,
    SimilarUser,
    MetricsConfig,
    ScoredItem,
    RecommendationRequest,
)
from .config import PipelineConfig, load_config
from .pipeline import RecommendationPipeline, RecommendationResult, recommend
from .io import InputFormatError, parse_request, read_request, render_json

__version__ = "0.1.0"

__all__ = [
    # Data model
    'Tag',
    'UserProfile',
    'Work',
    'SimilarUser',
    'MetricsConfig',
    'ScoredItem',
    'RecommendationRequest',

    # Pipeline
    'PipelineConfig',
    'load_config',
    'RecommendationPipeline',
    'RecommendationResult',
    'recommend',

    # I/O
    'InputFormatError',
    'parse_request',
    'read_request',
    'render_json',
]
