"""
Pipeline Configuration.

PipelineConfig holds the policy knobs that are not part of a scoring
snapshot: fusion weights, diversity pool policy, optional seed and log
level. It can be loaded from YAML:

    fusion:
      content_weight: 0.5
      collab_weight: 0.5
    diversity:
      random_pool: top      # top | tail
      seed: null
    logging:
      level: INFO

Example:
    >>> from workrec.config import load_config
    >>> config = load_config('config/pipeline.yaml')
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict
from pathlib import Path
import logging

import yaml

from workrec.models import DEFAULT_COLLAB_WEIGHT, DEFAULT_CONTENT_WEIGHT
from workrec.scoring.diversity import RANDOM_POOL_TOP, RANDOM_POOLS

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for RecommendationPipeline."""

    # Fusion weights (policy default, any real value accepted)
    content_weight: float = DEFAULT_CONTENT_WEIGHT
    collab_weight: float = DEFAULT_COLLAB_WEIGHT

    # Diversity settings
    random_pool: str = RANDOM_POOL_TOP
    seed: Optional[int] = None

    log_level: str = 'INFO'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_dict(data: Dict[str, Any]) -> PipelineConfig:
    """
    Build PipelineConfig from a parsed YAML mapping.

    Raises:
        ValueError: If a value has the wrong type, random_pool is unknown
            or seed is negative
    """
    defaults = PipelineConfig()
    fusion = data.get('fusion') or {}
    diversity = data.get('diversity') or {}
    log_cfg = data.get('logging') or {}

    seed = diversity.get('seed', defaults.seed)
    config = PipelineConfig(
        content_weight=float(fusion.get('content_weight', defaults.content_weight)),
        collab_weight=float(fusion.get('collab_weight', defaults.collab_weight)),
        random_pool=str(diversity.get('random_pool', defaults.random_pool)),
        seed=int(seed) if seed is not None else None,
        log_level=str(log_cfg.get('level', defaults.log_level)).upper(),
    )

    if config.random_pool not in RANDOM_POOLS:
        raise ValueError(
            f"diversity.random_pool must be one of {RANDOM_POOLS}, got '{config.random_pool}'"
        )
    if config.seed is not None and config.seed < 0:
        raise ValueError(f"diversity.seed must be >= 0, got {config.seed}")
    return config


def load_config(config_path: Optional[str] = None) -> PipelineConfig:
    """
    Load config from YAML file.

    Any failure (missing file, bad YAML, bad values) is logged and the
    defaults are returned.
    """
    if config_path is None:
        return PipelineConfig()

    try:
        with open(Path(config_path), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("top-level YAML value must be a mapping")

        config = config_from_dict(data)
        logger.info(f"Loaded pipeline config from {config_path}")
        return config
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return PipelineConfig()
