"""
Logging Utilities for the Recommendation Pipeline.

This module provides structured logging for:
- Pipeline runs (CLI / batch scoring)
- One-line parameter and metric summaries

Example:
    >>> from workrec.logging_utils import setup_pipeline_logger, format_params
    >>> logger = setup_pipeline_logger('pipeline', log_dir='logs/pipeline')
    >>> logger.info(f"Run started | {format_params({'count': 10, 'random_factor': 0.2})}")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

# ============================================================================
# Constants
# ============================================================================

DEFAULT_LOG_DIR = "logs/pipeline"
ROOT_LOGGER_NAME = "workrec"

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


# ============================================================================
# Logger Setup
# ============================================================================

def ensure_log_dir(log_dir: Union[str, Path]) -> Path:
    """Create log directory if it doesn't exist."""
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def setup_pipeline_logger(
    name: str = 'pipeline',
    log_dir: Optional[Union[str, Path]] = None,
    console: bool = True,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Setup the package logger for a pipeline run.

    Handlers are attached to the `workrec` logger so every module logger
    (`workrec.scoring.content`, ...) propagates into them.

    Args:
        name: Run name, used for the log file name
        log_dir: Directory for log files (None = no file handler)
        console: Whether to also log to console (stderr)
        level: Logging level

    Returns:
        Configured `workrec` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    if log_dir is not None:
        log_file = ensure_log_dir(log_dir) / f'{name}.log'
        fh = logging.FileHandler(log_file, encoding='utf-8')
        fh.setLevel(level)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    if console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    return logger


# ============================================================================
# Format Helpers
# ============================================================================

def format_params(params: Dict[str, Any]) -> str:
    """Format parameters for logging."""
    items = []
    for k, v in params.items():
        if isinstance(v, float):
            items.append(f"{k}={v:.4g}")
        else:
            items.append(f"{k}={v}")
    return ", ".join(items)


def format_metrics(metrics: Dict[str, Any]) -> str:
    """Format run metrics for logging. Counts print as ints, timings with 4 decimals."""
    items = []
    for k, v in metrics.items():
        if v is None:
            continue
        if isinstance(v, float):
            items.append(f"{k}={v:.4f}")
        else:
            items.append(f"{k}={v}")
    return ", ".join(items)


def generate_run_id(prefix: str = 'rec') -> str:
    """Generate a run id like 'rec_20251125_103000'."""
    return f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
