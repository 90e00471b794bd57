"""
Command-line entry point.

Reads one snapshot (file or stdin), runs the recommendation pipeline and
writes the final list as JSON (default) or CSV.

Run:
    python -m workrec.cli --input snapshot.txt --seed 42
    cat snapshot.txt | workrec --format csv
"""

from typing import List, Optional
from dataclasses import replace
import argparse
import logging
import sys

from workrec.config import load_config
from workrec.io.reader import InputFormatError, read_request
from workrec.io.writer import OUTPUT_FORMATS, write_output
from workrec.logging_utils import format_metrics, format_params, generate_run_id, setup_pipeline_logger
from workrec.pipeline import RecommendationPipeline
from workrec.scoring.diversity import RANDOM_POOLS

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def seed_value(text: str) -> int:
    """argparse type for --seed: a non-negative integer."""
    try:
        seed = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'")
    if seed < 0:
        raise argparse.ArgumentTypeError(f"seed must be >= 0, got {seed}")
    return seed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workrec",
        description="Blend content and collaborative scores into a diversified recommendation list",
    )
    parser.add_argument(
        "--input",
        "-i",
        default=None,
        help="Snapshot file (default: stdin)",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Pipeline config YAML",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--seed",
        type=seed_value,
        default=None,
        help="Seed for reproducible diversity sampling",
    )
    parser.add_argument(
        "--random-pool",
        choices=RANDOM_POOLS,
        default=None,
        help="Where random picks come from: top slice or lower-ranked tail",
    )
    parser.add_argument(
        "--content-weight",
        type=float,
        default=None,
        help="Fusion weight for content scores (overrides config and FUSION section)",
    )
    parser.add_argument(
        "--collab-weight",
        type=float,
        default=None,
        help="Fusion weight for collaborative scores (overrides config and FUSION section)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write logs to <log-dir>/<run id>.log",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.random_pool is not None:
        config.random_pool = args.random_pool

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO)
    run_id = generate_run_id()
    logger = setup_pipeline_logger(run_id, log_dir=args.log_dir, level=level)

    try:
        request = read_request(args.input if args.input is not None else sys.stdin)
    except (InputFormatError, OSError) as e:
        logger.error(f"Cannot read snapshot: {e}")
        print(f"workrec: error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    # CLI weights win over the snapshot's FUSION section
    overrides = {}
    if args.content_weight is not None:
        overrides['content_weight'] = args.content_weight
    if args.collab_weight is not None:
        overrides['collab_weight'] = args.collab_weight
    if overrides:
        request = replace(request, **overrides)

    logger.info(
        f"Run {run_id} started | " + format_params({
            'count': request.num_recommendations,
            'random_factor': request.random_factor,
            'random_pool': config.random_pool,
            'seed': args.seed if args.seed is not None else config.seed,
        })
    )

    result = RecommendationPipeline(config=config).recommend(request, seed=args.seed)

    logger.info(
        f"Run {run_id} finished | " + format_metrics({
            'latency_ms': result.latency_ms,
            'num_output': result.num_output,
            'num_duplicates': result.num_duplicates,
        })
    )

    if args.output is not None:
        with open(args.output, 'w', encoding='utf-8', newline='') as f:
            write_output(result.recommendations, f, fmt=args.format)
    else:
        write_output(result.recommendations, sys.stdout, fmt=args.format)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
