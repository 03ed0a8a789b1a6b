#!/usr/bin/env python3
"""Main entry point for running the feedback-directed sequence fuzzer.

This script runs a search campaign against the built-in control-pad target:
sequences of button presses are generated, executed, reduced by state and
coverage feedback, and extended one action per generation.

Usage:
    python -m seq_fuzzer.run_fuzzer [options]

Example:
    # Run with default settings until the search space is exhausted
    python -m seq_fuzzer.run_fuzzer --max-generations 10

    # Keep only the five best seeds each generation, reproducibly
    python -m seq_fuzzer.run_fuzzer --max-survivors 5 --seed 42 --stats-file stats.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from seq_fuzzer.campaign.campaign_config import CampaignConfig
from seq_fuzzer.campaign.campaign_runner import CampaignRunner
from seq_fuzzer.fuzzing.corpus_reducer import SelectionPolicy
from seq_fuzzer.input_generator.sequence_input_generator import (
    SequenceInputGenerator,
    SequenceInputGeneratorConfig,
)
from seq_fuzzer.sut.control_pad_machine import (
    DEFAULT_SECRET,
    Button,
    ControlPadMachine,
    control_pad_alphabet,
)


def parse_secret(value: str) -> tuple[Button, ...]:
    """Parse a comma-separated button combination such as ``RIGHT,DOWN``."""
    try:
        return tuple(Button(part.strip().upper()) for part in value.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid secret '{value}': use buttons from {[b.value for b in Button]}"
        ) from None


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Feedback-directed action sequence fuzzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Generator options
    parser.add_argument(
        "--initial-length",
        type=int,
        default=2,
        help="Length of the sequences in the first generation (default: 2)"
    )
    parser.add_argument(
        "--worklist-cap",
        type=int,
        default=300,
        help="Maximum sequences per generation, larger batches are sampled (default: 300)"
    )
    parser.add_argument(
        "--max-survivors",
        type=int,
        default=5,
        help="Maximum seeds kept after reduction, 0 disables the cap (default: 5)"
    )
    parser.add_argument(
        "--selection-policy",
        type=str,
        default=SelectionPolicy.FIRST.value,
        choices=[p.value for p in SelectionPolicy],
        help="Which seeds the survivor cap keeps (default: first)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible sampling (default: unseeded)"
    )
    parser.add_argument(
        "--no-noop",
        action="store_true",
        help="Exclude the 'no button pressed' action from the alphabet"
    )

    # Target options
    parser.add_argument(
        "--grid-width",
        type=int,
        default=4,
        help="Columns of the control-pad target grid (default: 4)"
    )
    parser.add_argument(
        "--grid-height",
        type=int,
        default=4,
        help="Rows of the control-pad target grid (default: 4)"
    )
    parser.add_argument(
        "--secret",
        type=parse_secret,
        default=DEFAULT_SECRET,
        help="Comma-separated unlock combination (default: RIGHT,RIGHT,DOWN,DOWN,LEFT)"
    )

    # Campaign options
    parser.add_argument(
        "--max-generations",
        type=int,
        default=None,
        help="Stop after N completed generations"
    )
    parser.add_argument(
        "--max-executions",
        type=int,
        default=None,
        help="Stop after N executions"
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop after N seconds of wall-clock time"
    )
    parser.add_argument(
        "--stats-file",
        type=str,
        default=None,
        help="Path to write campaign statistics as JSON"
    )
    parser.add_argument(
        "--log-interval",
        type=int,
        default=100,
        help="How often to log progress (every N executions, default: 100)"
    )

    # Logging options
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for detailed log files (default: logs)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all logs except generation summaries"
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False, quiet: bool = False, log_dir: str = "logs") -> None:
    """Configure logging for the fuzzer.

    Args:
        verbose: Whether to enable verbose debug logging
        quiet: Whether to suppress all logs except generation summaries
        log_dir: Directory for the rotating debug log file
    """
    logger.remove()

    if quiet:
        # In quiet mode, only show messages with [GEN] tag
        def generation_filter(record):
            return "[GEN]" in record["message"]

        logger.add(
            sys.stderr,
            format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>",
            level="INFO",
            filter=generation_filter,
            colorize=True
        )
    else:
        level = "DEBUG" if verbose else "INFO"
        logger.add(
            sys.stderr,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
            level=level,
            colorize=True
        )

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path / "seq_fuzzer_{time}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        level="DEBUG",
        rotation="100 MB",
        retention="7 days"
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the fuzzer.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_dir=args.log_dir)

    logger.info("=" * 60)
    logger.info("FEEDBACK-DIRECTED SEQUENCE FUZZER")
    logger.info("=" * 60)

    try:
        target = ControlPadMachine(
            width=args.grid_width,
            height=args.grid_height,
            secret=args.secret,
        )
        alphabet = control_pad_alphabet(include_noop=not args.no_noop)
        generator = SequenceInputGenerator(
            alphabet,
            SequenceInputGeneratorConfig(
                initial_length=args.initial_length,
                worklist_cap=args.worklist_cap,
                max_survivors=args.max_survivors or None,
                selection_policy=args.selection_policy,
                seed=args.seed,
            ),
        )
        campaign_config = CampaignConfig(
            max_generations=args.max_generations,
            max_executions=args.max_executions,
            duration_seconds=args.duration,
            stats_file=Path(args.stats_file) if args.stats_file else None,
            log_interval=args.log_interval,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.info("-" * 60)
    logger.info("CONFIGURATION")
    logger.info(f"  Target: {target.name}")
    logger.info(f"  Alphabet: {alphabet.size} actions (no-op: {'no' if args.no_noop else 'yes'})")
    logger.info(f"  Initial length: {args.initial_length}")
    logger.info(f"  Worklist cap: {args.worklist_cap}")
    logger.info(f"  Max survivors: {args.max_survivors or 'unlimited'}")
    logger.info(f"  Selection policy: {args.selection_policy}")
    logger.info(f"  Seed: {args.seed}")
    logger.info(f"  Max generations: {args.max_generations or 'unlimited'}")
    logger.info(f"  Max executions: {args.max_executions or 'unlimited'}")
    logger.info(f"  Duration: {f'{args.duration}s' if args.duration else 'unlimited'}")
    logger.info("-" * 60)

    try:
        result = CampaignRunner(generator, target, campaign_config).run()
    except KeyboardInterrupt:
        logger.info("\nFuzzing interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Fuzzing failed with error: {e}")
        logger.exception("Full traceback:")
        return 1

    logger.info("=" * 60)
    logger.info("FUZZING COMPLETE")
    logger.info(f"Stop reason: {result.stop_reason}")
    logger.info(f"Executions: {result.executions}")
    logger.info(f"Generations completed: {result.generations_completed}")
    logger.info(f"Coverage: {result.unique_edges}/{result.total_edges} edges")
    logger.info(f"Unique states: {result.unique_states}")
    logger.info(f"Elapsed time: {result.duration_seconds:.1f}s")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
