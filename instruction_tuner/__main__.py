"""Entry point for the instruction tuner.

Run a tuning session with:
    python -m instruction_tuner TASK_YAML [--config CONFIG_YAML] [--iterations N] [--output-dir DIR]

Requirements:
    - OpenAI API key set in .env file or OPENAI_API_KEY environment variable
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from instruction_tuner.config import TunerConfig, setup_logging
from instruction_tuner.errors import InstructionTunerError
from instruction_tuner.runner import TuningRunner
from instruction_tuner.types import TuningTask

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="instruction_tuner",
        description="Iteratively tune a generator instruction with an evaluator and an advisor.",
    )
    parser.add_argument("task", type=Path, help="Path to the task YAML file")
    parser.add_argument("--config", type=Path, default=None, help="Path to a tuner config YAML file")
    parser.add_argument("--iterations", type=int, default=None, help="Number of iterations to run")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for run reports")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> TunerConfig:
    """Build the tuner config from the optional YAML file and CLI flags."""
    config = TunerConfig.from_yaml(args.config) if args.config else TunerConfig()

    updates = {}
    if args.iterations is not None:
        if args.iterations < 1:
            raise InstructionTunerError("--iterations must be at least 1")
        updates["iterations"] = args.iterations
    if args.output_dir is not None:
        updates["output_dir"] = args.output_dir
    return config.model_copy(update=updates) if updates else config


async def run(args: argparse.Namespace) -> int:
    """Run one tuning session and write its reports."""
    config = load_config(args)
    task = TuningTask.from_yaml(args.task)

    runner = TuningRunner(config, verbose=config.verbose)
    await runner.run(task)

    print(f"\nAll reports saved to: {runner.last_run_dir}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    setup_logging()
    args = parse_args(argv)

    if not os.getenv("OPENAI_API_KEY"):
        print("❌ ERROR: OPENAI_API_KEY not found!")
        print()
        print("Please set your OpenAI API key in one of these ways:")
        print("  1. Add to .env file: OPENAI_API_KEY=your_key_here")
        print("  2. Set environment variable: export OPENAI_API_KEY=your_key_here")
        print()
        return 1

    try:
        return asyncio.run(run(args))
    except InstructionTunerError as e:
        logger.error(str(e))
        print(f"❌ ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
