"""Runner for instruction tuning.

This module provides a reusable runner that accepts a configuration and an
optional invoker, runs the tuning loop and writes the reports.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from instruction_tuner.config import TunerConfig
from instruction_tuner.invokers import StructuredInvoker
from instruction_tuner.reports import (
    display_results,
    save_best_instruction,
    save_history_json,
    save_tuning_report,
)
from instruction_tuner.tuner import InstructionTuner
from instruction_tuner.types import TuningResult, TuningTask

logger = logging.getLogger(__name__)


class TuningRunner:
    """Runner for executing instruction tuning with reporting."""

    def __init__(
        self,
        config: TunerConfig,
        invoker: StructuredInvoker | None = None,
        verbose: bool = True,
    ):
        """Initialize the tuning runner.

        Args:
            config: Tuner configuration (models, settings, iterations, output dir)
            invoker: Invoker shared by the three roles (AgentsInvoker if None)
            verbose: Whether to print progress messages
        """
        self.config = config
        self.verbose = verbose
        self.results_root = Path(config.output_dir)
        self.last_run_dir: Path | None = None
        self.tuner = InstructionTuner.from_config(
            config,
            invoker=invoker,
            progress_callback=print if verbose else None,
        )

    async def run(self, task: TuningTask, iterations: int | None = None) -> TuningResult:
        """Run the tuning loop with reporting.

        Args:
            task: Task to tune
            iterations: Number of iterations (config value if None)

        Returns:
            TuningResult with the best instruction and the run history
        """
        if iterations is None:
            iterations = self.config.iterations
        if self.verbose:
            self._print_header(task, iterations)

        result = await self.tuner.tune(task, iterations)

        run_output_dir = self._prepare_run_directory()
        self.last_run_dir = run_output_dir

        if self.verbose:
            display_results(result)

        await asyncio.gather(
            save_best_instruction(result, output_dir=str(run_output_dir)),
            save_tuning_report(result, task, output_dir=str(run_output_dir)),
            save_history_json(result, output_dir=str(run_output_dir)),
        )
        logger.info(f"Reports written to {run_output_dir}")

        return result

    def _print_header(self, task: TuningTask, iterations: int) -> None:
        """Print tuning header."""
        print("=" * 70)
        print("INSTRUCTION TUNING")
        print("=" * 70)
        print()
        print(f"Task: {task.name}")
        print(f"Reference: {'provided' if task.reference else 'none'}")
        print()
        print("Configuration:")
        print(f"  Iterations: {iterations}")
        print("  Models:")
        print(f"    Producer: {self.config.producer.model}")
        print(f"    Evaluator: {self.config.evaluator.model}")
        print(f"    Advisor: {self.config.advisor.model}")
        print()
        print("Starting tuning...")
        print()

    def _prepare_run_directory(self) -> Path:
        """Create and return run-specific output directory."""
        folder_name = datetime.now().strftime("run-%Y%m%d-%H%M%S")
        run_path = self.results_root / folder_name
        run_path.mkdir(parents=True, exist_ok=True)
        return run_path
