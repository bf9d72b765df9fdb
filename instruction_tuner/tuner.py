"""Instruction tuner driving the produce/evaluate/advise loop."""

import logging
import time
from collections.abc import Callable

from instruction_tuner.config import TunerConfig
from instruction_tuner.errors import InvocationError
from instruction_tuner.history import RunHistory
from instruction_tuner.invokers import AgentsInvoker, StructuredInvoker
from instruction_tuner.roles import Advisor, Evaluator, Producer
from instruction_tuner.types import TuningIteration, TuningResult, TuningTask

logger = logging.getLogger(__name__)


class InstructionTuner:
    """Runs a fixed number of tuning iterations over one task.

    The tuner is the caller of the three roles: it decides how many
    iterations to run and aborts the session on the first failed role call.
    """

    def __init__(
        self,
        producer: Producer,
        evaluator: Evaluator,
        advisor: Advisor,
        progress_callback: Callable[[str], None] | None = None,
    ):
        """
        Initialize the tuner.

        Args:
            producer: Role generating candidate output
            evaluator: Role scoring candidate output
            advisor: Role proposing the next instruction (owns the session history)
            progress_callback: Optional callback for progress messages
        """
        self.producer = producer
        self.evaluator = evaluator
        self.advisor = advisor
        self._print_progress = progress_callback or (lambda msg: None)

    @classmethod
    def from_config(
        cls,
        config: TunerConfig,
        invoker: StructuredInvoker | None = None,
        history: RunHistory | None = None,
        progress_callback: Callable[[str], None] | None = None,
    ) -> "InstructionTuner":
        """Wire the three roles from a config, sharing one invoker."""
        invoker = invoker or AgentsInvoker(api_key=config.openai_api_key)
        return cls(
            producer=Producer(
                invoker,
                default_settings=config.producer.settings,
                model=config.producer.model,
                provider_hint=config.producer.provider,
            ),
            evaluator=Evaluator(
                invoker,
                default_settings=config.evaluator.settings,
                model=config.evaluator.model,
                provider_hint=config.evaluator.provider,
            ),
            advisor=Advisor(
                invoker,
                history=history,
                default_settings=config.advisor.settings,
                model=config.advisor.model,
                provider_hint=config.advisor.provider,
            ),
            progress_callback=progress_callback,
        )

    async def run_iteration(
        self, task: TuningTask, instruction: str, iteration: int = 1
    ) -> TuningIteration:
        """
        Run one produce/evaluate/advise cycle.

        Args:
            task: Task being tuned
            instruction: Instruction to try in this iteration
            iteration: 1-based iteration number

        Returns:
            The iteration outcome, including the advisor's suggestion

        Raises:
            InvocationError: If any role call fails
        """
        start = time.time()
        settings = self.producer.settings_for(task.producer_settings)

        generated = await self.producer.generate(task.producer_request(instruction), settings)
        candidate = generated.unwrap("producer")

        scored = await self.evaluator.evaluate(candidate, task.context_for(instruction))
        score = scored.unwrap("evaluator")

        advised = await self.advisor.suggest_next(
            instruction,
            settings,
            score,
            source_text=task.source_text,
            target_spec=task.target_spec,
        )
        suggestion = advised.unwrap("advisor")

        return TuningIteration(
            iteration=iteration,
            instruction=instruction,
            settings=settings,
            candidate_output=candidate,
            score=score,
            suggested_instruction=suggestion,
            duration_seconds=time.time() - start,
        )

    async def tune(self, task: TuningTask, iterations: int) -> TuningResult:
        """
        Run exactly ``iterations`` cycles, feeding each suggestion into the next.

        Args:
            task: Task whose instruction is tuned
            iterations: Number of cycles to run

        Returns:
            Tuning results with the best instruction and the session history
        """
        if iterations < 1:
            raise ValueError("iterations must be at least 1")

        start_time = time.time()
        self._print_progress("=== STARTING INSTRUCTION TUNING ===")
        self._print_progress(f"Task: {task.name}")

        instruction = task.initial_instruction
        results: list[TuningIteration] = []
        best: TuningIteration | None = None

        for i in range(1, iterations + 1):
            try:
                outcome = await self.run_iteration(task, instruction, iteration=i)
            except InvocationError as e:
                logger.error(f"Tuning aborted at iteration {i}: {e}")
                raise

            results.append(outcome)
            if best is None or outcome.score > best.score:
                best = outcome
                self._print_progress(f"  Iteration {i}: {outcome.score:.2f} ✓ (new best)")
            else:
                self._print_progress(f"  Iteration {i}: {outcome.score:.2f}")

            instruction = outcome.suggested_instruction

        total_time = time.time() - start_time
        self._print_progress("\n=== TUNING COMPLETE ===")
        self._print_progress(f"Best score: {best.score:.2f} (iteration {best.iteration})")

        return TuningResult(
            task_name=task.name,
            initial_instruction=task.initial_instruction,
            best_instruction=best.instruction,
            best_score=best.score,
            best_iteration=best.iteration,
            final_instruction=instruction,
            iterations=results,
            history=list(self.advisor.get_history()),
            total_time_seconds=total_time,
        )
