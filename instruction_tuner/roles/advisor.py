"""Advisor role - proposes the next instruction from score feedback and history."""

import logging

from pydantic import BaseModel, Field

from instruction_tuner.config import ADVISOR_DEFAULTS, DEFAULT_MODEL, DEFAULT_PROVIDER
from instruction_tuner.formatting import (
    INSTRUCTION_PREVIEW_LIMIT,
    SUGGESTION_PREVIEW_LIMIT,
    excerpt,
    preview,
)
from instruction_tuner.history import RunHistory
from instruction_tuner.invokers.base import StructuredInvoker
from instruction_tuner.roles.base import StructuredRole
from instruction_tuner.types import GenerationSettings, InvokeResult, RunRecord

logger = logging.getLogger(__name__)

NO_HISTORY = "No previous runs yet."

ADVISOR_PROMPT = """You are a configurator for a generator/evaluator loop. The generator picks the experiences from a CV that best meet the job requirements and summarizes them; the evaluator scores how well the choice and summaries match the job (0-10; 10 = perfect, 0 = very bad).

- The generator receives the job requirements, the CV, and an instruction. Its temperature is fixed; only the instruction changes.
- Your job: given the instruction that was used, the evaluator's score, the job requirements and CV context, suggest a NEW instruction for the generator's NEXT run so that the next score is likely to be higher.

**CONSIDER**:
- Rephrasing the instruction to stress the job requirements (e.g. platform engineering, DevOps, observability, CI/CD, scale).
- Asking for different formatting or emphasis (e.g. "highlight technologies from the job description", "focus on developer experience and reliability").
- The history of past runs: if a phrasing led to a higher score, steer toward it; if the evaluator penalized missing criteria, name those criteria explicitly in the next instruction.

**OUTPUT**: only the new instruction text, ready to be used as the generator instruction. Keep it concise (one or two sentences). Do not include the job requirements or the CV."""


class AdvisorOutput(BaseModel):
    """Output structure for a suggested instruction."""

    suggested_instruction: str = Field(description="The next instruction for the generator")


def render_history(records: tuple[RunRecord, ...]) -> str:
    """Render one line per past run, oldest first."""
    if not records:
        return NO_HISTORY

    lines = []
    for i, record in enumerate(records, 1):
        line = (
            f'Run {i}: instruction="{preview(record.instruction, INSTRUCTION_PREVIEW_LIMIT)}", '
            f"score={record.score}"
        )
        if record.suggested_next is not None:
            line += (
                " (suggested next instruction: "
                f'"{preview(record.suggested_next, SUGGESTION_PREVIEW_LIMIT)}")'
            )
        lines.append(line)
    return "\n".join(lines)


class Advisor(StructuredRole[AdvisorOutput]):
    """Stateful role that owns the run history of one tuning session."""

    name = "Advisor"
    behavioral_prompt = ADVISOR_PROMPT
    output_type = AdvisorOutput

    def __init__(
        self,
        invoker: StructuredInvoker,
        history: RunHistory | None = None,
        default_settings: GenerationSettings = ADVISOR_DEFAULTS,
        model: str = DEFAULT_MODEL,
        provider_hint: str = DEFAULT_PROVIDER,
    ):
        """
        Initialize the advisor.

        Args:
            invoker: Invoker used for suggestion calls
            history: Session to record runs into (a fresh one if None)
            default_settings: Settings for suggestion calls
            model: Model name passed to the invoker
            provider_hint: Provider passed to the invoker
        """
        super().__init__(invoker, default_settings, model, provider_hint)
        self.history = history if history is not None else RunHistory()

    def build_request(
        self,
        instruction: str,
        score: float,
        source_text: str | None = None,
        target_spec: str | None = None,
        past_runs: tuple[RunRecord, ...] | None = None,
    ) -> str:
        """Build the advisor request for the current run.

        ``past_runs`` defaults to the whole history; ``suggest_next`` passes
        only the records that precede the run being advised on.
        """
        if past_runs is None:
            past_runs = self.history.snapshot()
        history_block = render_history(past_runs)

        target_block = ""
        if target_spec is not None:
            target_block = f"\n\nJob requirements (excerpt):\n{excerpt(target_spec)}"
        source_block = ""
        if source_text is not None:
            source_block = f"\n\nSource CV context (excerpt):\n{excerpt(source_text)}"

        return (
            f"History of runs (most recent last):\n{history_block}\n\n"
            f'Current run we just got the score for: instruction="{instruction}", '
            f"score={score}.{target_block}{source_block}\n\n"
            "Suggest the next generator instruction (instruction only, no CV or job text) "
            "to maximise the score. Reply with only the new instruction text."
        )

    async def suggest_next(
        self,
        instruction: str,
        settings_used: GenerationSettings,
        score: float,
        source_text: str | None = None,
        target_spec: str | None = None,
    ) -> InvokeResult[str]:
        """
        Record the run and suggest the next instruction.

        The run is appended to history before the call is issued, so history
        reflects attempted runs whether or not the call succeeds.

        Args:
            instruction: Instruction that produced the scored output
            settings_used: Producer settings used for that run
            score: Evaluator score for the run
            source_text: Optional source text for context
            target_spec: Optional target specification for context

        Returns:
            The trimmed suggestion; the original instruction when the
            suggestion is blank; or the invoker's failure unmodified
        """
        index = self.history.append(
            RunRecord(instruction=instruction, settings=settings_used.model_copy(), score=score)
        )
        request = self.build_request(
            instruction,
            score,
            source_text,
            target_spec,
            past_runs=self.history.snapshot()[:index],
        )

        result = await self._invoke(request, self.default_settings)
        if not result.success:
            return InvokeResult.fail(result.error)

        suggestion = result.response.suggested_instruction.strip()
        if not suggestion:
            logger.info("Advisor returned an empty suggestion; keeping the current instruction")
            return InvokeResult.ok(instruction)

        self.history.record_suggestion(index, suggestion)
        return InvokeResult.ok(suggestion)

    def get_history(self) -> tuple[RunRecord, ...]:
        """Return a read-only snapshot of the run history."""
        return self.history.snapshot()

    def clear_history(self) -> None:
        """Reset the run history for a fresh session."""
        self.history.clear()
