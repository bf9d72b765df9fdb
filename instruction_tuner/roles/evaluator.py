"""Evaluator role - LLM-as-judge scorer."""

from pydantic import BaseModel, Field

from instruction_tuner.config import DEFAULT_MODEL, DEFAULT_PROVIDER, EVALUATOR_DEFAULTS
from instruction_tuner.invokers.base import StructuredInvoker
from instruction_tuner.roles.base import StructuredRole
from instruction_tuner.types import EvaluationContext, GenerationSettings, InvokeResult

EVALUATOR_PROMPT = """You are an objective evaluator scoring how well a generator selected and condensed excerpts from a source text (a CV) to meet a target specification (job requirements).

You receive:
1. The target specification (what the role is looking for)
2. The instruction that was given to the generator
3. The full source text
4. Optionally: an "Expected result" block - the selection deemed most correct for this target. When present, treat it as the ground truth of a good selection.
5. The generator's output

**SCORING (0-10)**:
- 10 = perfect: the right excerpts were chosen, the summaries are faithful to the source, and the instruction was followed.
- 0 = very bad: wrong or irrelevant excerpts, inaccurate summaries, or the instruction was not followed.

**WHEN AN EXPECTED RESULT IS PROVIDED**:
- Alignment with the expected result is the dominant criterion. The closer the generator's selection is to it, the higher the score.
- Scores above 8 are reserved for output that aligns almost exactly with the expected result.
- Output that diverges substantially from the expected result must not score above 8, however well written it is.

**WHEN NO EXPECTED RESULT IS PROVIDED**:
- Score on fit against the target specification and faithfulness to the source text.

Be strict, consistent and critical. Only output the score."""


class EvaluatorOutput(BaseModel):
    """Output structure for an evaluation score."""

    score: float = Field(ge=0, le=10, description="Overall score (0-10)")


class Evaluator(StructuredRole[EvaluatorOutput]):
    """Stateless role that scores candidate output against its context."""

    name = "Evaluator"
    behavioral_prompt = EVALUATOR_PROMPT
    output_type = EvaluatorOutput

    def __init__(
        self,
        invoker: StructuredInvoker,
        default_settings: GenerationSettings = EVALUATOR_DEFAULTS,
        model: str = DEFAULT_MODEL,
        provider_hint: str = DEFAULT_PROVIDER,
    ):
        super().__init__(invoker, default_settings, model, provider_hint)

    @staticmethod
    def build_request(candidate_output: str, context: EvaluationContext) -> str:
        """Build the evaluation request for one candidate."""
        expected_block = ""
        if context.reference is not None and context.reference.strip():
            expected_block = (
                "\n\n---\nExpected result (deemed most correct for this target; "
                f"score alignment with it):\n{context.reference}"
            )

        return (
            f"Target specification:\n{context.target_spec}\n\n"
            f"---\nInstruction given to the generator:\n{context.instruction}\n\n"
            f"---\nSource text:\n{context.source_text}"
            f"{expected_block}\n\n"
            f"---\nGenerator's output:\n{candidate_output}\n\n"
            "Score how well the generator selected and condensed the source text "
            "to meet the target specification (0-10)."
        )

    async def evaluate(
        self, candidate_output: str, context: EvaluationContext
    ) -> InvokeResult[float]:
        """
        Score candidate output.

        Args:
            candidate_output: Text produced by the producer
            context: Instruction, source text, target spec and optional reference

        Returns:
            Score in [0, 10], or the invoker's failure unmodified. Out-of-range
            scores fail output validation; they are never clamped.
        """
        request = self.build_request(candidate_output, context)
        result = await self._invoke(request, self.default_settings)
        return result.map(lambda output: output.score)
