"""Test the evaluator role."""

import pytest

from instruction_tuner.roles import EvaluatorOutput
from instruction_tuner.roles.evaluator import EVALUATOR_PROMPT
from instruction_tuner.types import EvaluationContext, InvokeResult


@pytest.mark.asyncio
async def test_evaluate_returns_score(evaluator, scripted_invoker, sample_context):
    scripted_invoker.script("Evaluator", {"score": 7.5})

    result = await evaluator.evaluate("candidate", sample_context)

    assert result.success
    assert result.response == 7.5

    call = scripted_invoker.calls[0]
    assert call.role == "Evaluator"
    assert call.output_type is EvaluatorOutput
    assert call.behavioral_prompt == EVALUATOR_PROMPT


@pytest.mark.asyncio
async def test_evaluate_uses_fixed_low_variance_settings(evaluator, scripted_invoker, sample_context):
    await evaluator.evaluate("candidate", sample_context)

    settings = scripted_invoker.calls[0].settings
    assert settings.temperature == 0.1
    assert settings.max_tokens == 64
    assert settings.timeout_seconds == 30.0


@pytest.mark.asyncio
async def test_request_embeds_sections_in_order(evaluator, scripted_invoker, sample_context):
    await evaluator.evaluate("CANDIDATE OUTPUT", sample_context)

    request = scripted_invoker.calls[0].call_input
    positions = [
        request.index(sample_context.target_spec),
        request.index(sample_context.instruction),
        request.index(sample_context.source_text),
        request.index("---\nExpected result"),
        request.index(sample_context.reference),
        request.index("CANDIDATE OUTPUT"),
    ]
    assert positions == sorted(positions)


@pytest.mark.asyncio
async def test_expected_block_omitted_without_reference(
    evaluator, scripted_invoker, context_without_reference
):
    await evaluator.evaluate("candidate", context_without_reference)

    assert "Expected result" not in scripted_invoker.calls[0].call_input


@pytest.mark.asyncio
async def test_expected_block_omitted_for_blank_reference(evaluator, scripted_invoker, sample_task):
    context = EvaluationContext(
        instruction="Pick 3",
        source_text=sample_task.source_text,
        target_spec=sample_task.target_spec,
        reference="   \n ",
    )

    await evaluator.evaluate("candidate", context)

    assert "Expected result" not in scripted_invoker.calls[0].call_input


@pytest.mark.asyncio
@pytest.mark.parametrize("score", [10.5, -1])
async def test_out_of_range_score_is_rejected_not_clamped(
    evaluator, scripted_invoker, sample_context, score
):
    scripted_invoker.script("Evaluator", {"score": score})

    result = await evaluator.evaluate("candidate", sample_context)

    assert not result.success
    assert result.response is None
    assert result.error.startswith("Output validation failed")


@pytest.mark.asyncio
async def test_boundary_scores_are_accepted(evaluator, scripted_invoker, sample_context):
    scripted_invoker.script("Evaluator", {"score": 0}, {"score": 10})

    low = await evaluator.evaluate("candidate", sample_context)
    high = await evaluator.evaluate("candidate", sample_context)

    assert (low.response, high.response) == (0, 10)


@pytest.mark.asyncio
async def test_failure_is_forwarded_unmodified(evaluator, scripted_invoker, sample_context):
    scripted_invoker.script("Evaluator", InvokeResult.fail("Invocation failed: timed out"))

    result = await evaluator.evaluate("candidate", sample_context)

    assert result.error == "Invocation failed: timed out"


def test_rubric_reserves_high_scores_for_reference_alignment():
    assert "0-10" in EVALUATOR_PROMPT
    assert "Scores above 8 are reserved" in EVALUATOR_PROMPT
    assert "must not score above 8" in EVALUATOR_PROMPT
    assert "faithfulness to the source text" in EVALUATOR_PROMPT
