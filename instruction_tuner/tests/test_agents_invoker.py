"""Test the Agents SDK invoker against a patched Runner.run."""

import asyncio

import pytest
from agents import AgentsException, ModelBehaviorError, OpenAIChatCompletionsModel, Runner

from instruction_tuner.config import EVALUATOR_DEFAULTS, PRODUCER_DEFAULTS
from instruction_tuner.invokers import AgentsInvoker
from instruction_tuner.roles import Evaluator, EvaluatorOutput, Producer, ProducerOutput
from instruction_tuner.tests.helpers import FakeRunnerResult, setup_fake_agents
from instruction_tuner.types import GenerationSettings


async def invoke_evaluator(invoker: AgentsInvoker, settings: GenerationSettings = EVALUATOR_DEFAULTS):
    return await invoker.invoke(
        role="Evaluator",
        behavioral_prompt="Score it.",
        call_input="candidate",
        settings=settings,
        output_type=EvaluatorOutput,
        model="gpt-4o-mini",
        provider_hint="openai",
    )


def patch_runner(monkeypatch, final_output=None, error: Exception | None = None, delay: float = 0.0):
    async def fake_run(agent, call_input):
        if delay:
            await asyncio.sleep(delay)
        if error is not None:
            raise error
        return FakeRunnerResult(final_output)

    monkeypatch.setattr(Runner, "run", fake_run)


@pytest.mark.asyncio
async def test_producer_through_agents(mock_agents):
    producer = Producer(AgentsInvoker())

    result = await producer.generate("Summarize the CV.\n\nJob requirements: ...")

    assert result.success
    assert result.response == "Selected experiences for: Summarize the CV."


@pytest.mark.asyncio
async def test_evaluator_through_agents(mock_agents, sample_context):
    evaluator = Evaluator(AgentsInvoker())

    result = await evaluator.evaluate("candidate", sample_context)

    assert result.success
    assert 0 <= result.response <= 10


@pytest.mark.asyncio
async def test_agent_is_built_from_role_call(monkeypatch):
    runner_mock = setup_fake_agents(monkeypatch)
    invoker = AgentsInvoker()

    await invoker.invoke(
        role="Producer",
        behavioral_prompt="  You are a generator.  ",
        call_input="Write it.",
        settings=PRODUCER_DEFAULTS.merged({"temperature": 0.4}),
        output_type=ProducerOutput,
        model="gpt-4o-mini",
        provider_hint="openai",
    )

    agent, call_input = runner_mock.call_args.args
    assert call_input == "Write it."
    assert agent.name == "Producer"
    assert agent.instructions == "You are a generator."
    assert agent.model == "gpt-4o-mini"
    assert agent.output_type is ProducerOutput
    assert agent.model_settings.temperature == 0.4
    assert agent.model_settings.max_tokens == 1024


def test_api_key_routes_openai_calls_through_dedicated_client():
    invoker = AgentsInvoker(api_key="sk-test")

    agent = invoker.build_agent(
        "Evaluator", "Score it.", EVALUATOR_DEFAULTS, EvaluatorOutput, "gpt-4o-mini", "openai"
    )
    other = invoker.build_agent(
        "Evaluator", "Score it.", EVALUATOR_DEFAULTS, EvaluatorOutput, "some-model", "other"
    )

    assert isinstance(agent.model, OpenAIChatCompletionsModel)
    assert other.model == "some-model"


@pytest.mark.asyncio
@pytest.mark.parametrize("final_output", [{"score": 12}, '{"score": -3}', EvaluatorOutput.model_construct(score=11.0)])
async def test_out_of_range_score_becomes_failure(monkeypatch, final_output):
    patch_runner(monkeypatch, final_output=final_output)

    result = await invoke_evaluator(AgentsInvoker())

    assert not result.success
    assert result.error.startswith("Output validation failed")


@pytest.mark.asyncio
async def test_json_string_output_is_validated(monkeypatch):
    patch_runner(monkeypatch, final_output='{"score": 6.5}')

    result = await invoke_evaluator(AgentsInvoker())

    assert result.success
    assert result.response == EvaluatorOutput(score=6.5)


@pytest.mark.asyncio
async def test_timeout_becomes_failure(monkeypatch):
    patch_runner(monkeypatch, final_output={"score": 5}, delay=1.0)
    settings = EVALUATOR_DEFAULTS.merged({"timeout_seconds": 0.01})

    result = await invoke_evaluator(AgentsInvoker(), settings)

    assert not result.success
    assert result.error.startswith("Invocation failed")
    assert "timed out" in result.error


@pytest.mark.asyncio
async def test_no_timeout_waits_for_result(monkeypatch):
    patch_runner(monkeypatch, final_output={"score": 5}, delay=0.01)
    settings = GenerationSettings(temperature=0.1, max_tokens=64, timeout_seconds=None)

    result = await invoke_evaluator(AgentsInvoker(), settings)

    assert result.success


@pytest.mark.asyncio
async def test_model_behavior_error_becomes_validation_failure(monkeypatch):
    patch_runner(monkeypatch, error=ModelBehaviorError("Invalid JSON when parsing output"))

    result = await invoke_evaluator(AgentsInvoker())

    assert not result.success
    assert result.error == "Output validation failed: Invalid JSON when parsing output"


@pytest.mark.asyncio
async def test_agents_exception_becomes_invocation_failure(monkeypatch):
    patch_runner(monkeypatch, error=AgentsException("provider unavailable"))

    result = await invoke_evaluator(AgentsInvoker())

    assert not result.success
    assert result.error == "Invocation failed: provider unavailable"
