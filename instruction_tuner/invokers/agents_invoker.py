"""Invoker backed by the OpenAI Agents SDK."""

import asyncio
import logging

from agents import (
    Agent,
    AgentsException,
    ModelBehaviorError,
    ModelSettings,
    OpenAIChatCompletionsModel,
    Runner,
)
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from instruction_tuner.invokers.base import OutputT, StructuredInvoker
from instruction_tuner.types import GenerationSettings, InvokeResult

logger = logging.getLogger(__name__)


class AgentsInvoker(StructuredInvoker):
    """Runs each role call as a single-turn agent with a structured output type."""

    def __init__(self, api_key: str | None = None):
        """Initialize the invoker.

        Args:
            api_key: OpenAI API key. When given, calls with provider hint
                "openai" go through a dedicated AsyncOpenAI client; otherwise
                the SDK's default client (OPENAI_API_KEY) is used.
        """
        self.client = AsyncOpenAI(api_key=api_key) if api_key else None
        logger.info("AgentsInvoker initialized")

    def _resolve_model(self, model: str, provider_hint: str) -> str | OpenAIChatCompletionsModel:
        if provider_hint == "openai" and self.client is not None:
            return OpenAIChatCompletionsModel(model=model, openai_client=self.client)
        return model

    def build_agent(
        self,
        role: str,
        behavioral_prompt: str,
        settings: GenerationSettings,
        output_type: type[OutputT],
        model: str,
        provider_hint: str,
    ) -> Agent:
        """Create the agent used for one role call."""
        return Agent(
            name=role,
            model=self._resolve_model(model, provider_hint),
            instructions=behavioral_prompt.strip(),
            model_settings=ModelSettings(
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            ),
            output_type=output_type,
        )

    async def invoke(
        self,
        role: str,
        behavioral_prompt: str,
        call_input: str,
        settings: GenerationSettings,
        output_type: type[OutputT],
        model: str,
        provider_hint: str,
    ) -> InvokeResult[OutputT]:
        agent = self.build_agent(
            role, behavioral_prompt, settings, output_type, model, provider_hint
        )

        try:
            run = Runner.run(agent, call_input)
            if settings.timeout_seconds is not None:
                run_result = await asyncio.wait_for(run, timeout=settings.timeout_seconds)
            else:
                run_result = await run
        except asyncio.TimeoutError:
            error = f"Invocation failed: {role} timed out after {settings.timeout_seconds}s"
            logger.error(error)
            return InvokeResult.fail(error)
        except ModelBehaviorError as e:
            error = f"Output validation failed: {e}"
            logger.error(f"{role} returned malformed output: {e}")
            return InvokeResult.fail(error)
        except (AgentsException, OpenAIError) as e:
            error = f"Invocation failed: {e}"
            logger.error(f"{role} call failed: {e}")
            return InvokeResult.fail(error)

        # final_output is normally already an output_type instance; validate regardless
        final_output = run_result.final_output
        try:
            if isinstance(final_output, output_type):
                output = output_type.model_validate(final_output.model_dump())
            elif isinstance(final_output, str):
                output = output_type.model_validate_json(final_output)
            else:
                output = output_type.model_validate(final_output)
        except ValidationError as e:
            error = f"Output validation failed: {e}"
            logger.error(f"{role} returned output not matching {output_type.__name__}: {e}")
            return InvokeResult.fail(error)

        return InvokeResult.ok(output)
