"""Producer role - turns an instruction into candidate text."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from instruction_tuner.config import DEFAULT_MODEL, DEFAULT_PROVIDER, PRODUCER_DEFAULTS
from instruction_tuner.invokers.base import StructuredInvoker
from instruction_tuner.roles.base import StructuredRole
from instruction_tuner.types import GenerationOverrides, GenerationSettings, InvokeResult

PRODUCER_PROMPT = "You are a generator. Respond with the requested text only."

SettingsOverrides = GenerationOverrides | GenerationSettings | Mapping[str, Any] | None


class ProducerOutput(BaseModel):
    """Output structure for generated text."""

    text: str = Field(description="The generated text, nothing else")


class Producer(StructuredRole[ProducerOutput]):
    """Stateless role that generates candidate output from an instruction."""

    name = "Producer"
    behavioral_prompt = PRODUCER_PROMPT
    output_type = ProducerOutput

    def __init__(
        self,
        invoker: StructuredInvoker,
        default_settings: GenerationSettings = PRODUCER_DEFAULTS,
        model: str = DEFAULT_MODEL,
        provider_hint: str = DEFAULT_PROVIDER,
    ):
        super().__init__(invoker, default_settings, model, provider_hint)

    def settings_for(self, overrides: SettingsOverrides = None) -> GenerationSettings:
        """Merge caller overrides over the producer defaults."""
        return self.default_settings.merged(overrides)

    async def generate(
        self, instruction: str, overrides: SettingsOverrides = None
    ) -> InvokeResult[str]:
        """
        Generate text for an instruction.

        Args:
            instruction: Full request for the producer
            overrides: Optional settings; unset fields keep the defaults

        Returns:
            The generated text, or the invoker's failure unmodified
        """
        result = await self._invoke(instruction, self.settings_for(overrides))
        return result.map(lambda output: output.text)
