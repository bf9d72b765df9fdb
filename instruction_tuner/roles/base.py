"""Shared adapter between a role and the structured invoker."""

import logging
from typing import Generic

from instruction_tuner.config import DEFAULT_MODEL, DEFAULT_PROVIDER
from instruction_tuner.invokers.base import OutputT, StructuredInvoker
from instruction_tuner.types import GenerationSettings, InvokeResult

logger = logging.getLogger(__name__)


class StructuredRole(Generic[OutputT]):
    """A role is a fixed behavioral prompt, default settings and an output shape.

    Subclasses only shape the per-call input and unpack the validated output;
    the call itself always goes through ``_invoke``.
    """

    name: str
    behavioral_prompt: str
    output_type: type[OutputT]

    def __init__(
        self,
        invoker: StructuredInvoker,
        default_settings: GenerationSettings,
        model: str = DEFAULT_MODEL,
        provider_hint: str = DEFAULT_PROVIDER,
    ):
        """
        Initialize the role.

        Args:
            invoker: Invoker used for every call this role makes
            default_settings: Role default generation settings
            model: Model name passed to the invoker
            provider_hint: Provider passed to the invoker
        """
        self.invoker = invoker
        self.default_settings = default_settings
        self.model = model
        self.provider_hint = provider_hint

    async def _invoke(self, call_input: str, settings: GenerationSettings) -> InvokeResult[OutputT]:
        """Issue exactly one invocation and return its result unchanged."""
        logger.debug(
            f"{self.name}: invoking {self.model} "
            f"(temperature={settings.temperature}, max_tokens={settings.max_tokens})"
        )
        result = await self.invoker.invoke(
            role=self.name,
            behavioral_prompt=self.behavioral_prompt,
            call_input=call_input,
            settings=settings,
            output_type=self.output_type,
            model=self.model,
            provider_hint=self.provider_hint,
        )
        if not result.success:
            logger.warning(f"{self.name}: call failed: {result.error}")
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model}, provider={self.provider_hint})"
