"""Base class for structured role invokers."""

from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel

from instruction_tuner.types import GenerationSettings, InvokeResult

OutputT = TypeVar("OutputT", bound=BaseModel)


class StructuredInvoker(ABC):
    """Boundary used by every role to obtain validated structured output.

    Implementations own model invocation, provider selection, timeouts and
    output validation. They must never raise for a failed call: connectivity
    problems, provider errors, timeouts and outputs that do not match
    ``output_type`` all come back as ``InvokeResult.fail``.
    """

    @abstractmethod
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
        """Invoke a model for one role call.

        Args:
            role: Role identity (used as the agent name)
            behavioral_prompt: Fixed per-role instructions
            call_input: Per-call request built by the role
            settings: Generation settings for this call
            output_type: Pydantic model the output must validate against
            model: Model name
            provider_hint: Provider to route the call to (e.g. "openai")

        Returns:
            InvokeResult holding the validated output or a failure reason
        """
        ...
