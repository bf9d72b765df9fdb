"""Function-based invoker for in-process use."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ValidationError

from instruction_tuner.invokers.base import OutputT, StructuredInvoker
from instruction_tuner.types import GenerationSettings, InvokeResult

logger = logging.getLogger(__name__)

RoleFunction = Callable[
    [str, str, str, GenerationSettings],
    "dict[str, Any] | BaseModel | Awaitable[dict[str, Any] | BaseModel]",
]


class FunctionInvoker(StructuredInvoker):
    """Invoker that delegates to a Python function instead of a hosted model."""

    def __init__(self, func: RoleFunction):
        """
        Initialize with a callable function.

        Args:
            func: Sync or async function taking
                (role, behavioral_prompt, call_input, settings) and returning
                the raw output as a dict or pydantic model
        """
        self.func = func
        logger.info("FunctionInvoker initialized")

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
        try:
            raw = self.func(role, behavioral_prompt, call_input, settings)
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception as e:
            logger.error(f"{role} function call failed: {e}")
            return InvokeResult.fail(f"Invocation failed: {e}")

        if isinstance(raw, BaseModel):
            raw = raw.model_dump()

        try:
            output = output_type.model_validate(raw)
        except ValidationError as e:
            logger.error(f"{role} returned output not matching {output_type.__name__}: {e}")
            return InvokeResult.fail(f"Output validation failed: {e}")

        return InvokeResult.ok(output)
