"""Invokers that turn a role call into validated structured output."""

from instruction_tuner.invokers.agents_invoker import AgentsInvoker
from instruction_tuner.invokers.base import StructuredInvoker
from instruction_tuner.invokers.function_invoker import FunctionInvoker

__all__ = ["StructuredInvoker", "AgentsInvoker", "FunctionInvoker"]
