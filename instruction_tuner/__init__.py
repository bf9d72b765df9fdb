"""
Instruction Tuner - iterative instruction refinement with a generator/evaluator/advisor loop.

Each iteration runs three roles over a shared structured-output invoker:
1. Producer: generates candidate output from the current instruction
2. Evaluator: scores the output 0-10, against an optional expected result
3. Advisor: records the run and proposes the next instruction from the run history

Public API:
- StructuredInvoker: Abstract base class for implementing custom invokers
- AgentsInvoker: Built-in invoker backed by the OpenAI Agents SDK
- FunctionInvoker: Invoker wrapping a plain (sync or async) function
- Producer, Evaluator, Advisor: The three roles
- RunHistory: Append-only session history owned by the Advisor
- TunerConfig: Configuration for a tuning session
- InstructionTuner: The tuning loop
- TuningRunner: Main runner interface for tuning with reports
"""

from instruction_tuner.config import TunerConfig
from instruction_tuner.errors import ConfigError, InstructionTunerError, InvocationError
from instruction_tuner.history import RunHistory
from instruction_tuner.invokers import AgentsInvoker, FunctionInvoker, StructuredInvoker
from instruction_tuner.roles import Advisor, Evaluator, Producer
from instruction_tuner.runner import TuningRunner
from instruction_tuner.tuner import InstructionTuner
from instruction_tuner.types import (
    EvaluationContext,
    GenerationOverrides,
    GenerationSettings,
    InvokeResult,
    RunRecord,
    TuningResult,
    TuningTask,
)

__all__ = [
    "StructuredInvoker",
    "AgentsInvoker",
    "FunctionInvoker",
    "Producer",
    "Evaluator",
    "Advisor",
    "RunHistory",
    "TunerConfig",
    "InstructionTuner",
    "TuningRunner",
    "EvaluationContext",
    "GenerationOverrides",
    "GenerationSettings",
    "InvokeResult",
    "RunRecord",
    "TuningResult",
    "TuningTask",
    "InstructionTunerError",
    "InvocationError",
    "ConfigError",
]
