"""Test helpers for instruction tuner tests."""

from instruction_tuner.tests.helpers.fake_agents import (
    FakeRunnerResult,
    create_fake_advisor_response,
    create_fake_evaluator_response,
    create_fake_producer_response,
    fake_runner_run,
    setup_fake_agents,
)
from instruction_tuner.tests.helpers.fake_invoker import (
    DEFAULT_RESPONSES,
    InvokeCall,
    ScriptedInvoker,
)

__all__ = [
    "ScriptedInvoker",
    "InvokeCall",
    "DEFAULT_RESPONSES",
    "FakeRunnerResult",
    "fake_runner_run",
    "setup_fake_agents",
    "create_fake_producer_response",
    "create_fake_evaluator_response",
    "create_fake_advisor_response",
]
