"""Pytest fixtures for instruction tuner tests."""

import pytest
from agents import Runner

from instruction_tuner.config import TunerConfig
from instruction_tuner.history import RunHistory
from instruction_tuner.roles import Advisor, Evaluator, Producer
from instruction_tuner.tests.helpers import ScriptedInvoker
from instruction_tuner.tests.helpers.fake_agents import fake_runner_run
from instruction_tuner.types import EvaluationContext, TuningTask

SOURCE_TEXT = """Jane Doe - Software Engineer

2021-present, Acme Cloud - Senior Software Engineer
Led migration of 40 services from VMs to Kubernetes using Terraform and Helm.
Built a GitHub Actions based CI/CD template adopted by 30 teams.

2016-2018, DataNest - Junior Developer
Maintained Django admin pages and nightly ETL jobs."""

TARGET_SPEC = """Senior Platform Engineer
- Kubernetes, Terraform, GitHub Actions
- Own CI/CD pipelines and release tooling
- Observability and reliability at scale"""

REFERENCE = "1. Acme Cloud: Kubernetes migration.\n2. Acme Cloud: CI/CD template."


@pytest.fixture
def scripted_invoker():
    """
    Provide a ScriptedInvoker for fast, deterministic role responses.

    This replaces the real invoker (the Agents SDK) with a fake that
    answers instantly without API calls and records every call.
    """
    return ScriptedInvoker()


@pytest.fixture
def mock_agents(monkeypatch):
    """
    Mock the agents.Runner.run method to return fake responses.

    This prevents real LLM API calls while allowing AgentsInvoker to run.
    """
    monkeypatch.setattr(Runner, "run", fake_runner_run)


@pytest.fixture
def sample_task():
    """Provide a CV experiences task with an expected result."""
    return TuningTask(
        name="cv_experiences",
        initial_instruction="Pick 3 experiences matching the job.",
        source_text=SOURCE_TEXT,
        target_spec=TARGET_SPEC,
        reference=REFERENCE,
    )


@pytest.fixture
def sample_context(sample_task):
    """Provide an evaluation context for the sample task."""
    return sample_task.context_for(sample_task.initial_instruction)


@pytest.fixture
def context_without_reference(sample_task):
    return EvaluationContext(
        instruction=sample_task.initial_instruction,
        source_text=sample_task.source_text,
        target_spec=sample_task.target_spec,
    )


@pytest.fixture
def history():
    return RunHistory()


@pytest.fixture
def producer(scripted_invoker):
    return Producer(scripted_invoker)


@pytest.fixture
def evaluator(scripted_invoker):
    return Evaluator(scripted_invoker)


@pytest.fixture
def advisor(scripted_invoker, history):
    return Advisor(scripted_invoker, history=history)


@pytest.fixture
def minimal_config(tmp_path):
    """
    Provide minimal configuration for fast tests.

    Three iterations, reports under tmp_path, no progress printing.
    """
    return TunerConfig(
        iterations=3,
        output_dir=tmp_path / "results",
        verbose=False,
        openai_api_key=None,
    )
