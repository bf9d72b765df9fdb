"""Data types and models for instruction tuning."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Generic, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from instruction_tuner.errors import ConfigError, InvocationError

T = TypeVar("T")
U = TypeVar("U")


class GenerationOverrides(BaseModel):
    """Caller-supplied settings; unset fields fall back to the role defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    timeout_seconds: float | None = Field(default=None, gt=0)


class GenerationSettings(BaseModel):
    """Tunable parameters governing a single invocation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=1024, gt=0, description="Output length ceiling in tokens")
    timeout_seconds: float | None = Field(
        default=30.0, gt=0, description="Time budget for the call, honoured by the invoker"
    )

    def merged(
        self,
        overrides: "GenerationOverrides | GenerationSettings | Mapping[str, Any] | None" = None,
    ) -> "GenerationSettings":
        """Return new settings with the explicitly set override fields replaced.

        Fields the caller did not set keep this object's values.
        """
        if overrides is None:
            return self.model_copy()
        if isinstance(overrides, BaseModel):
            updates = overrides.model_dump(exclude_unset=True)
        else:
            updates = {key: value for key, value in overrides.items() if value is not None}
        # Validate through the constructor so bad overrides are rejected, not copied in.
        return GenerationSettings(**{**self.model_dump(), **updates})


class EvaluationContext(BaseModel):
    """Everything the evaluator needs besides the candidate output."""

    model_config = ConfigDict(frozen=True)

    instruction: str = Field(description="The instruction given to the producer")
    source_text: str = Field(description="The source document that was condensed")
    target_spec: str = Field(description="What the selection should match")
    reference: str | None = Field(
        default=None, description="Optional gold result; dominates scoring when present"
    )


class RunRecord(BaseModel):
    """One logged attempt held in the advisor's run history."""

    model_config = ConfigDict(frozen=True)

    instruction: str
    settings: GenerationSettings
    score: float
    suggested_next: str | None = Field(
        default=None, description="Instruction suggested after this run, once the call succeeds"
    )

    def with_suggestion(self, suggestion: str) -> "RunRecord":
        """Return a copy of this record with the deferred suggestion filled in."""
        return self.model_copy(update={"suggested_next": suggestion})


class InvokeResult(BaseModel, Generic[T]):
    """Validated structured output, or an opaque failure description."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    response: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, response: T) -> "InvokeResult[T]":
        return cls(success=True, response=response)

    @classmethod
    def fail(cls, error: str) -> "InvokeResult[T]":
        return cls(success=False, error=error)

    def map(self, fn: Callable[[T], U]) -> "InvokeResult[U]":
        """Transform a successful response; failures pass through unchanged."""
        if not self.success:
            return InvokeResult(success=False, error=self.error)
        return InvokeResult(success=True, response=fn(self.response))

    def unwrap(self, role: str = "invoke") -> T:
        """Return the response or raise InvocationError with the forwarded reason."""
        if not self.success:
            raise InvocationError(role=role, reason=self.error or "unknown error")
        return self.response


class TuningTask(BaseModel):
    """Specification of the summarization task whose instruction is tuned."""

    name: str = Field(default="task", description="Short name used in reports")
    initial_instruction: str = Field(description="Instruction to start tuning from")
    source_text: str = Field(description="Source document (e.g. a CV)")
    target_spec: str = Field(description="Target specification (e.g. job requirements)")
    reference: str | None = Field(
        default=None, description="Optional expected result used as ground truth"
    )
    producer_settings: GenerationOverrides | None = Field(
        default=None, description="Optional producer setting overrides"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TuningTask":
        """Load a task definition from a YAML file."""
        task_path = Path(path)
        if not task_path.exists():
            raise ConfigError(f"Task file not found: {task_path}")

        with open(task_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError(f"Task file must contain a mapping: {task_path}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid task file {task_path}: {e}") from e

    def context_for(self, instruction: str) -> EvaluationContext:
        """Build the evaluation context for a given producer instruction."""
        return EvaluationContext(
            instruction=instruction,
            source_text=self.source_text,
            target_spec=self.target_spec,
            reference=self.reference,
        )

    def producer_request(self, instruction: str) -> str:
        """Compose the full producer input from the instruction and task material."""
        return (
            f"{instruction}\n\n"
            f"Job requirements:\n{self.target_spec}\n\n"
            f"Source text (CV):\n{self.source_text}"
        )


class TuningIteration(BaseModel):
    """Outcome of one produce/evaluate/advise cycle."""

    iteration: int = Field(ge=1, description="1-based iteration number")
    instruction: str
    settings: GenerationSettings
    candidate_output: str
    score: float = Field(ge=0, le=10)
    suggested_instruction: str
    duration_seconds: float = 0.0


class TuningResult(BaseModel):
    """Final results from a tuning session."""

    task_name: str
    initial_instruction: str
    best_instruction: str
    best_score: float
    best_iteration: int = Field(ge=1, description="Iteration that produced the best instruction")
    final_instruction: str = Field(description="Last instruction suggested by the advisor")
    iterations: list[TuningIteration] = Field(default_factory=list)
    history: list[RunRecord] = Field(default_factory=list)
    total_time_seconds: float = 0.0

    @property
    def score_progression(self) -> list[float]:
        return [it.score for it in self.iterations]

    @property
    def improvement(self) -> float:
        """Best score minus the score of the first iteration."""
        if not self.iterations:
            return 0.0
        return self.best_score - self.iterations[0].score
