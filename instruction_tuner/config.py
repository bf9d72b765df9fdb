"""Configuration for the instruction tuner with per-role model settings."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from instruction_tuner.errors import ConfigError
from instruction_tuner.types import GenerationSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_PROVIDER = "openai"

PRODUCER_DEFAULTS = GenerationSettings(temperature=0.7, max_tokens=1024, timeout_seconds=30.0)
EVALUATOR_DEFAULTS = GenerationSettings(temperature=0.1, max_tokens=64, timeout_seconds=30.0)
ADVISOR_DEFAULTS = GenerationSettings(temperature=0.2, max_tokens=128, timeout_seconds=30.0)


class RoleConfig(BaseModel):
    """Model selection and default generation settings for one role.

    ``settings`` only needs the fields that differ from the role defaults;
    ``TunerConfig`` fills in the rest for the role the section belongs to.
    """

    model: str = Field(default=DEFAULT_MODEL, description="Model name (e.g., 'gpt-4o-mini')")
    provider: str = Field(default=DEFAULT_PROVIDER, description="Provider hint for the invoker")
    settings: GenerationSettings | None = Field(
        default=None, description="Role generation settings (role defaults when unset)"
    )


ROLE_DEFAULTS = {
    "producer": PRODUCER_DEFAULTS,
    "evaluator": EVALUATOR_DEFAULTS,
    "advisor": ADVISOR_DEFAULTS,
}


class TunerConfig(BaseModel):
    """Configuration for a tuning session."""

    producer: RoleConfig = Field(
        default_factory=RoleConfig,
        description="Producer role (higher temperature for varied candidates)",
    )
    evaluator: RoleConfig = Field(
        default_factory=RoleConfig,
        description="Evaluator role (low temperature for consistent scoring)",
    )
    advisor: RoleConfig = Field(default_factory=RoleConfig, description="Advisor role")

    iterations: int = Field(default=5, ge=1, description="Produce/evaluate/advise cycles to run")
    output_dir: Path = Field(
        default=Path("instruction_tuner_results"), description="Directory for run reports"
    )
    verbose: bool = Field(default=True, description="Print progress updates")

    openai_api_key: str | None = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY"),
        description="OpenAI API key (defaults to OPENAI_API_KEY env var)",
    )

    @model_validator(mode="after")
    def _fill_role_settings(self) -> "TunerConfig":
        # Each role keeps its own defaults for the settings fields it does not set.
        for role, role_defaults in ROLE_DEFAULTS.items():
            role_config = getattr(self, role)
            settings = role_defaults.merged(role_config.settings)
            setattr(self, role, role_config.model_copy(update={"settings": settings}))
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TunerConfig":
        """Load configuration from a YAML file, applying environment overrides.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Validated TunerConfig
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {config_path}")

        try:
            if os.getenv("TUNER_ITERATIONS"):
                data["iterations"] = int(os.environ["TUNER_ITERATIONS"])
            if os.getenv("TUNER_OUTPUT_DIR"):
                data["output_dir"] = os.environ["TUNER_OUTPUT_DIR"]
            config = cls(**data)
        except (ValidationError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

        logger.info(f"Loaded configuration from {config_path}")
        return config


def setup_logging(level: str | None = None) -> None:
    """Set up logging configuration.

    Args:
        level: Log level name; defaults to the LOG_LEVEL env var or INFO
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
