"""Role definitions for the instruction tuning loop."""

from instruction_tuner.roles.advisor import Advisor, AdvisorOutput
from instruction_tuner.roles.base import StructuredRole
from instruction_tuner.roles.evaluator import Evaluator, EvaluatorOutput
from instruction_tuner.roles.producer import Producer, ProducerOutput

__all__ = [
    "StructuredRole",
    "Producer",
    "ProducerOutput",
    "Evaluator",
    "EvaluatorOutput",
    "Advisor",
    "AdvisorOutput",
]
