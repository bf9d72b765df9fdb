"""Error types raised by the instruction tuner."""


class InstructionTunerError(Exception):
    """Base class for all instruction tuner errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable


class InvocationError(InstructionTunerError):
    """Raised when a role call fails and the caller chooses to abort.

    The roles themselves never raise this; they return a failed
    ``InvokeResult`` and the reason is forwarded here verbatim.
    """

    def __init__(self, role: str, reason: str) -> None:
        super().__init__(f"{role} call failed: {reason}")
        self.role = role
        self.reason = reason


class ConfigError(InstructionTunerError):
    """Raised when a config or task file is missing or invalid."""
