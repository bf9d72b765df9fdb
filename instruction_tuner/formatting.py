"""Text shaping helpers used when building role requests."""

TRUNCATION_MARKER = "..."
EXCERPT_LIMIT = 1500
INSTRUCTION_PREVIEW_LIMIT = 120
SUGGESTION_PREVIEW_LIMIT = 60


def truncate(text: str, limit: int, marker: str = TRUNCATION_MARKER) -> str:
    """Return the first ``limit`` characters, plus ``marker`` only if text was cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker


def excerpt(text: str) -> str:
    """Bounded excerpt of a source text or target specification."""
    return truncate(text, EXCERPT_LIMIT)


def preview(text: str, limit: int = INSTRUCTION_PREVIEW_LIMIT) -> str:
    """Bounded preview of an instruction for the history block."""
    return truncate(text, limit)
