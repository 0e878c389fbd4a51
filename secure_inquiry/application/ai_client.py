"""External AI client interface. Application layer depends on this protocol."""

from typing import Protocol


class AIClient(Protocol):
    """Protocol for the downstream AI service. Receives redacted text only."""

    async def call(self, message: str) -> str:
        """Return the generated answer. Raises on failure."""
        ...
