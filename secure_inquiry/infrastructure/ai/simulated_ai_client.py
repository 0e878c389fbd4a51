"""Simulated AI client: fixed answer after a delay, fails a configurable fraction of calls."""

import asyncio
import logging
import random
from typing import Optional

from secure_inquiry.application.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_ANSWER = "Generated Answer"


class SimulatedAIClient:
    """Stand-in for the external AI service. Implements AIClient protocol."""

    def __init__(
        self,
        failure_rate: float = 0.25,
        latency_seconds: float = 2.0,
        answer: str = DEFAULT_ANSWER,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self._failure_rate = failure_rate
        self._latency = latency_seconds
        self._answer = answer
        self._rng = rng or random.Random()

    async def call(self, message: str) -> str:
        # Failures are decided up front and returned without the delay.
        if self._rng.random() < self._failure_rate:
            logger.info("simulated_ai_call_failed", extra={"message_length": len(message)})
            raise ExternalServiceError("Simulated AI call failed")
        await asyncio.sleep(self._latency)
        return self._answer
