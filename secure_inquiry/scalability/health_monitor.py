"""Aggregate system health: storage backends and circuit breaker states. Integrates with observability."""

from typing import Any, Awaitable, Callable, Mapping

from secure_inquiry.scalability.circuit_breaker import CircuitBreaker


class HealthMonitor:
    """
    Aggregates health checks. All backends injected; no global state.
    Returns dict with status per component and overall.
    """

    def __init__(
        self,
        circuit_breakers: Mapping[str, CircuitBreaker] | None = None,
        storage_checks: Mapping[str, Callable[[], Awaitable[dict[str, Any]]]] | None = None,
    ) -> None:
        self._breakers = dict(circuit_breakers or {})
        self._storage_checks = dict(storage_checks or {})

    def circuit_breaker_states(self) -> dict[str, dict[str, Any]]:
        return {
            name: {
                "state": breaker.state.value,
                "failure_count": breaker.failure_count,
                "persistence_degraded": breaker.persistence_degraded,
            }
            for name, breaker in self._breakers.items()
        }

    async def system_health(self) -> dict[str, Any]:
        """Return aggregated health: storage checks, circuit_breakers, overall status."""
        for breaker in self._breakers.values():
            await breaker.load()
        out: dict[str, Any] = {
            "storage": {},
            "circuit_breakers": self.circuit_breaker_states(),
            "status": "ok",
        }
        for name, check in self._storage_checks.items():
            try:
                out["storage"][name] = await check()
            except Exception as e:
                out["storage"][name] = {"status": "error", "error": str(e)}
                out["status"] = "degraded"
            else:
                if out["storage"][name].get("status") != "ok":
                    out["status"] = "degraded"
        if any(b["persistence_degraded"] for b in out["circuit_breakers"].values()):
            out["status"] = "degraded"
        return out
