# scripts/reset_circuit.py
#
# Usage: python scripts/reset_circuit.py [role] [base_url]
# Asks the running service to force the AI service breaker back to CLOSED via POST /circuit/reset.
# The live breaker caches its state, so the reset goes through the service, never straight to the store.
# Role defaults to operator; base_url defaults to $SERVICE_URL or http://localhost:8000.

import json
import os
import sys

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


def reset(role: str, base_url: str) -> int:
    try:
        response = httpx.post(
            f"{base_url.rstrip('/')}/circuit/reset",
            json={},
            headers={"X-Role": role},
            timeout=10.0,
        )
    except httpx.HTTPError as e:
        print(f"Cannot reach {base_url}: {e}", file=sys.stderr)
        return 1
    if response.status_code != 200:
        print(f"Reset refused ({response.status_code}): {response.text}", file=sys.stderr)
        return 1
    body = response.json()
    print(f"{body['breaker']}: {json.dumps(body['previous'])} -> {json.dumps(body['current'])}")
    return 0


if __name__ == "__main__":
    role = sys.argv[1].upper() if len(sys.argv) > 1 else "OPERATOR"
    base_url = sys.argv[2] if len(sys.argv) > 2 else os.environ.get("SERVICE_URL", DEFAULT_BASE_URL)
    sys.exit(reset(role, base_url))
