"""Shared test environment. Settings are read at app import, so the env is fixed here first."""

import os
import tempfile

import pytest

from secure_inquiry.observability.metrics import MetricsCollector

TEST_AES_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OTHER_AES_KEY = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"

_DATA_DIR = tempfile.mkdtemp(prefix="secure-inquiry-tests-")

os.environ["AES_SECRET_KEY"] = TEST_AES_KEY
os.environ["ENVIRONMENT"] = "test"
os.environ["AUDIT_BACKEND"] = "file"
os.environ["AUDIT_LOG_PATH"] = os.path.join(_DATA_DIR, "audit-log.json")
os.environ["CIRCUIT_STATE_BACKEND"] = "file"
os.environ["CIRCUIT_STATE_PATH"] = os.path.join(_DATA_DIR, "circuit-breaker-state.json")
os.environ["AI_LATENCY_SECONDS"] = "0"


@pytest.fixture
def aes_key() -> str:
    return TEST_AES_KEY


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()
