"""Observability layer: metrics and failure classification. No external SaaS."""

from secure_inquiry.observability.failure_classifier import FailureCategory, FailureClassifier
from secure_inquiry.observability.metrics import MetricsCollector

__all__ = [
    "FailureCategory",
    "FailureClassifier",
    "MetricsCollector",
]
