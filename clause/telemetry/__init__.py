"""Telemetry package - OpenTelemetry metrics and tracing for contract checks."""

from .metrics import (
    contract_bypass_total,
    contract_check_latency_ms,
    contract_check_total,
    contract_violation_total,
    record_bypass,
    record_check_metrics,
)
from .runtime import get_tracer, meter

__all__ = [
    "contract_bypass_total",
    "contract_check_latency_ms",
    "contract_check_total",
    "contract_violation_total",
    "get_tracer",
    "meter",
    "record_bypass",
    "record_check_metrics",
]
