# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for clause."""

from __future__ import annotations

import time

from .runtime import meter

contract_check_total = meter.create_counter(
    name="clause.contract.check.total",
    description="Counts contract checks, partitioned by phase (arguments/return) and outcome.",
    unit="1",
)

contract_violation_total = meter.create_counter(
    name="clause.contract.violation.total",
    description="Counts checks that surfaced at least one contract violation.",
    unit="1",
)

contract_check_latency_ms = meter.create_histogram(
    name="clause.contract.check.latency.ms",
    description="Time spent matching arguments or return values against a contract.",
    unit="ms",
)

contract_bypass_total = meter.create_counter(
    name="clause.contract.bypass.total",
    description="Counts calls that skipped validation because contracts are disabled.",
    unit="1",
)


# ==============================================================================
# Check Metrics Recording
# ==============================================================================


def record_check_metrics(function: str, phase: str, status: str, started_at: float) -> None:
    """Record latency and outcome of one contract check.

    Args:
        function: Qualified name of the guarded callable
        phase: ``"arguments"`` or ``"return"``
        status: ``"passed"``, ``"aborted"`` or ``"violation"``
        started_at: Timestamp from time.perf_counter() when the check started
    """
    try:
        duration_ms = (time.perf_counter() - started_at) * 1000.0
        attributes = {"function": function, "phase": phase, "status": status}
        contract_check_latency_ms.record(duration_ms, attributes)
        contract_check_total.add(1, attributes)
        if status != "passed":
            contract_violation_total.add(1, {"function": function, "phase": phase})
    except Exception:
        # Telemetry must never interfere with user code
        pass


def record_bypass(function: str) -> None:
    try:
        contract_bypass_total.add(1, {"function": function})
    except Exception:
        pass


__all__ = [
    "contract_bypass_total",
    "contract_check_latency_ms",
    "contract_check_total",
    "contract_violation_total",
    "record_bypass",
    "record_check_metrics",
]
