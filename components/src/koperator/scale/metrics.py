# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge

from koperator.scale.types import CruiseControlStatus

OUTCOME_SUBMITTED = "submitted"
OUTCOME_FAILED = "failed"
OUTCOME_SKIPPED = "skipped"
OUTCOME_REJECTED = "rejected"


class ScalerPrometheusMetrics:
    """Container for all scaler Prometheus metrics."""

    def __init__(self, prefix: str = "scaler", registry: CollectorRegistry = REGISTRY):
        self.tasks = Counter(
            f"{prefix}:tasks",
            "Scaling operations by outcome",
            ["operation", "outcome"],
            registry=registry,
        )
        self.component_ready = Gauge(
            f"{prefix}:component_ready",
            "Cruise Control component readiness (1 = ready)",
            ["component"],
            registry=registry,
        )

    def record_task(self, operation: str, outcome: str):
        self.tasks.labels(operation=operation, outcome=outcome).inc()

    def record_status(self, status: CruiseControlStatus):
        self.component_ready.labels(component="monitor").set(status.monitor_ready)
        self.component_ready.labels(component="executor").set(status.executor_ready)
        self.component_ready.labels(component="analyzer").set(status.analyzer_ready)
        self.component_ready.labels(component="goals").set(status.goals_ready)
