# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Result and status types returned by the scaler."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from koperator.cruisecontrol.protocol import BrokerState

KafkaBrokerState = BrokerState

KAFKA_BROKER_ALIVE = BrokerState.ALIVE
KAFKA_BROKER_DEAD = BrokerState.DEAD
KAFKA_BROKER_NEW = BrokerState.NEW
KAFKA_BROKER_DEMOTED = BrokerState.DEMOTED
KAFKA_BROKER_BAD_DISKS = BrokerState.BAD_DISKS


class LogDirState(str, Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"


class TaskState(str, Enum):
    """Lifecycle state of a Cruise Control user task"""

    ACTIVE = "Active"
    IN_EXECUTION = "InExecution"
    COMPLETED = "Completed"
    COMPLETED_WITH_ERROR = "CompletedWithError"


@dataclass(frozen=True)
class Result:
    """
    Outcome of a scaling operation.

    Attributes:
        task_id: Cruise Control user task ID. Empty if nothing was submitted.
        started_at: Submission timestamp as reported by Cruise Control.
        state: Lifecycle state of the task.
        err: Description of the submission error, if any.
    """

    state: TaskState
    task_id: str = ""
    started_at: str = ""
    err: Optional[str] = None


@dataclass(frozen=True)
class CruiseControlStatus:
    """Snapshot of the internal state of Cruise Control."""

    monitor_ready: bool = False
    executor_ready: bool = False
    analyzer_ready: bool = False
    proposal_ready: bool = False
    goals_ready: bool = False
    monitored_windows: int = 0
    monitoring_coverage: float = 0.0

    def is_ready(self) -> bool:
        # executor and goal readiness are reported but do not gate
        return self.analyzer_ready and self.monitor_ready
