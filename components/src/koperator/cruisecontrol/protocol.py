# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Data structures for the request/response protocol between the scaler and Cruise Control."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class BrokerState(str, Enum):
    """State of a Kafka broker as reported by Cruise Control"""

    ALIVE = "ALIVE"
    DEAD = "DEAD"
    NEW = "NEW"
    DEMOTED = "DEMOTED"
    BAD_DISKS = "BAD_DISKS"


class MonitorStateType(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    SAMPLING = "SAMPLING"
    BOOTSTRAPPING = "BOOTSTRAPPING"
    TRAINING = "TRAINING"
    LOADING = "LOADING"


class ExecutorStateType(str, Enum):
    NO_TASK_IN_PROGRESS = "NO_TASK_IN_PROGRESS"
    STARTING_EXECUTION = "STARTING_EXECUTION"
    INTER_BROKER_REPLICA_MOVEMENT_TASK_IN_PROGRESS = (
        "INTER_BROKER_REPLICA_MOVEMENT_TASK_IN_PROGRESS"
    )
    INTRA_BROKER_REPLICA_MOVEMENT_TASK_IN_PROGRESS = (
        "INTRA_BROKER_REPLICA_MOVEMENT_TASK_IN_PROGRESS"
    )
    LEADER_MOVEMENT_TASK_IN_PROGRESS = "LEADER_MOVEMENT_TASK_IN_PROGRESS"
    STOPPING_EXECUTION = "STOPPING_EXECUTION"


class GoalReadinessStatus(str, Enum):
    READY = "ready"
    NOT_READY = "notReady"


class UserTaskStatus(str, Enum):
    ACTIVE = "Active"
    IN_EXECUTION = "InExecution"
    COMPLETED = "Completed"
    COMPLETED_WITH_ERROR = "CompletedWithError"


class ProposalDataSource(str, Enum):
    """Which load windows Cruise Control uses to compute proposals"""

    VALID_WINDOWS = "VALID_WINDOWS"
    VALID_PARTITIONS = "VALID_PARTITIONS"


# Requests


class StateRequest(BaseModel):
    verbose: bool = False


class KafkaClusterLoadRequest(BaseModel):
    allow_capacity_estimation: bool = True


class KafkaClusterStateRequest(BaseModel):
    verbose: bool = False


class UserTasksRequest(BaseModel):
    user_task_ids: List[str] = Field(default_factory=list)
    entries: int = 100


class AddBrokerRequest(BaseModel):
    """Move partition replicas onto the given brokers"""

    allow_capacity_estimation: bool = False
    broker_ids: List[int]
    data_from: ProposalDataSource = ProposalDataSource.VALID_WINDOWS
    use_ready_default_goals: bool = False


class RemoveBrokerRequest(BaseModel):
    """Move partition replicas off the given brokers"""

    allow_capacity_estimation: bool = False
    broker_ids: List[int]
    data_from: ProposalDataSource = ProposalDataSource.VALID_WINDOWS
    use_ready_default_goals: bool = False


class RebalanceRequest(BaseModel):
    """Rebalance the cluster, optionally restricted to destination brokers"""

    allow_capacity_estimation: bool = False
    destination_broker_ids: List[int] = Field(default_factory=list)
    data_from: ProposalDataSource = ProposalDataSource.VALID_WINDOWS
    use_ready_default_goals: bool = False
    exclude_recently_removed_brokers: bool = False


# Responses


class MonitorState(BaseModel):
    state: MonitorStateType = MonitorStateType.NOT_STARTED
    num_monitored_windows: int = 0
    monitoring_coverage_percentage: float = 0.0


class ExecutorState(BaseModel):
    state: ExecutorStateType = ExecutorStateType.NO_TASK_IN_PROGRESS


class GoalReadiness(BaseModel):
    name: str
    status: GoalReadinessStatus


class AnalyzerState(BaseModel):
    is_proposal_ready: bool = False
    goal_readiness: List[GoalReadiness] = Field(default_factory=list)


class StateResponse(BaseModel):
    monitor_state: MonitorState = Field(default_factory=MonitorState)
    executor_state: ExecutorState = Field(default_factory=ExecutorState)
    analyzer_state: AnalyzerState = Field(default_factory=AnalyzerState)


class DiskStats(BaseModel):
    num_replicas: int = 0
    dead: bool = False


class BrokerLoad(BaseModel):
    broker: int = Field(..., ge=0, description="Numeric broker ID")
    broker_state: BrokerState
    disk_state: Dict[str, DiskStats] = Field(default_factory=dict)  # keyed by log dir


class KafkaClusterLoadResponse(BaseModel):
    brokers: List[BrokerLoad] = Field(default_factory=list)


class KafkaBrokerStateInfo(BaseModel):
    replica_count_by_broker_id: Dict[str, int] = Field(default_factory=dict)
    online_log_dirs_by_broker_id: Dict[str, List[str]] = Field(default_factory=dict)
    offline_log_dirs_by_broker_id: Dict[str, List[str]] = Field(default_factory=dict)


class KafkaClusterStateResponse(BaseModel):
    kafka_broker_state: KafkaBrokerStateInfo = Field(
        default_factory=KafkaBrokerStateInfo
    )


class UserTaskInfo(BaseModel):
    user_task_id: str
    start_ms: datetime
    status: UserTaskStatus


class UserTasksResponse(BaseModel):
    user_tasks: List[UserTaskInfo] = Field(default_factory=list)


class TaskResponse(BaseModel):
    """Returned by every mutating request; zero-valued when nothing came back"""

    task_id: str = ""
    date: str = ""
    message: Optional[str] = None
