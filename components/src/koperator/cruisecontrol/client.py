# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Interface of the Cruise Control client consumed by the scaler.

The transport itself is not part of this package. Callers provide an object
implementing CruiseControlClient, usually through a client factory passed to
new_cruise_control_scaler().
"""

from typing import Callable, Optional, Protocol

from koperator.cruisecontrol.config import ClientConfig
from koperator.cruisecontrol.protocol import (
    AddBrokerRequest,
    KafkaClusterLoadRequest,
    KafkaClusterLoadResponse,
    KafkaClusterStateRequest,
    KafkaClusterStateResponse,
    RebalanceRequest,
    RemoveBrokerRequest,
    StateRequest,
    StateResponse,
    TaskResponse,
    UserTasksRequest,
    UserTasksResponse,
)


class CruiseControlError(Exception):
    """Raised by a client when Cruise Control could not complete a request.

    Mutating requests may have produced a partial response (e.g. a task ID was
    assigned before the failure); it is carried in ``response``.
    """

    def __init__(self, message: str, response: Optional[TaskResponse] = None):
        super().__init__(message)
        self.response = response


class CruiseControlClient(Protocol):
    """Calls the scaler makes against Cruise Control."""

    def state(self, request: StateRequest) -> StateResponse:
        ...

    def kafka_cluster_load(
        self, request: KafkaClusterLoadRequest
    ) -> KafkaClusterLoadResponse:
        ...

    def kafka_cluster_state(
        self, request: KafkaClusterStateRequest
    ) -> KafkaClusterStateResponse:
        ...

    def user_tasks(self, request: UserTasksRequest) -> UserTasksResponse:
        ...

    def add_broker(self, request: AddBrokerRequest) -> TaskResponse:
        ...

    def remove_broker(self, request: RemoveBrokerRequest) -> TaskResponse:
        ...

    def rebalance(self, request: RebalanceRequest) -> TaskResponse:
        ...


ClientFactory = Callable[[ClientConfig], CruiseControlClient]
