# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Scaler - Kafka broker scaling decisions on top of Cruise Control.

The scaler checks the current cluster state reported by Cruise Control
before asking it to move replicas:
- add_brokers: all brokers must be alive or new, otherwise nothing is done
- remove_brokers: brokers without partition replicas are skipped
- rebalance_disks: only brokers with an empty, live disk are targeted

Usage:
    config = ClientConfig.from_env()
    scaler = new_cruise_control_scaler(config, client_factory=MyClient)
    if scaler.is_ready():
        result = scaler.add_brokers("3", "4")
"""

__all__ = [
    "CruiseControlScaler",
    "CruiseControlStatus",
    "Eligibility",
    "InvalidBrokerIDError",
    "KafkaBrokerState",
    "LogDirState",
    "NoBrokerIDsError",
    "Result",
    "ScalerError",
    "ScalerPrometheusMetrics",
    "TaskState",
    "TaskSubmissionError",
    "UnavailableBrokersError",
    "brokers_with_state",
    "new_cruise_control_scaler",
]

from koperator.scale.classifier import brokers_with_state
from koperator.scale.exceptions import (
    InvalidBrokerIDError,
    NoBrokerIDsError,
    ScalerError,
    TaskSubmissionError,
    UnavailableBrokersError,
)
from koperator.scale.metrics import ScalerPrometheusMetrics
from koperator.scale.preconditions import Eligibility
from koperator.scale.scaler import CruiseControlScaler, new_cruise_control_scaler
from koperator.scale.types import (
    CruiseControlStatus,
    KafkaBrokerState,
    LogDirState,
    Result,
    TaskState,
)
