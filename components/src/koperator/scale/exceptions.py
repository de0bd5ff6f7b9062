# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by the scaler."""

from typing import List

from koperator.scale.types import Result


class ScalerError(Exception):
    """Base class for scaler errors"""


class NoBrokerIDsError(ScalerError, ValueError):
    """Raised when a scaling request names no brokers"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"no broker id(s) provided for {operation} request")


class InvalidBrokerIDError(ScalerError, ValueError):
    """Raised when a broker ID is not a non-negative 32-bit decimal integer"""

    def __init__(self, broker_id: str):
        self.broker_id = broker_id
        super().__init__(f"invalid broker id: {broker_id!r}")


class UnavailableBrokersError(ScalerError):
    """Raised when brokers meant to be added are not alive or new in Cruise Control"""

    def __init__(self, broker_ids: List[str]):
        self.broker_ids = list(broker_ids)
        super().__init__(
            "not all brokers are available which are meant to be added to the "
            f"Kafka cluster, unavailable broker(s): {', '.join(self.broker_ids)}"
        )


class TaskSubmissionError(ScalerError):
    """Raised when Cruise Control rejects or fails a submitted task.

    ``result`` is the CompletedWithError Result built from whatever partial
    response was available; the client error is chained as ``__cause__``.
    """

    def __init__(self, operation: str, result: Result):
        self.operation = operation
        self.result = result
        super().__init__(f"{operation} request failed: {result.err}")
