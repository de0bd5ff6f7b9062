# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

__all__ = [
    "ClientConfig",
    "ClientFactory",
    "CruiseControlClient",
    "CruiseControlError",
]

from koperator.cruisecontrol.client import (
    ClientFactory,
    CruiseControlClient,
    CruiseControlError,
)
from koperator.cruisecontrol.config import ClientConfig
