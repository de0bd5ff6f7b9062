# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Process-wide logging setup shared by all koperator components."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "KOPERATOR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_koperator_logging(level: Optional[str] = None):
    """Configure the root logger once per process.

    The level is taken from ``level`` if given, otherwise from the
    KOPERATOR_LOG_LEVEL environment variable, defaulting to INFO. Repeated
    calls are no-ops so every module can call this at import time.
    """
    global _configured
    if _configured:
        return

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    _configured = True
