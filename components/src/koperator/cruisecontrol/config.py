# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Connection settings for Cruise Control."""

import os
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel

SERVER_URL_ENV = "CRUISE_CONTROL_SERVER_URL"
USER_AGENT_ENV = "CRUISE_CONTROL_USER_AGENT"
DEFAULT_USER_AGENT = "koperator"


class ClientConfig(BaseModel):
    """Settings handed to the client factory"""

    server_url: str
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "ClientConfig":
        server_url = os.environ.get(SERVER_URL_ENV)
        if not server_url:
            raise ValueError(
                f"{SERVER_URL_ENV} environment variable is required but not set. "
                f"Please set {SERVER_URL_ENV} to the Cruise Control server URL."
            )
        return cls(
            server_url=server_url,
            user_agent=os.environ.get(USER_AGENT_ENV) or DEFAULT_USER_AGENT,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ClientConfig":
        """Load settings from a YAML mapping with server_url and optional user_agent."""
        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Expected a mapping in {path}, got {type(config).__name__}")
        return cls(**config)
