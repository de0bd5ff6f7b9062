# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for Cruise Control client configuration."""

import pytest
import yaml

from koperator.cruisecontrol import ClientConfig

pytestmark = [
    pytest.mark.pre_merge,
    pytest.mark.unit,
    pytest.mark.scale,
]


def test_from_env(monkeypatch):
    monkeypatch.setenv("CRUISE_CONTROL_SERVER_URL", "http://cruisecontrol:8090")
    monkeypatch.delenv("CRUISE_CONTROL_USER_AGENT", raising=False)

    config = ClientConfig.from_env()

    assert config.server_url == "http://cruisecontrol:8090"
    assert config.user_agent == "koperator"


def test_from_env_user_agent_override(monkeypatch):
    monkeypatch.setenv("CRUISE_CONTROL_SERVER_URL", "http://cruisecontrol:8090")
    monkeypatch.setenv("CRUISE_CONTROL_USER_AGENT", "ops-tool")

    assert ClientConfig.from_env().user_agent == "ops-tool"


def test_from_env_without_server_url(monkeypatch):
    monkeypatch.delenv("CRUISE_CONTROL_SERVER_URL", raising=False)

    with pytest.raises(ValueError, match="CRUISE_CONTROL_SERVER_URL"):
        ClientConfig.from_env()


def test_from_yaml(tmp_path):
    path = tmp_path / "cruisecontrol.yaml"
    path.write_text(
        yaml.safe_dump({"server_url": "http://cc:8090", "user_agent": "tests"}),
        encoding="utf-8",
    )

    config = ClientConfig.from_yaml(path)

    assert config == ClientConfig(server_url="http://cc:8090", user_agent="tests")


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "cruisecontrol.yaml"
    path.write_text("- http://cc:8090\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Expected a mapping"):
        ClientConfig.from_yaml(path)
