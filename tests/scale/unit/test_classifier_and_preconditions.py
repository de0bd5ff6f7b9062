# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for broker state classification and eligibility checks."""

import pytest

from koperator.cruisecontrol.protocol import BrokerLoad, BrokerState, DiskStats
from koperator.scale import InvalidBrokerIDError, brokers_with_state
from koperator.scale.preconditions import (
    broker_handle,
    broker_handles,
    check_add_brokers,
    check_disk_rebalance,
    check_remove_brokers,
)

pytestmark = [
    pytest.mark.pre_merge,
    pytest.mark.unit,
    pytest.mark.scale,
]

BROKERS = [
    (0, BrokerState.ALIVE),
    (1, BrokerState.DEAD),
    (2, BrokerState.NEW),
    (3, BrokerState.DEMOTED),
    (4, BrokerState.BAD_DISKS),
]


def test_brokers_with_state_filters_by_state():
    assert brokers_with_state(BROKERS, [BrokerState.ALIVE, BrokerState.NEW]) == [
        "0",
        "2",
    ]
    assert brokers_with_state(BROKERS, [BrokerState.BAD_DISKS]) == ["4"]


def test_brokers_with_state_empty_states_matches_nothing():
    assert brokers_with_state(BROKERS, []) == []


def test_brokers_with_state_accepts_wire_values():
    assert brokers_with_state(BROKERS, ["DEAD"]) == ["1"]


def test_brokers_with_state_rejects_unknown_state():
    with pytest.raises(ValueError):
        brokers_with_state(BROKERS, ["ALIEV"])


@pytest.mark.parametrize("broker_id", ["x", "", "-1", "+1", " 1", "1.5", "2147483648"])
def test_broker_handle_rejects_invalid_ids(broker_id):
    with pytest.raises(InvalidBrokerIDError) as exc_info:
        broker_handle(broker_id)
    assert exc_info.value.broker_id == broker_id


def test_broker_handles_converts_decimal_ids():
    assert broker_handles(["0", "7", "2147483647"]) == [0, 7, 2147483647]


def test_check_add_brokers_reports_unavailable():
    eligibility = check_add_brokers(["1", "2", "3"], ["0", "1", "2"])

    assert eligibility.eligible == ["1", "2"]
    assert list(eligibility.excluded) == ["3"]


def test_check_remove_brokers_skips_empty_and_unknown():
    eligibility = check_remove_brokers(["1", "2", "3"], {"1": 4, "2": 0})

    assert eligibility.eligible == ["1"]
    assert set(eligibility.excluded) == {"2", "3"}


def test_check_disk_rebalance_needs_empty_live_disk():
    brokers = [
        BrokerLoad(
            broker=1,
            broker_state=BrokerState.ALIVE,
            disk_state={"/data/a": DiskStats(num_replicas=5)},
        ),
        BrokerLoad(
            broker=2,
            broker_state=BrokerState.ALIVE,
            disk_state={
                "/data/a": DiskStats(num_replicas=0),
                "/data/b": DiskStats(num_replicas=0),
            },
        ),
        BrokerLoad(
            broker=3,
            broker_state=BrokerState.BAD_DISKS,
            disk_state={"/data/a": DiskStats(num_replicas=0, dead=True)},
        ),
        BrokerLoad(
            broker=4,
            broker_state=BrokerState.ALIVE,
            disk_state={"/data/a": DiskStats(num_replicas=0)},
        ),
    ]

    eligibility = check_disk_rebalance(["1", "2", "3", "5"], brokers)

    assert eligibility.eligible == ["2"]
    assert set(eligibility.excluded) == {"1", "3", "5"}
