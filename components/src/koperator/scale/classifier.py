# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Broker state classification."""

from typing import Iterable, List, Tuple, Union

from koperator.cruisecontrol.protocol import BrokerLoad, BrokerState

BrokerID = Union[int, str]


def brokers_with_state(
    brokers: Iterable[Tuple[BrokerID, BrokerState]],
    states: Iterable[Union[BrokerState, str]],
) -> List[str]:
    """
    Return the IDs of brokers whose state is one of ``states``.

    Desired states are coerced into BrokerState members, so a misspelled
    state raises ValueError instead of silently matching nothing.

    Args:
        brokers: (broker ID, reported state) pairs.
        states: Desired states. Empty means no broker matches.

    Returns:
        Decimal string broker IDs, in input order.
    """
    wanted = {BrokerState(state) for state in states}
    if not wanted:
        return []
    return [str(broker_id) for broker_id, state in brokers if state in wanted]


def broker_states(brokers: Iterable[BrokerLoad]) -> List[Tuple[int, BrokerState]]:
    return [(b.broker, b.broker_state) for b in brokers]
