# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Eligibility checks run before a scaling task is submitted.

Each check works on a snapshot that the scaler fetched from Cruise Control
right before calling it. The snapshot may already be stale by the time the
task is submitted; Cruise Control is expected to reject requests that no
longer apply.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from koperator.cruisecontrol.protocol import BrokerLoad
from koperator.runtime.logging import configure_koperator_logging
from koperator.scale.exceptions import InvalidBrokerIDError

configure_koperator_logging()
logger = logging.getLogger(__name__)

MAX_BROKER_ID = 2**31 - 1

_BROKER_ID_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Eligibility:
    """
    Outcome of an eligibility check.

    Attributes:
        eligible: Broker IDs the operation may target, in request order.
        excluded: Broker IDs left out, mapped to the reason.
    """

    eligible: List[str] = field(default_factory=list)
    excluded: Dict[str, str] = field(default_factory=dict)


def broker_handle(broker_id: str) -> int:
    """Convert a decimal string broker ID to the integer Cruise Control expects."""
    if not isinstance(broker_id, str) or not _BROKER_ID_PATTERN.fullmatch(broker_id):
        raise InvalidBrokerIDError(broker_id)
    handle = int(broker_id)
    if handle > MAX_BROKER_ID:
        raise InvalidBrokerIDError(broker_id)
    return handle


def broker_handles(broker_ids: Iterable[str]) -> List[int]:
    return [broker_handle(broker_id) for broker_id in broker_ids]


def check_add_brokers(requested: Iterable[str], available: Iterable[str]) -> Eligibility:
    """Brokers can only be added if Cruise Control sees them as alive or new."""
    available_ids = set(available)
    eligible = []
    excluded = {}
    for broker_id in requested:
        if broker_id in available_ids:
            eligible.append(broker_id)
        else:
            excluded[broker_id] = "broker is not alive or new in Cruise Control"
            logger.info(f"Broker {broker_id} is not available to be added")
    return Eligibility(eligible=eligible, excluded=excluded)


def check_remove_brokers(
    requested: Iterable[str], replica_counts: Mapping[str, int]
) -> Eligibility:
    """Only brokers still holding partition replicas need to be drained."""
    eligible = []
    excluded = {}
    for broker_id in requested:
        replicas = replica_counts.get(broker_id)
        if replicas is None or replicas <= 0:
            excluded[broker_id] = "broker is unknown or has 0 partition replicas"
            logger.info(
                f"Removing broker {broker_id} is skipped as it is either not "
                f"available or has 0 partition replicas (replicas={replicas})"
            )
            continue
        eligible.append(broker_id)
    return Eligibility(eligible=eligible, excluded=excluded)


def check_disk_rebalance(
    requested: Iterable[str], brokers: Iterable[BrokerLoad]
) -> Eligibility:
    """
    Select the requested brokers that own at least one empty, live disk.

    A disk is empty when it holds no replicas. Dead disks never qualify.

    Args:
        requested: Broker IDs to consider.
        brokers: Per-broker load from Cruise Control.

    Returns:
        Eligibility whose eligible list holds every qualifying broker once.
    """
    requested_ids = list(dict.fromkeys(requested))
    load_by_id = {str(b.broker): b for b in brokers}

    eligible = []
    excluded = {}
    for broker_id in requested_ids:
        load = load_by_id.get(broker_id)
        if load is None:
            excluded[broker_id] = "broker is not reported by Cruise Control"
        elif any(
            disk.num_replicas <= 0 and not disk.dead
            for disk in load.disk_state.values()
        ):
            eligible.append(broker_id)
            continue
        else:
            excluded[broker_id] = "broker has no empty live disk"
        logger.info(f"Disk rebalance skips broker {broker_id}: {excluded[broker_id]}")
    return Eligibility(eligible=eligible, excluded=excluded)
