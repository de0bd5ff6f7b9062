# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Scaling Kafka clusters through Cruise Control."""

import logging
from datetime import timezone
from typing import Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel

from koperator.cruisecontrol.client import ClientFactory, CruiseControlClient
from koperator.cruisecontrol.config import ClientConfig
from koperator.cruisecontrol.protocol import (
    AddBrokerRequest,
    ExecutorStateType,
    GoalReadinessStatus,
    KafkaClusterLoadRequest,
    KafkaClusterStateRequest,
    MonitorStateType,
    ProposalDataSource,
    RebalanceRequest,
    RemoveBrokerRequest,
    StateRequest,
    TaskResponse,
    UserTasksRequest,
)
from koperator.runtime.logging import configure_koperator_logging
from koperator.scale.classifier import broker_states
from koperator.scale.classifier import brokers_with_state as filter_brokers
from koperator.scale.exceptions import (
    NoBrokerIDsError,
    TaskSubmissionError,
    UnavailableBrokersError,
)
from koperator.scale.metrics import (
    OUTCOME_FAILED,
    OUTCOME_REJECTED,
    OUTCOME_SKIPPED,
    OUTCOME_SUBMITTED,
    ScalerPrometheusMetrics,
)
from koperator.scale.preconditions import (
    broker_handles,
    check_add_brokers,
    check_disk_rebalance,
    check_remove_brokers,
)
from koperator.scale.types import (
    CruiseControlStatus,
    KafkaBrokerState,
    LogDirState,
    Result,
    TaskState,
)

configure_koperator_logging()
logger = logging.getLogger(__name__)

USER_TASKS_ENTRIES = 100

RequestT = TypeVar("RequestT", bound=BaseModel)


def _task_result(
    response: Optional[TaskResponse], err: Optional[BaseException] = None
) -> Result:
    """Build the Result of a submission from a (possibly zero-valued) response."""
    if response is None:
        response = TaskResponse()
    if err is None:
        return Result(
            task_id=response.task_id,
            started_at=response.date,
            state=TaskState.ACTIVE,
        )
    return Result(
        task_id=response.task_id,
        started_at=response.date,
        state=TaskState.COMPLETED_WITH_ERROR,
        err=str(err) or type(err).__name__,
    )


class CruiseControlScaler:
    """Translates broker scaling intents into Cruise Control tasks.

    The scaler keeps no cluster state between calls: every operation fetches
    what it needs from Cruise Control before acting on it.
    """

    def __init__(
        self,
        client: CruiseControlClient,
        metrics: Optional[ScalerPrometheusMetrics] = None,
    ):
        self.client = client
        self.metrics = metrics

    def _record(self, operation: str, outcome: str):
        if self.metrics is not None:
            self.metrics.record_task(operation, outcome)

    def _submit(
        self,
        operation: str,
        submit: Callable[[RequestT], TaskResponse],
        request: RequestT,
    ) -> Result:
        try:
            response = submit(request)
        except Exception as e:
            partial = getattr(e, "response", None)
            if not isinstance(partial, TaskResponse):
                partial = None
            result = _task_result(partial, e)
            logger.error(f"Cruise Control {operation} request failed: {result.err}")
            self._record(operation, OUTCOME_FAILED)
            raise TaskSubmissionError(operation, result) from e

        result = _task_result(response)
        logger.info(
            f"Cruise Control {operation} task {result.task_id} started at {result.started_at}"
        )
        self._record(operation, OUTCOME_SUBMITTED)
        return result

    def _skip(self, operation: str) -> Result:
        self._record(operation, OUTCOME_SKIPPED)
        return Result(state=TaskState.COMPLETED)

    def status(self) -> CruiseControlStatus:
        """Return a CruiseControlStatus describing the internal state of Cruise Control.

        Never raises: if Cruise Control cannot be queried, every field of the
        returned status is false/zero.
        """
        try:
            resp = self.client.state(StateRequest(verbose=True))
        except Exception as e:
            logger.error(f"Failed to get Cruise Control state: {e}")
            status = CruiseControlStatus()
        else:
            analyzer = resp.analyzer_state
            goals_ready = all(
                goal.status == GoalReadinessStatus.READY
                for goal in analyzer.goal_readiness
            )
            status = CruiseControlStatus(
                monitor_ready=resp.monitor_state.state == MonitorStateType.RUNNING,
                executor_ready=resp.executor_state.state
                == ExecutorStateType.NO_TASK_IN_PROGRESS,
                analyzer_ready=analyzer.is_proposal_ready and goals_ready,
                proposal_ready=analyzer.is_proposal_ready,
                goals_ready=goals_ready,
                monitored_windows=resp.monitor_state.num_monitored_windows,
                monitoring_coverage=resp.monitor_state.monitoring_coverage_percentage,
            )

        if self.metrics is not None:
            self.metrics.record_status(status)
        return status

    def is_ready(self) -> bool:
        """Return True if the Analyzer and Monitor components of Cruise Control are ready."""
        status = self.status()
        logger.info(
            f"Cruise Control readiness: analyzer={status.analyzer_ready}, "
            f"monitor={status.monitor_ready}, executor={status.executor_ready}, "
            f"goals_ready={status.goals_ready}, "
            f"monitored_windows={status.monitored_windows}, "
            f"monitoring_coverage_percentage={status.monitoring_coverage}"
        )
        return status.is_ready()

    def is_up(self) -> bool:
        """Return True if Cruise Control answers a state request."""
        try:
            self.client.state(StateRequest())
        except Exception as e:
            logger.debug(f"Cruise Control is not reachable: {e}")
            return False
        return True

    def get_user_tasks(self, *task_ids: str) -> List[Result]:
        """Return a Result for each Cruise Control user task with one of the given IDs."""
        resp = self.client.user_tasks(
            UserTasksRequest(user_task_ids=list(task_ids), entries=USER_TASKS_ENTRIES)
        )

        results = []
        for task in resp.user_tasks:
            started_at = task.start_ms
            if started_at.tzinfo is None:
                started_at = started_at.replace(tzinfo=timezone.utc)
            results.append(
                Result(
                    task_id=task.user_task_id,
                    started_at=str(started_at.astimezone(timezone.utc)),
                    state=TaskState(task.status.value),
                )
            )
        return results

    def add_brokers(self, *broker_ids: str) -> Result:
        """Request Cruise Control to move partition replicas onto the given brokers.

        All brokers must be alive or new in Cruise Control, otherwise nothing is
        submitted and UnavailableBrokersError is raised.

        Raises:
            NoBrokerIDsError: If no broker ID is given.
            InvalidBrokerIDError: If a broker ID is not a non-negative integer.
            UnavailableBrokersError: If any broker cannot be added.
            TaskSubmissionError: If Cruise Control fails the add broker request.
        """
        operation = "add_brokers"
        if not broker_ids:
            raise NoBrokerIDsError("add brokers")

        handles = broker_handles(broker_ids)

        try:
            available = self.brokers_with_state(
                KafkaBrokerState.ALIVE, KafkaBrokerState.NEW
            )
        except Exception as e:
            logger.error(
                f"Failed to retrieve list of available brokers from Cruise Control: {e}"
            )
            raise

        eligibility = check_add_brokers(broker_ids, available)
        if eligibility.excluded:
            unavailable = list(eligibility.excluded)
            logger.error(f"There are offline brokers to be added: {unavailable}")
            self._record(operation, OUTCOME_REJECTED)
            raise UnavailableBrokersError(unavailable)

        request = AddBrokerRequest(
            allow_capacity_estimation=True,
            broker_ids=handles,
            data_from=ProposalDataSource.VALID_WINDOWS,
            use_ready_default_goals=True,
        )
        return self._submit(operation, self.client.add_broker, request)

    def remove_brokers(self, *broker_ids: str) -> Result:
        """Request Cruise Control to move partition replicas off the given brokers.

        Brokers which are unknown to Cruise Control or hold no replicas are
        skipped. If none are left, nothing is submitted and a Completed
        Result is returned.
        """
        operation = "remove_brokers"
        if not broker_ids:
            raise NoBrokerIDsError("remove brokers")

        cluster_state = self.client.kafka_cluster_state(KafkaClusterStateRequest())
        eligibility = check_remove_brokers(
            broker_ids, cluster_state.kafka_broker_state.replica_count_by_broker_id
        )
        if not eligibility.eligible:
            return self._skip(operation)

        request = RemoveBrokerRequest(
            allow_capacity_estimation=True,
            broker_ids=broker_handles(eligibility.eligible),
            data_from=ProposalDataSource.VALID_WINDOWS,
            use_ready_default_goals=True,
        )
        return self._submit(operation, self.client.remove_broker, request)

    def rebalance_disks(self, *broker_ids: str) -> Result:
        """Rebalance the given brokers onto their empty disks.

        Only brokers with at least one live disk holding no replicas are
        targeted. If there are none, nothing is submitted.
        """
        operation = "rebalance_disks"
        cluster_load = self.client.kafka_cluster_load(KafkaClusterLoadRequest())
        eligibility = check_disk_rebalance(broker_ids, cluster_load.brokers)
        if not eligibility.eligible:
            return self._skip(operation)

        request = RebalanceRequest(
            allow_capacity_estimation=True,
            destination_broker_ids=broker_handles(eligibility.eligible),
            data_from=ProposalDataSource.VALID_WINDOWS,
            use_ready_default_goals=True,
            exclude_recently_removed_brokers=True,
        )
        return self._submit(operation, self.client.rebalance, request)

    def brokers_with_state(self, *states: KafkaBrokerState) -> List[str]:
        """Return the IDs of brokers known to Cruise Control which are in one of the given states."""
        try:
            resp = self.client.kafka_cluster_load(KafkaClusterLoadRequest())
        except Exception as e:
            logger.error(f"Getting Kafka cluster load from Cruise Control failed: {e}")
            raise

        broker_ids = filter_brokers(broker_states(resp.brokers), states)
        logger.debug(f"Brokers in state(s) {list(states)}: {broker_ids}")
        return broker_ids

    def partition_replicas_by_broker(self) -> Dict[str, int]:
        """Return the number of partition replicas for every broker in the Kafka cluster."""
        resp = self.client.kafka_cluster_state(KafkaClusterStateRequest())
        return dict(resp.kafka_broker_state.replica_count_by_broker_id)

    def broker_with_least_partition_replicas(self) -> str:
        """Return the ID of the broker hosting the fewest partition replicas.

        Ties go to the broker listed first by Cruise Control. Returns an empty
        string if no broker is reported.
        """
        try:
            replicas_by_broker = self.partition_replicas_by_broker()
        except Exception as e:
            logger.error(f"Could not retrieve partition map for brokers: {e}")
            raise

        least_broker = ""
        least_replicas = None
        for broker_id, replicas in replicas_by_broker.items():
            if least_replicas is None or replicas < least_replicas:
                least_replicas = replicas
                least_broker = broker_id
        return least_broker

    def log_dirs_by_broker(self) -> Dict[str, Dict[LogDirState, List[str]]]:
        """Return the online and offline log directories of every broker."""
        try:
            resp = self.client.kafka_cluster_state(KafkaClusterStateRequest())
        except Exception as e:
            logger.error(f"Getting Kafka cluster state from Cruise Control failed: {e}")
            raise

        broker_state = resp.kafka_broker_state
        log_dirs: Dict[str, Dict[LogDirState, List[str]]] = {}
        for state, dirs_by_broker in (
            (LogDirState.ONLINE, broker_state.online_log_dirs_by_broker_id),
            (LogDirState.OFFLINE, broker_state.offline_log_dirs_by_broker_id),
        ):
            for broker_id, dirs in dirs_by_broker.items():
                buckets = log_dirs.setdefault(
                    broker_id, {LogDirState.ONLINE: [], LogDirState.OFFLINE: []}
                )
                buckets[state] = list(dirs)
        return log_dirs


def new_cruise_control_scaler(
    config: ClientConfig,
    client_factory: ClientFactory,
    metrics: Optional[ScalerPrometheusMetrics] = None,
) -> CruiseControlScaler:
    """Create a CruiseControlScaler with a client built by ``client_factory``."""
    try:
        client = client_factory(config)
    except Exception as e:
        logger.error(f"Creating Cruise Control client for {config.server_url} failed: {e}")
        raise
    logger.info(
        f"Cruise Control scaler initialized for {config.server_url} "
        f"(user agent: {config.user_agent})"
    )
    return CruiseControlScaler(client, metrics=metrics)
