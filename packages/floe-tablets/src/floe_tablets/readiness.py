"""Readiness polling for newly created tables.

A table recorded by the catalog may not yet accept client operations.
ReadinessWaiter polls the catalog with bounded exponential backoff until the
table reports ready or the creation deadline passes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tenacity import RetryCallState, RetryError, Retrying, retry_if_result, wait_exponential

from floe_tablets.config import ReadinessPollConfig
from floe_tablets.errors import CreationTimeoutError
from floe_tablets.observability import catalog_operation, get_logger, log_poll_attempt

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from floe_tablets.client import CatalogService
    from floe_tablets.deadline import Deadline
    from floe_tablets.models import TableName


def _not_ready(result: bool) -> bool:
    return result is False


class ReadinessWaiter:
    """Poll the catalog until a table is ready or the deadline passes.

    Attributes:
        catalog: Catalog collaborator answering readiness queries.
        config: Backoff policy.
    """

    def __init__(
        self,
        catalog: CatalogService,
        config: ReadinessPollConfig | None = None,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or ReadinessPollConfig()
        self._logger = logger or get_logger()

    def wait_until_ready(
        self,
        name: TableName,
        table_id: str | None,
        deadline: Deadline,
        *,
        log_failure: bool = True,
    ) -> None:
        """Block until the catalog reports the table ready.

        No poll is issued once the deadline has passed. Sleeps between polls
        grow exponentially, are capped by the config, and are clipped to the
        time remaining.

        Args:
            name: Qualified table name.
            table_id: Table id, if known.
            deadline: Absolute deadline shared with the create request.
            log_failure: If False, leave failure logging to an enclosing span.

        Raises:
            CreationTimeoutError: If the table is not ready by the deadline.
            FloeCatalogError: If a readiness query fails.
        """
        table = str(name)
        backoff = wait_exponential(
            multiplier=self.config.initial_wait_seconds,
            max=self.config.max_wait_seconds,
            exp_base=self.config.multiplier,
        )

        def stop_at_deadline(retry_state: RetryCallState) -> bool:
            return deadline.expired()

        def wait_within_deadline(retry_state: RetryCallState) -> float:
            return min(backoff(retry_state), deadline.remaining())

        def log_not_ready(retry_state: RetryCallState) -> None:
            next_sleep = retry_state.next_action.sleep if retry_state.next_action else 0.0
            log_poll_attempt(
                table=table,
                attempt=retry_state.attempt_number,
                wait_seconds=next_sleep,
                remaining_seconds=deadline.remaining(),
            )

        def poll() -> bool:
            if deadline.clock.monotonic() > deadline.expires_at:
                return False
            return self.catalog.is_create_table_done(
                name=name,
                table_id=table_id,
                deadline=deadline,
            )

        with catalog_operation("wait_for_table", table=table, log_failure=log_failure):
            if deadline.expired():
                raise CreationTimeoutError(table, timeout_seconds=deadline.budget_seconds)

            retrying = Retrying(
                retry=retry_if_result(_not_ready),
                stop=stop_at_deadline,
                wait=wait_within_deadline,
                sleep=deadline.clock.sleep,
                before_sleep=log_not_ready,
                reraise=False,
            )
            try:
                retrying(poll)
            except RetryError as exc:
                raise CreationTimeoutError(
                    table,
                    timeout_seconds=deadline.budget_seconds,
                    message=f"Timed out waiting for table {table} to become ready",
                ) from exc

            self._logger.debug("table_ready", table=table, table_id=table_id)
