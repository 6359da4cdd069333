"""Shared test fixtures for floe-tablets tests.

Provides an in-memory catalog, a topology stub and a manual clock so that
creation and readiness polling run without sleeping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from floe_tablets.client import CatalogClient
from floe_tablets.config import ReadinessPollConfig, TabletsClientConfig
from floe_tablets.errors import CreationTimeoutError, TableAlreadyExistsError
from floe_tablets.schema import DataType, SchemaBuilder, TableSchema

if TYPE_CHECKING:
    from floe_tablets.deadline import Deadline
    from floe_tablets.models import TableName, TableType
    from floe_tablets.wire import CreateTableRequest


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalog:
    """In-memory catalog keyed by qualified table name.

    Attributes:
        tables: Qualified name -> table id of every committed table.
        requests: Every create request received, in order.
        polls: Every readiness poll as (qualified name, table id, poll time).
        ready_after_polls: Polls a table answers "not ready" before "ready".
        commit_then_time_out: When set, the next create commits the table,
            then runs the clock past the deadline and raises a timeout.
    """

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.tables: dict[str, str] = {}
        self.requests: list[CreateTableRequest] = []
        self.polls: list[tuple[str, str | None, float]] = []
        self.ready_after_polls = 0
        self.commit_then_time_out = False
        self.create_error: Exception | None = None
        self._poll_counts: dict[str, int] = {}

    def create_table(self, request: CreateTableRequest, *, deadline: Deadline) -> str:
        self.requests.append(request)
        if self.create_error is not None:
            raise self.create_error

        qualified = f"{request.namespace.name}.{request.name}"
        if qualified in self.tables:
            raise TableAlreadyExistsError(qualified, table_id=self.tables[qualified])

        table_id = request.table_id or f"tbl-{len(self.tables) + 1:04d}"
        self.tables[qualified] = table_id

        if self.commit_then_time_out:
            self.commit_then_time_out = False
            self.clock.advance(deadline.remaining() + 1.0)
            raise CreationTimeoutError(qualified, timeout_seconds=deadline.budget_seconds)
        return table_id

    def is_create_table_done(
        self,
        *,
        name: TableName,
        table_id: str | None,
        deadline: Deadline,
    ) -> bool:
        qualified = str(name)
        self.polls.append((qualified, table_id, self.clock.now))
        count = self._poll_counts.get(qualified, 0) + 1
        self._poll_counts[qualified] = count
        return count > self.ready_after_polls


class FakeTopology:
    """Topology stub returning a fixed recommendation."""

    def __init__(self, recommended: int = 6) -> None:
        self.recommended = recommended
        self.calls: list[TableType] = []
        self.error: Exception | None = None

    def num_tablets_for_user_table(self, table_type: TableType) -> int:
        self.calls.append(table_type)
        if self.error is not None:
            raise self.error
        return self.recommended


@pytest.fixture
def clock() -> FakeClock:
    """Create a manual clock."""
    return FakeClock()


@pytest.fixture
def catalog(clock: FakeClock) -> FakeCatalog:
    """Create an empty in-memory catalog."""
    return FakeCatalog(clock)


@pytest.fixture
def topology() -> FakeTopology:
    """Create a topology stub recommending 6 tablets."""
    return FakeTopology()


@pytest.fixture
def client_config() -> TabletsClientConfig:
    """Create a config with a short default timeout and fast polling."""
    return TabletsClientConfig(
        default_admin_operation_timeout_seconds=10.0,
        readiness=ReadinessPollConfig(
            initial_wait_seconds=0.1,
            max_wait_seconds=1.0,
            multiplier=2.0,
        ),
    )


@pytest.fixture
def client(
    catalog: FakeCatalog,
    topology: FakeTopology,
    client_config: TabletsClientConfig,
    clock: FakeClock,
) -> CatalogClient:
    """Create a CatalogClient wired to the fakes."""
    return CatalogClient(catalog, topology, config=client_config, clock=clock)


@pytest.fixture
def orders_schema() -> TableSchema:
    """Create a two-column schema with a hash key."""
    return (
        SchemaBuilder()
        .add_column("order_id", DataType.INT64, nullable=False, hash_key=True)
        .add_column("total", DataType.DOUBLE)
        .build()
    )
