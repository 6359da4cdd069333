"""Catalog collaborators and the client facade.

This module provides:
- CatalogService: Protocol for the catalog RPC endpoint
- TopologyService: Protocol for cluster topology queries
- CatalogClient: Bundles collaborators, config and clock, and hands out
  TableCreator instances
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from floe_tablets.config import TabletsClientConfig
from floe_tablets.deadline import Clock, Deadline, SystemClock

if TYPE_CHECKING:
    from floe_tablets.creator import TableCreator
    from floe_tablets.models import TableName, TableType
    from floe_tablets.wire import CreateTableRequest


class CatalogService(Protocol):
    """The catalog RPC endpoint.

    ``create_table`` returns the id of the created table. It raises
    TableAlreadyExistsError when the name is taken, CreationTimeoutError when
    the deadline passes first, and another FloeCatalogError for any other
    rejection.
    """

    def create_table(self, request: CreateTableRequest, *, deadline: Deadline) -> str: ...

    def is_create_table_done(
        self,
        *,
        name: TableName,
        table_id: str | None,
        deadline: Deadline,
    ) -> bool: ...


class TopologyService(Protocol):
    """Cluster topology queries."""

    def num_tablets_for_user_table(self, table_type: TableType) -> int: ...


class CatalogClient:
    """Entry point for creating tables.

    Holds only immutable configuration and collaborator references, so one
    client can serve concurrent creations of different tables. Each
    TableCreator it returns is single-owner.

    Example:
        >>> client = CatalogClient(catalog, topology)
        >>> table_id = (
        ...     client.new_table_creator()
        ...     .table_name("app.orders")
        ...     .schema(orders_schema)
        ...     .create()
        ... )
    """

    def __init__(
        self,
        catalog: CatalogService,
        topology: TopologyService,
        *,
        config: TabletsClientConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.catalog = catalog
        self.topology = topology
        self.config = config or TabletsClientConfig()
        self.clock = clock or SystemClock()

    @property
    def default_admin_operation_timeout(self) -> float:
        return self.config.default_admin_operation_timeout_seconds

    def new_table_creator(self) -> TableCreator:
        """Return a fresh builder bound to this client."""
        from floe_tablets.creator import TableCreator

        return TableCreator(self)
