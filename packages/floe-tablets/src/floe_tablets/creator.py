"""Fluent builder for creating tables and indexes.

Example:
    >>> table_id = (
    ...     client.new_table_creator()
    ...     .table_name("app.orders")
    ...     .schema(orders_schema)
    ...     .add_hash_partitions(["customer_id"], num_buckets=16)
    ...     .num_tablets(8)
    ...     .timeout(30.0)
    ...     .create()
    ... )
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from floe_tablets.models import (
    HashBucketSchema,
    HashSchema,
    IndexInfo,
    RangeSchema,
    ReplicationInfo,
    TableName,
    TableSpecification,
    TableType,
)
from floe_tablets.submitter import CreationSubmitter

if TYPE_CHECKING:
    from floe_tablets.client import CatalogClient
    from floe_tablets.schema import SchemaProvider


class TableCreator:
    """Accumulates a TableSpecification and creates the table.

    Every setter mutates the held specification and returns the creator.
    Setters never validate; ``create()`` does. A creator is single-owner and
    meant for one ``create()`` call.
    """

    def __init__(
        self,
        client: CatalogClient,
        specification: TableSpecification | None = None,
    ) -> None:
        self._client = client
        self._spec = specification or TableSpecification()

    @property
    def specification(self) -> TableSpecification:
        return self._spec

    def table_name(self, name: TableName | str) -> TableCreator:
        """Set the qualified name; strings are split on their last dot."""
        self._spec.name = TableName.parse(name) if isinstance(name, str) else name
        return self

    def table_type(self, table_type: TableType) -> TableCreator:
        self._spec.table_type = table_type
        return self

    def creator_role_name(self, role_name: str) -> TableCreator:
        self._spec.creator_role_name = role_name
        return self

    def table_id(self, table_id: str) -> TableCreator:
        self._spec.table_id = table_id
        return self

    def is_pg_catalog_table(self, value: bool = True) -> TableCreator:
        self._spec.is_pg_catalog_table = value
        return self

    def is_pg_shared_table(self, value: bool = True) -> TableCreator:
        self._spec.is_pg_shared_table = value
        return self

    def hash_schema(self, hash_schema: HashSchema) -> TableCreator:
        self._spec.partition_schema.hash_schema = hash_schema
        return self

    def num_tablets(self, count: int) -> TableCreator:
        self._spec.num_tablets = count
        return self

    def schema(self, schema: SchemaProvider) -> TableCreator:
        """Set the caller-owned schema; the creator keeps a reference only."""
        self._spec.schema_provider = schema
        return self

    def add_hash_partitions(
        self,
        columns: Sequence[str],
        num_buckets: int,
        seed: int = 0,
    ) -> TableCreator:
        """Append a hash bucket schema over ``columns``."""
        self._spec.partition_schema.hash_bucket_schemas.append(
            HashBucketSchema(columns=list(columns), num_buckets=num_buckets, seed=seed)
        )
        return self

    def set_range_partition_columns(self, columns: Sequence[str]) -> TableCreator:
        """Replace the range partition columns."""
        self._spec.partition_schema.range_schema = RangeSchema(columns=list(columns))
        return self

    def replication_info(self, info: ReplicationInfo) -> TableCreator:
        self._spec.replication_info = info
        return self

    def indexed_table_id(self, table_id: str) -> TableCreator:
        self._index_info().indexed_table_id = table_id
        return self

    def is_local_index(self, value: bool) -> TableCreator:
        self._index_info().is_local = value
        return self

    def is_unique_index(self, value: bool) -> TableCreator:
        self._index_info().is_unique = value
        return self

    def use_mangled_column_name(self, value: bool) -> TableCreator:
        self._index_info().use_mangled_column_name = value
        return self

    def timeout(self, seconds: float) -> TableCreator:
        self._spec.timeout = seconds
        return self

    def wait(self, value: bool) -> TableCreator:
        self._spec.wait = value
        return self

    def create(self) -> str | None:
        """Create the table, waiting for readiness unless ``wait(False)``.

        Returns:
            The catalog-assigned table id, or the id of the table that
            already existed.

        Raises:
            InvalidArgumentError: If the name or a required schema is missing.
            DependencyFailureError: If tablet count or schema conversion fails.
            SubmissionError: If the catalog rejects the request.
            CreationTimeoutError: If the deadline passes.
        """
        return CreationSubmitter(self._client).submit(self._spec)

    def _index_info(self) -> IndexInfo:
        if self._spec.index_info is None:
            self._spec.index_info = IndexInfo()
        return self._spec.index_info
