"""Pydantic data models for table creation.

This module provides:
- TableType: Category of table being created
- HashSchema: Hash partitioning flavour
- TableName: Namespace-qualified table name
- HashBucketSchema, RangeSchema, PartitionSchema: Partitioning description
- PlacementBlock, ReplicationInfo: Placement constraints
- IndexInfo: Association between an index and its base table
- TableSpecification: Everything accumulated by a TableCreator
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from floe_tablets.schema import SchemaProvider

SYSTEM_NAMESPACES = frozenset(
    {
        "system",
        "system_auth",
        "system_distributed",
        "system_platform",
        "system_schema",
        "system_traces",
    }
)


class TableType(str, Enum):
    """Category of table being created.

    Key-value (Redis-compatible) and transaction-status tables carry a
    synthesized one-column schema; every other type needs a caller schema.
    """

    YQL_TABLE_TYPE = "YQL_TABLE_TYPE"
    REDIS_TABLE_TYPE = "REDIS_TABLE_TYPE"
    PGSQL_TABLE_TYPE = "PGSQL_TABLE_TYPE"
    TRANSACTION_STATUS_TABLE_TYPE = "TRANSACTION_STATUS_TABLE_TYPE"

    @property
    def synthesizes_schema(self) -> bool:
        return self in (TableType.REDIS_TABLE_TYPE, TableType.TRANSACTION_STATUS_TABLE_TYPE)


class HashSchema(str, Enum):
    """Hash partitioning flavour."""

    MULTI_COLUMN_HASH_SCHEMA = "MULTI_COLUMN_HASH_SCHEMA"
    REDIS_HASH_SCHEMA = "REDIS_HASH_SCHEMA"
    PGSQL_HASH_SCHEMA = "PGSQL_HASH_SCHEMA"


class TableName(BaseModel):
    """Namespace-qualified table name.

    Both parts may be empty here; an empty table name is rejected when the
    table is created, not when the name is built.

    Example:
        >>> name = TableName.parse("system.transactions")
        >>> name.is_system
        True
        >>> str(name)
        'system.transactions'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace_name: str = ""
    table_name: str = ""
    namespace_id: str | None = None

    @classmethod
    def parse(cls, qualified: str) -> TableName:
        """Split ``namespace.table`` on its last dot."""
        namespace, _, table = qualified.rpartition(".")
        return cls(namespace_name=namespace, table_name=table)

    @property
    def is_system(self) -> bool:
        return self.namespace_name in SYSTEM_NAMESPACES

    def __str__(self) -> str:
        if not self.namespace_name:
            return self.table_name
        return f"{self.namespace_name}.{self.table_name}"


class HashBucketSchema(BaseModel):
    """Columns hashed into ``num_buckets`` buckets with ``seed``."""

    model_config = ConfigDict(extra="forbid")

    columns: list[str]
    num_buckets: int
    seed: int = 0


class RangeSchema(BaseModel):
    """Columns defining the range sort order."""

    model_config = ConfigDict(extra="forbid")

    columns: list[str]


class PartitionSchema(BaseModel):
    """Hash and/or range partitioning description."""

    model_config = ConfigDict(extra="forbid")

    hash_schema: HashSchema | None = None
    hash_bucket_schemas: list[HashBucketSchema] = Field(default_factory=list)
    range_schema: RangeSchema | None = None


class PlacementBlock(BaseModel):
    """A cloud/region/zone with a minimum replica count."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cloud: str
    region: str
    zone: str
    min_num_replicas: int = Field(default=1, ge=0)


class ReplicationInfo(BaseModel):
    """Placement and replication constraints.

    The catalog checks that the per-block minimums fit within
    ``num_replicas``; a mismatch comes back as a rejected create request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_replicas: int = Field(..., ge=1)
    placement_blocks: list[PlacementBlock] = Field(default_factory=list)
    placement_uuid: str | None = None


class IndexInfo(BaseModel):
    """Links an index to the table it indexes."""

    model_config = ConfigDict(extra="forbid")

    indexed_table_id: str | None = None
    is_local: bool = False
    is_unique: bool = False
    use_mangled_column_name: bool = False


class TableSpecification(BaseModel):
    """Everything a TableCreator accumulates before submission.

    Mutable and single-owner. Validation happens at submission, not on
    assignment, so any combination of fields can be set in any order.

    Attributes:
        name: Qualified table name.
        table_type: Category of table.
        creator_role_name: Role recorded as the table's creator.
        table_id: Pre-assigned id; the catalog assigns one when unset.
        is_pg_catalog_table: Tri-state; None lets the catalog decide.
        is_pg_shared_table: Tri-state; None lets the catalog decide.
        partition_schema: Hash and range partitioning.
        replication_info: Placement constraints; catalog default when None.
        index_info: Set only when creating an index.
        schema_provider: Externally owned schema.
        num_tablets: Explicit tablet count; 0 means not set.
        timeout: Budget in seconds for create and wait; client default when None.
        wait: Block until the table is ready.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    name: TableName = Field(default_factory=TableName)
    table_type: TableType = TableType.YQL_TABLE_TYPE
    creator_role_name: str | None = None
    table_id: str | None = None
    is_pg_catalog_table: bool | None = None
    is_pg_shared_table: bool | None = None
    partition_schema: PartitionSchema = Field(default_factory=PartitionSchema)
    replication_info: ReplicationInfo | None = None
    index_info: IndexInfo | None = None
    schema_provider: SchemaProvider | None = None
    num_tablets: int = 0
    timeout: float | None = None
    wait: bool = True

    @property
    def is_index(self) -> bool:
        return self.index_info is not None and bool(self.index_info.indexed_table_id)

    @property
    def object_type(self) -> str:
        return "index" if self.is_index else "table"
