"""Table schema capability and a concrete column schema.

This module provides:
- SchemaProvider: The capability the creator needs from any schema object
- DataType: Column data types understood by the catalog
- ColumnPB, TablePropertiesPB, SchemaPB: Wire form of a schema
- ColumnSchema, TableProperties, TableSchema: Concrete schema models
- SchemaBuilder: Fluent helper for building a TableSchema
- redis_key_schema: The one-column schema used for key-value tables
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from floe_tablets.errors import InvalidArgumentError

REDIS_KEY_COLUMN_NAME = "key"


class DataType(str, Enum):
    """Column data types."""

    BOOL = "BOOL"
    INT8 = "INT8"
    INT16 = "INT16"
    INT32 = "INT32"
    INT64 = "INT64"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    BINARY = "BINARY"
    TIMESTAMP = "TIMESTAMP"
    DECIMAL = "DECIMAL"
    UUID = "UUID"
    JSONB = "JSONB"


class SortOrder(str, Enum):
    """Sort order of a range key column."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class ColumnPB(BaseModel):
    """Wire form of a single column."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: DataType
    is_nullable: bool = True
    is_key: bool = False
    is_hash_key: bool = False
    sorting_type: SortOrder | None = None


class TablePropertiesPB(BaseModel):
    """Wire form of table-level properties."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_tablets: int = 0
    default_time_to_live: int | None = None
    is_transactional: bool = False


class SchemaPB(BaseModel):
    """Wire form of a table schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    columns: list[ColumnPB]
    table_properties: TablePropertiesPB = Field(default_factory=TablePropertiesPB)

    def with_num_tablets(self, num_tablets: int) -> SchemaPB:
        """Return a copy whose table properties carry ``num_tablets``."""
        properties = self.table_properties.model_copy(update={"num_tablets": num_tablets})
        return self.model_copy(update={"table_properties": properties})


@runtime_checkable
class SchemaProvider(Protocol):
    """What table creation needs from an externally owned schema."""

    @property
    def declared_num_tablets(self) -> int: ...

    def to_wire(self) -> SchemaPB: ...


class ColumnSchema(BaseModel):
    """A single column definition.

    Attributes:
        name: Column name, unique within the table.
        data_type: Column type.
        nullable: Whether the column accepts nulls. Key columns must not.
        is_hash_key: Column participates in the hash part of the primary key.
        is_range_key: Column participates in the range part of the primary key.
        sort_order: Sort order for range key columns.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    data_type: DataType
    nullable: bool = True
    is_hash_key: bool = False
    is_range_key: bool = False
    sort_order: SortOrder | None = None

    @property
    def is_key(self) -> bool:
        return self.is_hash_key or self.is_range_key

    def to_wire(self) -> ColumnPB:
        sorting_type = self.sort_order
        if self.is_range_key and sorting_type is None:
            sorting_type = SortOrder.ASCENDING
        return ColumnPB(
            name=self.name,
            type=self.data_type,
            is_nullable=self.nullable,
            is_key=self.is_key,
            is_hash_key=self.is_hash_key,
            sorting_type=sorting_type,
        )


class TableProperties(BaseModel):
    """Table-level properties carried by a schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_tablets: int = Field(default=0, ge=0)
    default_time_to_live: int | None = Field(default=None, ge=0)
    is_transactional: bool = False


class TableSchema(BaseModel):
    """Concrete schema implementing SchemaProvider.

    Key columns are listed first, hash keys before range keys, matching the
    layout the catalog expects.

    Example:
        >>> schema = (
        ...     SchemaBuilder()
        ...     .add_column("id", DataType.INT64, nullable=False, hash_key=True)
        ...     .add_column("payload", DataType.JSONB)
        ...     .build()
        ... )
        >>> [c.name for c in schema.columns]
        ['id', 'payload']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    columns: list[ColumnSchema]
    table_properties: TableProperties = Field(default_factory=TableProperties)

    @property
    def declared_num_tablets(self) -> int:
        return self.table_properties.num_tablets

    def to_wire(self) -> SchemaPB:
        return SchemaPB(
            columns=[column.to_wire() for column in self.columns],
            table_properties=TablePropertiesPB(
                num_tablets=self.table_properties.num_tablets,
                default_time_to_live=self.table_properties.default_time_to_live,
                is_transactional=self.table_properties.is_transactional,
            ),
        )


class SchemaBuilder:
    """Fluent builder for TableSchema.

    Validation happens in ``build()``.
    """

    def __init__(self) -> None:
        self._columns: list[ColumnSchema] = []
        self._properties = TableProperties()

    def add_column(
        self,
        name: str,
        data_type: DataType,
        *,
        nullable: bool = True,
        hash_key: bool = False,
        range_key: bool = False,
        sort_order: SortOrder | None = None,
    ) -> SchemaBuilder:
        self._columns.append(
            ColumnSchema(
                name=name,
                data_type=data_type,
                nullable=nullable,
                is_hash_key=hash_key,
                is_range_key=range_key,
                sort_order=sort_order,
            )
        )
        return self

    def num_tablets(self, count: int) -> SchemaBuilder:
        self._properties = self._properties.model_copy(update={"num_tablets": count})
        return self

    def default_time_to_live(self, seconds: int) -> SchemaBuilder:
        self._properties = self._properties.model_copy(update={"default_time_to_live": seconds})
        return self

    def transactional(self, value: bool = True) -> SchemaBuilder:
        self._properties = self._properties.model_copy(update={"is_transactional": value})
        return self

    def build(self) -> TableSchema:
        """Validate the accumulated columns and build the schema.

        Raises:
            InvalidArgumentError: If there are no columns, a name repeats,
                a key column is nullable, or no key column is declared.
        """
        if not self._columns:
            raise InvalidArgumentError("Schema has no columns")

        seen: set[str] = set()
        for column in self._columns:
            if column.name in seen:
                raise InvalidArgumentError(
                    f"Duplicate column name: {column.name}",
                    details={"column": column.name},
                )
            seen.add(column.name)
            if column.is_key and column.nullable:
                raise InvalidArgumentError(
                    f"Key column must not be nullable: {column.name}",
                    details={"column": column.name},
                )

        hash_keys = [c for c in self._columns if c.is_hash_key]
        range_keys = [c for c in self._columns if c.is_range_key and not c.is_hash_key]
        if not hash_keys and not range_keys:
            raise InvalidArgumentError("Schema has no primary key columns")
        others = [c for c in self._columns if not c.is_key]

        return TableSchema(
            columns=hash_keys + range_keys + others,
            table_properties=self._properties,
        )


def redis_key_schema() -> TableSchema:
    """Schema for key-value and transaction-status tables.

    One non-null binary column that is the hash primary key.
    """
    return (
        SchemaBuilder()
        .add_column(REDIS_KEY_COLUMN_NAME, DataType.BINARY, nullable=False, hash_key=True)
        .build()
    )
