"""Wire form of the create-table request sent to the catalog."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from floe_tablets.models import (
    IndexInfo,
    PartitionSchema,
    ReplicationInfo,
    TableType,
)
from floe_tablets.schema import SchemaPB


class NamespaceIdentifierPB(BaseModel):
    """Namespace reference by name and, when known, id."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    id: str | None = None


class CreateTableRequest(BaseModel):
    """Create-table request.

    Optional fields left as None are omitted from ``to_wire_dict()`` so the
    catalog applies its own defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str
    namespace: NamespaceIdentifierPB
    table_type: TableType
    schema_: SchemaPB = Field(..., alias="schema")
    num_tablets: int
    partition_schema: PartitionSchema
    creator_role_name: str | None = None
    table_id: str | None = None
    is_pg_catalog_table: bool | None = None
    is_pg_shared_table: bool | None = None
    replication_info: ReplicationInfo | None = None
    index_info: IndexInfo | None = None
    # Pre-IndexInfo scalar copies; see submitter._add_legacy_index_fields.
    indexed_table_id: str | None = None
    is_local_index: bool | None = None
    is_unique_index: bool | None = None

    def to_wire_dict(self) -> dict[str, Any]:
        """Serialize for the catalog RPC, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)
