"""floe-tablets: client-side table creation for tablet-based catalogs.

This package provides:
- A fluent TableCreator for tables and indexes
- Tablet count defaults derived from schema and cluster topology
- Deadline-bounded create requests that tolerate "already exists" on retry
- Readiness polling so a created table is usable on return
- Structured logging via structlog and OpenTelemetry span tracing

Example:
    >>> from floe_tablets import CatalogClient, DataType, SchemaBuilder
    >>> schema = (
    ...     SchemaBuilder()
    ...     .add_column("id", DataType.INT64, nullable=False, hash_key=True)
    ...     .add_column("total", DataType.DOUBLE)
    ...     .build()
    ... )
    >>> client = CatalogClient(catalog, topology)
    >>> table_id = client.new_table_creator().table_name("app.orders").schema(schema).create()
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Client
    "CatalogClient",
    "CatalogService",
    "TopologyService",
    # Builder
    "TableCreator",
    # Configuration models
    "TabletsClientConfig",
    "ReadinessPollConfig",
    # Data models
    "TableName",
    "TableType",
    "HashSchema",
    "ReplicationInfo",
    "PlacementBlock",
    "TableSpecification",
    # Schema
    "DataType",
    "SchemaBuilder",
    "TableSchema",
    "SchemaProvider",
    # Exceptions
    "FloeCatalogError",
    "InvalidArgumentError",
    "DependencyFailureError",
    "TableAlreadyExistsError",
    "SubmissionError",
    "CreationTimeoutError",
    "CatalogConnectionError",
]


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    if name in ("CatalogClient", "CatalogService", "TopologyService"):
        from floe_tablets import client as client_module

        return getattr(client_module, name)
    if name == "TableCreator":
        from floe_tablets.creator import TableCreator

        return TableCreator
    if name in ("TabletsClientConfig", "ReadinessPollConfig"):
        from floe_tablets import config as config_module

        return getattr(config_module, name)
    if name in (
        "TableName",
        "TableType",
        "HashSchema",
        "ReplicationInfo",
        "PlacementBlock",
        "TableSpecification",
    ):
        from floe_tablets import models as models_module

        return getattr(models_module, name)
    if name in ("DataType", "SchemaBuilder", "TableSchema", "SchemaProvider"):
        from floe_tablets import schema as schema_module

        return getattr(schema_module, name)
    if name in (
        "FloeCatalogError",
        "InvalidArgumentError",
        "DependencyFailureError",
        "TableAlreadyExistsError",
        "SubmissionError",
        "CreationTimeoutError",
        "CatalogConnectionError",
    ):
        from floe_tablets import errors as errors_module

        return getattr(errors_module, name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
