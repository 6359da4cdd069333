"""Create-table submission.

CreationSubmitter validates a TableSpecification, builds the wire request,
sends it under an absolute deadline, treats "already exists" as success and
optionally waits for the table to become ready.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from floe_tablets.deadline import Deadline
from floe_tablets.errors import (
    CreationTimeoutError,
    DependencyFailureError,
    FloeCatalogError,
    InvalidArgumentError,
    SubmissionError,
    TableAlreadyExistsError,
)
from floe_tablets.models import IndexInfo
from floe_tablets.observability import catalog_operation, get_logger
from floe_tablets.readiness import ReadinessWaiter
from floe_tablets.schema import SchemaProvider, redis_key_schema
from floe_tablets.tablets import resolve_num_tablets
from floe_tablets.wire import CreateTableRequest, NamespaceIdentifierPB

# Builtin failures raised by catalog transports (TimeoutError is mapped first).
TRANSPORT_ERRORS: tuple[type[Exception], ...] = (ConnectionError, OSError)

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from floe_tablets.client import CatalogClient
    from floe_tablets.models import TableSpecification
    from floe_tablets.schema import SchemaPB


class CreationSubmitter:
    """Turn a TableSpecification into a created (and optionally ready) table.

    Attributes:
        client: CatalogClient supplying collaborators, config and clock.
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        logger: BoundLogger | None = None,
    ) -> None:
        self.client = client
        self._logger = logger or get_logger()
        self._waiter = ReadinessWaiter(
            client.catalog,
            client.config.readiness,
            logger=self._logger,
        )

    def submit(self, spec: TableSpecification) -> str | None:
        """Create the table described by ``spec``.

        Args:
            spec: The accumulated specification. It is read, never modified.

        Returns:
            The table id assigned by the catalog, or the id of the table that
            already existed. None only when the catalog reported an existing
            table without its id and no id was set explicitly.

        Raises:
            InvalidArgumentError: If the name or a required schema is missing,
                or the timeout is not positive.
            DependencyFailureError: If tablet count or schema conversion fails.
            SubmissionError: If the catalog rejects the request or its transport
                fails.
            CreationTimeoutError: If the deadline passes before submission, during
                creation or while waiting for readiness.
        """
        object_type = spec.object_type
        table = str(spec.name)

        if not spec.name.table_name:
            raise InvalidArgumentError(f"Missing {object_type} name")
        if spec.timeout is not None and spec.timeout <= 0:
            raise InvalidArgumentError(
                f"Timeout for {object_type} {table} must be positive",
                details={"timeout_seconds": f"{spec.timeout:g}"},
            )
        schema = self._schema_for(spec)

        with catalog_operation(
            "create_table",
            table=table,
            object_type=object_type,
            table_type=spec.table_type.value,
        ):
            timeout = (
                spec.timeout
                if spec.timeout is not None
                else self.client.default_admin_operation_timeout
            )
            deadline = Deadline.after(timeout, self.client.clock)

            num_tablets = resolve_num_tablets(spec, schema, self.client.topology)
            request = build_request(spec, _schema_to_wire(schema, table), num_tablets)

            if deadline.expired():
                raise CreationTimeoutError(
                    table,
                    timeout_seconds=deadline.budget_seconds,
                    message=f"Deadline passed before {object_type} {table} was submitted",
                )

            created = True
            try:
                table_id = self.client.catalog.create_table(request, deadline=deadline)
            except TableAlreadyExistsError as exc:
                # A retried create may find the table its earlier attempt made.
                created = False
                table_id = exc.table_id or spec.table_id
                self._logger.debug("create_table_already_present", table=table, table_id=table_id)
            except CreationTimeoutError as exc:
                exc.details.setdefault("object_type", object_type)
                raise
            except TimeoutError as exc:
                raise CreationTimeoutError(
                    table,
                    timeout_seconds=deadline.budget_seconds,
                    message=f"Timed out creating {object_type} {table}: {exc}",
                ) from exc
            except (FloeCatalogError, *TRANSPORT_ERRORS) as exc:
                raise SubmissionError(object_type, table, str(exc)) from exc

            if spec.wait:
                self._waiter.wait_until_ready(spec.name, table_id, deadline, log_failure=False)

        if not self.client.config.suppress_created_logs:
            self._logger.info(
                "table_created" if created else "table_already_exists",
                object_type=object_type,
                table=table,
                table_type=spec.table_type.value,
                table_id=table_id,
                num_tablets=num_tablets,
            )
        return table_id

    @staticmethod
    def _schema_for(spec: TableSpecification) -> SchemaProvider:
        """Return the schema to send, synthesizing one where the type implies it.

        The synthesized schema is used for this call only and is never stored
        on the specification.
        """
        if spec.table_type.synthesizes_schema:
            assert spec.schema_provider is None, (
                f"Schema must not be set for {spec.table_type.value} tables"
            )
            return redis_key_schema()
        if spec.schema_provider is None:
            raise InvalidArgumentError("Missing schema")
        return spec.schema_provider


def _schema_to_wire(schema: SchemaProvider, table: str) -> SchemaPB:
    try:
        return schema.to_wire()
    except FloeCatalogError:
        raise
    except Exception as exc:
        raise DependencyFailureError(
            f"Cannot convert schema for {table}",
            dependency="schema",
            cause=str(exc),
        ) from exc


def build_request(
    spec: TableSpecification,
    schema: SchemaPB,
    num_tablets: int,
) -> CreateTableRequest:
    """Assemble the create-table request.

    Optional fields are set only when the caller set them, so the catalog
    applies its own defaults for the rest.

    Args:
        spec: The table specification.
        schema: Wire schema; its table properties are overwritten with
            ``num_tablets``.
        num_tablets: Resolved tablet count.

    Returns:
        The request to send.
    """
    fields: dict[str, object] = {
        "name": spec.name.table_name,
        "namespace": NamespaceIdentifierPB(
            name=spec.name.namespace_name,
            id=spec.name.namespace_id,
        ),
        "table_type": spec.table_type,
        "schema": schema.with_num_tablets(num_tablets),
        "num_tablets": num_tablets,
        "partition_schema": spec.partition_schema.model_copy(deep=True),
        "creator_role_name": spec.creator_role_name or None,
        "table_id": spec.table_id or None,
        "is_pg_catalog_table": spec.is_pg_catalog_table,
        "is_pg_shared_table": spec.is_pg_shared_table,
        "replication_info": spec.replication_info,
    }
    if spec.is_index:
        assert spec.index_info is not None
        fields["index_info"] = spec.index_info.model_copy()
        _add_legacy_index_fields(fields)
    return CreateTableRequest.model_validate(fields)


def _add_legacy_index_fields(fields: dict[str, object]) -> None:
    """Copy IndexInfo into the scalar fields older catalogs read.

    Compatibility scaffolding for catalogs that predate IndexInfo during a
    rolling upgrade. Remove once every supported catalog reads index_info.
    """
    index_info = fields["index_info"]
    assert isinstance(index_info, IndexInfo)
    fields["indexed_table_id"] = index_info.indexed_table_id
    fields["is_local_index"] = index_info.is_local
    fields["is_unique_index"] = index_info.is_unique
