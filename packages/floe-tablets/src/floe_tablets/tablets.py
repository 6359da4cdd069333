"""Tablet count resolution for new tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from floe_tablets.errors import DependencyFailureError
from floe_tablets.observability import get_logger

if TYPE_CHECKING:
    from floe_tablets.client import TopologyService
    from floe_tablets.models import TableSpecification
    from floe_tablets.schema import SchemaProvider


def resolve_num_tablets(
    spec: TableSpecification,
    schema: SchemaProvider,
    topology: TopologyService,
) -> int:
    """Pick the tablet count for a new table.

    Precedence: explicit count, then the count declared by the schema, then
    one tablet for system tables, then the topology service's recommendation
    for user tables of this type.

    Args:
        spec: The table specification.
        schema: The schema that will be sent, caller-supplied or synthesized.
        topology: Cluster topology collaborator.

    Returns:
        A positive tablet count.

    Raises:
        DependencyFailureError: If the topology service fails or recommends a
            non-positive count.
    """
    logger = get_logger()
    table = str(spec.name)

    if spec.num_tablets > 0:
        logger.debug("num_tablets_explicit", table=table, num_tablets=spec.num_tablets)
        return spec.num_tablets

    declared = schema.declared_num_tablets
    if declared > 0:
        logger.debug("num_tablets_from_schema", table=table, num_tablets=declared)
        return declared

    if spec.name.is_system:
        logger.debug("num_tablets_system_table", table=table, num_tablets=1)
        return 1

    try:
        recommended = topology.num_tablets_for_user_table(spec.table_type)
    except Exception as exc:
        raise DependencyFailureError(
            f"Cannot determine tablet count for {table}",
            dependency="topology",
            cause=str(exc),
        ) from exc
    if recommended <= 0:
        raise DependencyFailureError(
            f"Topology recommended {recommended} tablets for {table}",
            dependency="topology",
        )
    logger.debug("num_tablets_from_topology", table=table, num_tablets=recommended)
    return recommended
