"""Pydantic configuration models for floe-tablets.

This module provides:
- ReadinessPollConfig: Backoff policy used while waiting for a new table
- TabletsClientConfig: Client-wide defaults for table creation
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReadinessPollConfig(BaseModel):
    """Backoff policy for readiness polling.

    Polls start at ``initial_wait_seconds`` apart and grow by ``multiplier``
    up to ``max_wait_seconds``. Every sleep is additionally clipped to the
    time left before the creation deadline.

    Example:
        >>> config = ReadinessPollConfig(initial_wait_seconds=0.05)
        >>> config.max_wait_seconds
        2.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_wait_seconds: float = Field(
        default=0.1,
        ge=0.001,
        le=10.0,
        description="Wait before the second readiness poll in seconds",
    )
    max_wait_seconds: float = Field(
        default=2.0,
        ge=0.01,
        le=60.0,
        description="Maximum wait between readiness polls in seconds",
    )
    multiplier: float = Field(
        default=2.0,
        ge=1.0,
        le=10.0,
        description="Growth factor applied to the wait after each poll",
    )

    @field_validator("max_wait_seconds")
    @classmethod
    def max_wait_must_exceed_initial(cls, v: float, info: object) -> float:
        """Validate that max_wait_seconds >= initial_wait_seconds."""
        data = getattr(info, "data", {})
        initial = data.get("initial_wait_seconds", 0.1)
        if v < initial:
            msg = f"max_wait_seconds ({v}) must be >= initial_wait_seconds ({initial})"
            raise ValueError(msg)
        return v


class TabletsClientConfig(BaseModel):
    """Client-wide defaults for table creation.

    Attributes:
        default_admin_operation_timeout_seconds: Budget used when a creator
            does not set its own timeout.
        suppress_created_logs: Skip the info record emitted after a table
            is created.
        readiness: Backoff policy for readiness polling.

    Example:
        >>> config = TabletsClientConfig(default_admin_operation_timeout_seconds=30)
        >>> config.readiness.multiplier
        2.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_admin_operation_timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        le=3600.0,
        description="Default deadline for create requests and readiness polling",
    )
    suppress_created_logs: bool = Field(
        default=False,
        description="Suppress the informational record emitted on creation",
    )
    readiness: ReadinessPollConfig = Field(
        default_factory=ReadinessPollConfig,
        description="Readiness polling backoff",
    )
