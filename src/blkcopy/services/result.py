"""Outcome of a copy run as handed from the service layer to the CLI.

A run either succeeds with its byte counts in ``data`` or fails with a
ServiceError naming the code and the phase (flags, reader, writer, copy)
that stopped it.

INVARIANT: a BlkcopyError never crosses the service boundary as an
exception; it arrives at the CLI as ``ServiceResult(ok=False)``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from blkcopy.domain.errors import BlkcopyError


class ServiceError(BaseModel):
    """Why a run failed: stable code, human message, and ``detail["phase"]``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BlkcopyError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail={"phase": exc.phase})

    @property
    def phase(self) -> str | None:
        return self.detail.get("phase")


class ServiceResult(BaseModel):
    """What a service call produced.

    For ``copy``, ``data`` holds ``source``, ``sink``, ``bytes_read``,
    ``bytes_written``, ``blocks`` and ``transforms``. ``meta`` carries the
    phase timing tree when ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: BlkcopyError) -> ServiceResult:
        """Wrap *exc* as the failed result of *op*."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
