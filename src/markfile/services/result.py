"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult. Pipeline
exceptions are converted here, so the CLI never sees a traceback for an
expected failure.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from markfile.errors import MarkfileError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: MarkfileError) -> ServiceError:
        """Carry the kind and message of a pipeline failure."""
        detail: dict[str, Any] = {}
        encoding = getattr(exc, "encoding", None)
        if encoding is not None:
            detail["encoding"] = encoding
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"load"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: MarkfileError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
