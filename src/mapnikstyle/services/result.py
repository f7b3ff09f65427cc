"""ServiceResult and ServiceError: what every translation operation returns.

INVARIANT: All service-layer methods return ServiceResult; translation errors
never escape the service layer. The CLI formats results and picks the exit
code from ``ok``.

Operations and their payloads:

- ``write_style``: ``data = {"markup", "name", "rules"}``
- ``read_style``: ``data = {"style", "name", "rules"}``
- ``render_filter``: ``data = {"expression"}``
- ``parse_filter``: ``data = {"filter"}``

The two style operations also report ``meta = {"skipped": n}``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    Attributes:
        code: The error type's code (e.g. ``"UNSUPPORTED_OPERATOR"``).
        message: Human-readable description without location.
        detail: Where it happened (``rule_index``, ``rule_name``,
            ``symbolizer_index``, ``position``); empty when unknown.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"write_style"``).
        data: Operation-specific payload on success.
        warnings: One ``Skipped rule ...`` line per rule dropped under
            ``skip_invalid``.
        error: Structured error if ``ok`` is False.
        meta: Counts (``skipped``) for the style operations.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def skipped(self) -> int:
        """Rules dropped under ``skip_invalid`` (0 when not reported)."""
        return (self.meta or {}).get("skipped", 0)

    def with_data(self, *, drop: Iterable[str] = (), **extra: Any) -> ServiceResult:
        """Return a copy whose payload omits *drop* and adds *extra*.

        Commands use this to swap a bulky payload (the markup, the document)
        for a short summary once it has been written to a file.
        """
        dropped = set(drop)
        data = {key: value for key, value in self.data.items() if key not in dropped}
        data.update(extra)
        return self.model_copy(update={"data": data})
