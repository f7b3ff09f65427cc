"""BaseService: abstract foundation for all mapnikstyle services.

Every service receives the write-side :class:`OutputOptions` at construction
time. Services never raise translation errors; they convert them into a
failed :class:`ServiceResult`.
"""

from __future__ import annotations

import logging

from mapnikstyle.config.models import OutputOptions
from mapnikstyle.domain.errors import StyleTranslationError
from mapnikstyle.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class TranslationService(BaseService):
            def write_style(self, source) -> ServiceResult:
                try:
                    ...
                except StyleTranslationError as exc:
                    return self._failure("write_style", exc)
    """

    def __init__(self, options: OutputOptions | None = None) -> None:
        self._options = options or OutputOptions()

    @property
    def options(self) -> OutputOptions:
        return self._options

    @staticmethod
    def _failure(
        op: str,
        exc: StyleTranslationError,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Convert a translation error into a failed result."""
        logger.debug("%s failed: %s", op, exc.message, extra=dict(exc.location))
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=exc.code, message=exc.message, detail=dict(exc.location)),
        )
