"""
Centralized exception hierarchy for the page generator.

Every failure during a build (a content query, a manifest write, a page
registration) is raised as one of these types and propagated to the CLI.
Nothing here is recovered locally: a failed build must not publish a
partial site.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception
# =============================================================================


class PageGenError(RuntimeError):
    """
    Base exception for all page generator errors.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details (optional).
        error_code: Machine-readable error code.
        build_id: Identifier of the build that failed (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        error_code: str | None = None,
        build_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.error_code = error_code or self._default_error_code()
        self.build_id = build_id or self._generate_build_id()

    def _default_error_code(self) -> str:
        """Generate default error code from class name."""
        return f"pagegen_{self.__class__.__name__.lower()}"

    def _generate_build_id(self) -> str:
        """Generate build ID if not provided."""
        return str(uuid.uuid4())

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a JSON-friendly report."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.detail:
            result["detail"] = self.detail
        if self.build_id:
            result["build_id"] = self.build_id
        return result

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def log(self, level: int = logging.ERROR) -> None:
        """Log the exception with structured data."""
        logger.log(
            level,
            self.message,
            extra={
                "error_code": self.error_code,
                "detail": self.detail,
                "build_id": self.build_id,
                "exception_type": self.__class__.__name__,
            },
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PageGenError):
    """Raised when a setting has an invalid value."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        value: Any = None,
        build_id: str | None = None,
    ) -> None:
        self.setting = setting
        self.value = value
        detail = f"{setting}={value!r}" if setting else None
        super().__init__(
            message,
            detail=detail,
            error_code="configuration_error",
            build_id=build_id,
        )


# =============================================================================
# Content Source Errors
# =============================================================================


class ContentSourceError(PageGenError):
    """
    Raised when content nodes cannot be loaded.

    Covers unreadable files, malformed JSON and records that fail model
    validation.
    """

    def __init__(
        self,
        message: str,
        *,
        content_type: str | None = None,
        path: str | None = None,
        build_id: str | None = None,
    ) -> None:
        self.content_type = content_type
        self.path = path
        detail_parts = []
        if content_type:
            detail_parts.append(f"Content type: {content_type}")
        if path:
            detail_parts.append(f"Path: {path}")
        detail = "; ".join(detail_parts) if detail_parts else None
        super().__init__(
            message,
            detail=detail,
            error_code="content_source_error",
            build_id=build_id,
        )


class ContentQueryError(ContentSourceError):
    """Raised when a (possibly filtered) content query fails."""

    def __init__(
        self,
        content_type: str,
        *,
        language: str | None = None,
        topic: str | None = None,
        reason: str = "Query failed",
        build_id: str | None = None,
    ) -> None:
        super().__init__(
            reason,
            content_type=content_type,
            build_id=build_id,
        )
        self.language = language
        self.topic = topic
        if language is not None or topic is not None:
            self.detail = f"{self.detail}; Filter: language={language!r}, topic={topic!r}"


# =============================================================================
# Output Errors
# =============================================================================


class ManifestWriteError(PageGenError):
    """Raised when a filter manifest cannot be written to disk."""

    def __init__(
        self,
        path: str,
        *,
        reason: str | None = None,
        build_id: str | None = None,
    ) -> None:
        self.path = path
        detail = f"Path: {path}"
        if reason:
            detail = f"{detail}; {reason}"
        super().__init__(
            "Failed to write filter manifest",
            detail=detail,
            error_code="manifest_write_error",
            build_id=build_id,
        )


class PageConflictError(PageGenError):
    """Raised when two pages are registered at the same path."""

    def __init__(
        self,
        path: str,
        *,
        existing_template: str | None = None,
        build_id: str | None = None,
    ) -> None:
        self.path = path
        self.existing_template = existing_template
        detail = f"Path: {path}"
        if existing_template:
            detail = f"{detail}; already registered with template {existing_template!r}"
        super().__init__(
            "Duplicate page path",
            detail=detail,
            error_code="page_conflict",
            build_id=build_id,
        )


class PageWriteError(PageGenError):
    """Raised when a registered page cannot be persisted."""

    def __init__(
        self,
        path: str,
        *,
        output_path: str | None = None,
        build_id: str | None = None,
    ) -> None:
        self.path = path
        self.output_path = output_path
        detail_parts = [f"Page: {path}"]
        if output_path:
            detail_parts.append(f"Output: {output_path}")
        super().__init__(
            "Failed to write page data",
            detail="; ".join(detail_parts),
            error_code="page_write_error",
            build_id=build_id,
        )


class EmptyTrackError(PageGenError):
    """Raised when a track has no videos to build a landing page from."""

    def __init__(
        self,
        track_slug: str,
        *,
        build_id: str | None = None,
    ) -> None:
        self.track_slug = track_slug
        super().__init__(
            "Track has no videos",
            detail=f"Track: {track_slug!r}",
            error_code="empty_track",
            build_id=build_id,
        )
