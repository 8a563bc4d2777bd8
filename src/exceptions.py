"""Exceptions raised by the site generator.

Every error carries a stable ``code`` and a structured ``context`` for
logging. The build records most of them per file or per source and keeps
going; only :class:`ConfigurationError` ends a run before it starts.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base class of the generator's errors.

    Parameters
    ----------
    code : str
        Machine-readable error code, e.g. ``'TEMPLATE_RENDER_ERROR'``.
    message : str
        Human-readable description.
    context : Mapping[str, Any] | None, optional
        Extra values for log output, such as a file path or a tag.

    Examples
    --------
    >>> str(AppError('CODE', 'message', context={'path': 'a.md'}))
    'CODE: message'
    """

    __slots__ = ("code", "message", "context")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigurationError(AppError):
    """Invalid site configuration: bad JSON, env values or page size."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("CONFIGURATION_ERROR", message, context=context)


class DataValidationError(AppError):
    """Source data or Markdown input that cannot be parsed."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("DATA_VALIDATION_ERROR", message, context=context)


class ExternalServiceError(AppError):
    """A data source URL or file that could not be fetched."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("EXTERNAL_SERVICE_ERROR", message, context=context)


class TemplateSyntaxError(AppError):
    """Raised by the strict template parser for unbalanced block tags."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("TEMPLATE_SYNTAX_ERROR", message, context=context)


class TemplateRenderError(AppError):
    """Raised when rendering cannot complete, e.g. a partial includes itself."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("TEMPLATE_RENDER_ERROR", message, context=context)


class FrontMatterError(DataValidationError):
    """Raised when a Markdown file carries an unreadable front matter block."""
