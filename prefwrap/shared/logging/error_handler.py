"""Structured error logging handler.

- Error logs contain: error_code, stack_trace, context
- to_dict() payload attached to the log record as `structured_error`
- Sensitive context keys and URL credentials are redacted
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import asdict, dataclass, field
from typing import Any
from urllib.parse import urlsplit, urlunsplit


@dataclass(frozen=True)
class StructuredError:
    """Structured representation of a store error for logging."""

    error_code: str
    message: str
    stack_trace: str
    context: dict[str, Any] = field(default_factory=dict)
    store: str = ""
    key: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dict attached to the log record."""
        d = asdict(self)
        if "context" in d:
            d["context"] = _redact_sensitive(d["context"])
        return d


_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "token",
        "secret",
        "api_key",
        "authorization",
        "credential",
    }
)


def _strip_url_credentials(value: str) -> str:
    """Drop the userinfo part of a URL (redis://user:pw@host -> redis://host)."""
    parts = urlsplit(value)
    if not parts.scheme or "@" not in parts.netloc:
        return value
    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, f"[REDACTED]@{host}", parts.path, parts.query, parts.fragment))


def _redact_sensitive(data: dict[str, Any]) -> dict[str, Any]:
    """Redact values of sensitive keys and credentials embedded in URLs."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if key.lower() in _SENSITIVE_KEYS:
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _redact_sensitive(value)
        elif isinstance(value, str) and "://" in value:
            result[key] = _strip_url_credentials(value)
        else:
            result[key] = value
    return result


def create_structured_error(
    exc: Exception,
    *,
    error_code: str = "",
    store: str = "",
    key: str = "",
    context: dict[str, Any] | None = None,
) -> StructuredError:
    """Create a StructuredError from an exception.

    If the exception has a `.code` attribute (e.g. PrefwrapError subclass),
    it is used as the error_code unless overridden.
    """
    code = error_code or getattr(exc, "code", type(exc).__name__)
    stack = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return StructuredError(
        error_code=code,
        message=str(exc),
        stack_trace="".join(stack),
        context=context or {},
        store=store,
        key=key,
    )


def log_structured_error(
    logger: logging.Logger,
    exc: Exception,
    *,
    error_code: str = "",
    store: str = "",
    key: str = "",
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> StructuredError:
    """Log an exception as a structured error.

    Returns the StructuredError so callers can attach it to a re-raised error.
    """
    structured = create_structured_error(
        exc,
        error_code=error_code,
        store=store,
        key=key,
        context=context,
    )
    logger.log(level, "structured_error", extra={"structured_error": structured.to_dict()})
    return structured
