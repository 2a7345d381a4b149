"""Structlog configuration for passkit.

Library modules only call ``structlog.get_logger(__name__)``; applications
that want passkit's processor chain call ``configure_logging()`` once at
startup.
"""

import logging
import typing as t

import structlog

from passkit import settings

# Substrings of event keys whose values are never written to logs
SENSITIVE_KEYS = (
    "password",
    "passin",
    "secret",
    "token",
    "private_key",
    "authorization",
)


def scrub_secrets(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Redact key passwords, authentication tokens and similar values.

    Nested dicts are scrubbed recursively.
    """

    def _scrub_dict(d: dict[str, t.Any]) -> dict[str, t.Any]:
        for key in list(d.keys()):
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                d[key] = "[REDACTED]"
            elif isinstance(d[key], dict):
                d[key] = _scrub_dict(d[key])
        return d

    return _scrub_dict(event_dict)


def build_processors(json: bool) -> list[t.Any]:
    """Processor chain ending in a JSON or console renderer."""
    renderer: t.Any = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        scrub_secrets,  # before rendering
        renderer,
    ]


def configure_logging(json: bool | None = None, level: str | None = None) -> None:
    """Configure structlog for passkit.

    Args:
        json: Render JSON lines instead of console output. Defaults to
            ``settings.PASSKIT_LOG_JSON``.
        level: Minimum log level name. Defaults to ``settings.PASSKIT_LOG_LEVEL``.
    """
    if json is None:
        json = settings.PASSKIT_LOG_JSON
    level_name = (level or settings.PASSKIT_LOG_LEVEL).upper()

    logging.basicConfig(format="%(message)s", level=level_name)
    structlog.configure(
        processors=build_processors(json),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
