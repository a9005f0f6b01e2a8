"""
structlog setup for the profile service.

Log lines go through the stdlib root logger: coloured console output while
developing, one JSON object per line everywhere else. Request-scoped values
such as ``request_id`` and ``user_id`` live in structlog's contextvars.
"""

import logging
import os
import sys
import time

import structlog

SERVICE_NAME = "devconnect-profiles"

_configured = False


def _console_output() -> bool:
    from .config import get_settings

    return get_settings().debug or os.getenv("ENV", "development") == "development"


def _add_service(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: str = "INFO", console: bool | None = None) -> None:
    """
    Install the structlog pipeline. Only the first call has an effect.

    ``console`` selects the human-readable renderer; when omitted it follows
    the debug flag and the ``ENV`` variable.
    """
    global _configured
    if _configured:
        return

    if console is None:
        console = _console_output()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service,
    ]
    if console:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Lazy logger; it picks up the configuration in force at its first call."""
    return structlog.get_logger(name)


def bind_context(**values) -> None:
    """Attach ``values`` to every log line for the rest of the request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_context(**values):
    """Attach ``values`` to log lines inside a ``with`` block only."""
    return structlog.contextvars.bound_contextvars(**values)


class RequestLoggingMiddleware:
    """ASGI middleware writing one ``request_complete`` line per HTTP request."""

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        response_status = 500

        async def capture_status(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, capture_status)
        finally:
            if response_status >= 500:
                emit = self.logger.error
            elif response_status >= 400:
                emit = self.logger.warning
            else:
                emit = self.logger.info
            emit(
                "request_complete",
                method=scope["method"],
                path=scope["path"],
                status_code=response_status,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
