"""Structured logging with correlation IDs.

This module configures structlog for structured JSON logging and provides
``ServiceLogger``, the logger collaborator the service layer writes its
``{entity, action, params, result|error}`` entries through.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from hospeda.core.config import Settings, get_settings


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add a correlation ID to the log entry if none is bound in context.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with correlation_id.
    """
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = f"cid_{uuid.uuid4().hex[:12]}"
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    Args:
        logger: Logger instance.
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with logger name.
    """
    event_dict["logger"] = logger.name if hasattr(logger, "name") else "hospeda"
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON formatting for production and
    console formatting for development.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        rename_message_field,
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=True)
        cache_logger = False
    else:
        renderer = structlog.processors.JSONRenderer()
        cache_logger = True

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_logger,
    )

    # Standard logging for third-party libraries
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "sqlalchemy.engine"]:
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'hospeda'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "hospeda")


class LoggingContext:
    """Context manager for adding logging context.

    Example:
        with LoggingContext(correlation_id="abc123", actor_id="user456"):
            logger.info("Processing request")
    """

    def __init__(self, **kwargs: str) -> None:
        self.context = kwargs

    def __enter__(self) -> "LoggingContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def bind_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current logging context.

    Args:
        correlation_id: The correlation ID to bind to the context.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables from the current logging context."""
    structlog.contextvars.clear_contextvars()


class ServiceLogger:
    """Structured log writer used by the service layer.

    Every entry carries the entity name and the action that produced it.
    Mutations log their result, failures log their error, and permission
    checks log the decision and its reason.
    """

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else get_logger("hospeda.services")

    @property
    def logger(self) -> Any:
        return self._logger

    def log_method_start(self, entity: str, action: str, params: dict[str, Any]) -> None:
        self._logger.debug("Service call started", entity=entity, action=action, params=params)

    def log_method_end(self, entity: str, action: str, result: Any) -> None:
        self._logger.info("Service call finished", entity=entity, action=action, result=result)

    def log_error(
        self,
        entity: str,
        action: str,
        error: Exception,
        params: dict[str, Any] | None = None,
        *,
        unexpected: bool = False,
    ) -> None:
        """Log a failed service call.

        Args:
            entity: Entity name (e.g. ``accommodation``).
            action: Service method name.
            error: The exception that ended the call.
            params: Call parameters.
            unexpected: True for errors translated to INTERNAL_ERROR; those
                are logged with the traceback.
        """
        if unexpected:
            self._logger.error(
                "Service call failed",
                entity=entity,
                action=action,
                params=params or {},
                error=str(error),
                error_type=type(error).__name__,
                exc_info=error,
            )
        else:
            self._logger.warning(
                "Service call rejected",
                entity=entity,
                action=action,
                params=params or {},
                error=str(error),
                error_type=type(error).__name__,
            )

    def log_permission(
        self,
        entity: str,
        action: str,
        actor_id: str | None,
        allowed: bool,
        reason: str,
        entity_id: str | None = None,
    ) -> None:
        """Log a permission grant or denial."""
        if allowed:
            self._logger.debug(
                "Permission granted",
                entity=entity,
                action=action,
                actor_id=actor_id,
                entity_id=entity_id,
                reason=reason,
            )
        else:
            self._logger.info(
                "Permission denied",
                entity=entity,
                action=action,
                actor_id=actor_id,
                entity_id=entity_id,
                reason=reason,
            )
