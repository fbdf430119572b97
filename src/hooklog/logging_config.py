"""Structured logging configuration using structlog."""

import logging
import sys

import structlog


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Route hooklog's delivery and request logs through structlog.

    Ingestion and route modules log event-style messages such as
    ``webhook_received`` or ``webhook_signature_mismatch`` via
    ``logging.getLogger(__name__)``. Their ``extra=`` fields (signature
    diagnostics, content type, decode error) are rendered as keys, and the
    trace id, delivery id and event type bound by the trace middleware are
    merged into every line emitted while a delivery is handled. uvicorn's
    own loggers share the same handler because the server runs with
    ``log_config=None``.

    Args:
        log_level: Logging level string (debug/info/warning/error).
        json_output: If True, output JSON (production). If False, colored console (dev).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def bind_request_context(
    trace_id: str,
    delivery_id: str | None = None,
    event_type: str | None = None,
) -> None:
    """Bind per-request fields to the current async context."""
    ctx = {"trace_id": trace_id}
    if delivery_id:
        ctx["delivery_id"] = delivery_id
    if event_type:
        ctx["event_type"] = event_type
    structlog.contextvars.bind_contextvars(**ctx)


def clear_request_context() -> None:
    """Clear bound context variables after a request."""
    structlog.contextvars.clear_contextvars()
