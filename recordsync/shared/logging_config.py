# recordsync\shared\logging_config.py
import sys
import logging
import structlog
from opentelemetry import trace
from recordsync.shared.config import settings

def add_trace_context(_, __, event_dict):
    """
    Links a log entry to the active `sync.dispatch` span.

    Entries written outside a recording span carry no trace fields at all,
    so CLI output stays terse when tracing is not configured.
    """
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict

def _renderer():
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()

def configure_logging():
    """
    Configures structlog for the sync layer.

    `SyncAdapter.dispatch` binds `sync_verb`, `profile` and `store` as
    contextvars for the duration of a call; `merge_contextvars` folds them
    into every entry logged by the adapter and the storage engine beneath it.
    Everything goes to stderr; stdout belongs to the CLI's JSON output.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # aiofiles and opentelemetry log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
