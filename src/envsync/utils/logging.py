import structlog
import logging
import inspect
import json
import sys
from typing import Any
from ..config import get_settings
from ..config_constants import LogFormat

# Module-level flag to prevent multiple configuration
_logging_configured = False


def _add_module_info(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> structlog.types.EventDict:
    """
    Custom processor to add module information to log records.

    Project modules are shortened to their last two parts
    (e.g. "services.update_service" from "envsync.services.update_service").
    """
    logger_name = event_dict.get('logger', 'unknown')

    if logger_name.startswith('envsync.'):
        module_parts = logger_name.split('.')
        event_dict['module'] = '.'.join(module_parts[-2:])
    else:
        event_dict['module'] = logger_name

    return event_dict


def _pretty_json_renderer(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> str:
    """Render log records as JSON with 2-space indentation."""
    return json.dumps(event_dict, indent=2, ensure_ascii=False, default=str)


def _console_formatter(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> str:
    """
    Console formatter for terminal sessions.

    Formats logs as one line per event with colored level names.
    """
    timestamp = event_dict.get('timestamp', '')
    level = event_dict.get('level', '').upper()
    module = event_dict.get('module', '')
    event = event_dict.get('event', '')

    # Color codes for different log levels
    colors = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    reset = '\033[0m'

    color = colors.get(level, '')

    main_msg = f"{timestamp} {color}[{level}]{reset} {module}: {event}"

    other_fields = []
    skip_fields = {'timestamp', 'level', 'module', 'event', 'logger'}

    for key, value in event_dict.items():
        if key not in skip_fields:
            other_fields.append(f"{key}={value}")

    if other_fields:
        main_msg += f" | {', '.join(other_fields)}"

    return main_msg


def configure_logging() -> None:
    """Configure structured logging for the application."""

    global _logging_configured

    # ---- guard: run only once ----
    if _logging_configured:
        return
    _logging_configured = True

    settings = get_settings()

    # Logs share the terminal with prompts, so they never go to stdout
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.app.log_level.value),
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    if settings.app.log_format == LogFormat.JSON:
        renderer = _pretty_json_renderer
    else:
        renderer = _console_formatter

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,  # Adds 'logger' field with module name
            structlog.stdlib.add_log_level,    # Adds 'level' field
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),  # Adds 'timestamp' field (ISO8601)
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _add_module_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name, typically __name__ to get the module name

    Returns:
        Configured structlog logger

    Usage:
        logger = get_logger(__name__)
        logger.info("Output written", path=".env", keys=12)

        # Output (console format):
        # 2026-01-22T10:30:00Z [INFO] services.update_service: Output written | path=.env, keys=12
    """
    return structlog.get_logger(name)


def get_module_logger() -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the calling module automatically.

    Returns:
        Configured structlog logger for the calling module

    Note:
        Falls back to 'unknown' module name if frame inspection fails.
    """
    module_name = 'unknown'
    frame = None

    try:
        # Get the calling frame to determine the module name
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            caller_frame = frame.f_back
            module_name = caller_frame.f_globals.get('__name__', 'unknown')
    except (AttributeError, RuntimeError):
        # Frame inspection can fail in some environments (e.g., some REPL implementations)
        pass
    finally:
        if frame is not None:
            del frame

    return get_logger(module_name)
