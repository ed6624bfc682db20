"""
Logging configuration for the netdim API.

This module provides a centralized logging configuration with support for:
- Structured JSON logging in production
- Human-readable console output in development
- Optional file-based logging with rotation
- Request IDs for tracing calculations back to an HTTP call
"""
import contextvars
import json
import logging
import logging.config
import logging.handlers
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request, Response

from .config import Settings, settings as default_settings


# Set per request; each asyncio task sees its own value
request_id_var: "contextvars.ContextVar[str]" = contextvars.ContextVar("request_id", default="system")


class RequestIdFilter(logging.Filter):
    """Add the request_id of the current context to log records."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore
        return True


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    In production, logs are emitted as JSON for easier parsing by log aggregation
    systems. In development, the plain format string is used.
    """
    def __init__(self, *args: Any, is_prod: bool = False, **kwargs: Any) -> None:
        self.is_prod = is_prod
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        if not self.is_prod:
            return super().format(record)

        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "system"),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False)


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Build the ``dictConfig`` mapping for the given settings."""
    fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    level = settings.log_level.upper()

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "json",
            "filters": ["request_id"],
            "stream": "ext://sys.stdout",
        }
    }
    if settings.log_to_file:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "json",
            "filters": ["request_id"],
            "filename": str(logs_dir / "netdim.log"),
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
            "delay": True,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "fmt": fmt,
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "is_prod": settings.app_env.lower() == "production",
            },
        },
        "handlers": handlers,
        "loggers": {
            "netdim": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure logging for the application.

    Sets up console and optional rotating file handlers with a formatter
    chosen from the environment (development/production).
    """
    logging.config.dictConfig(build_logging_config(settings or default_settings))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: The name of the logger. If None, returns the root logger.

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)


def log_request(request: Request, response: Optional[Response] = None, error: Optional[Exception] = None) -> None:
    """
    Log an HTTP request with its response or error.

    Args:
        request: The FastAPI Request object.
        response: The FastAPI Response object (if successful).
        error: Any exception that occurred during request processing.
    """
    logger = get_logger("netdim.http")

    request_id = getattr(request.state, "correlation_id", None) or str(uuid.uuid4())
    request.state.correlation_id = request_id

    request_id_var.set(request_id)

    extra = {
        "method": request.method,
        "url": str(request.url),
        "client": request.client.host if request.client else "unknown",
    }

    if error:
        logger.error("Request failed: %s %s (%s)", request.method, request.url.path, error, extra=extra)
    elif response:
        logger.info(
            "Request processed: %s %s -> %s",
            request.method, request.url.path, response.status_code, extra=extra,
        )
    else:
        logger.info("Request started: %s %s", request.method, request.url.path, extra=extra)
