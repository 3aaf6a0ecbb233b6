"""Structured logging helpers: request correlation, PII masking and operation timing."""

import hashlib
import inspect
import logging
import re
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, Optional

from src.utils.logging_config import LoggingConfig, get_logger


_correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
# wa.me links carry the number in the path
_WHATSAPP_LINK_RE = re.compile(r"(wa\.me/)\d+")
_PHONE_RE = re.compile(r"\b\+?\d[\d\s().-]{7,}\b")
_CREDENTIAL_RE = re.compile(
    r"(?i)(api[_-]?key|token|secret|password|service_role)[\s:=]+([A-Za-z0-9._-]{20,})"
)

# Structured fields whose values are always masked before emission
SENSITIVE_FIELDS = frozenset({"email", "phone", "whatsapp", "whatsapp_number", "password"})


def generate_correlation_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Bind a correlation id (new one if omitted) for the duration of a request."""
    token = _correlation_id_var.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id_var.get()
    finally:
        _correlation_id_var.reset(token)


def mask_sensitive_data(text: str) -> str:
    """Redact emails, phone / WhatsApp numbers and credentials in free text."""
    if not text or not LoggingConfig.LOG_MASK_SENSITIVE:
        return text

    text = _EMAIL_RE.sub("[REDACTED_EMAIL]", text)
    text = _WHATSAPP_LINK_RE.sub(r"\1[REDACTED_PHONE]", text)
    text = _PHONE_RE.sub("[REDACTED_PHONE]", text)
    return _CREDENTIAL_RE.sub(r"\1=[REDACTED]", text)


def mask_user_id(user_id: str) -> str:
    """Account ids become a 4-char prefix plus a short hash."""
    if not LoggingConfig.LOG_MASK_SENSITIVE or not user_id:
        return user_id

    if len(user_id) > 12:
        hashed = hashlib.sha256(user_id.encode()).hexdigest()[:8]
        return f"{user_id[:4]}...{hashed}"
    return user_id


class StructuredLogger:
    """Wraps a stdlib logger; keyword arguments become JSON fields on the record."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _get_extra(self, **fields: Any) -> Dict[str, Any]:
        extra: Dict[str, Any] = {"timestamp": datetime.now(timezone.utc).isoformat()}

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        for key, value in fields.items():
            if key in SENSITIVE_FIELDS and isinstance(value, str):
                value = mask_sensitive_data(value)
            extra[key] = value
        return extra

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, extra=self._get_extra(**fields), exc_info=exc_info, stacklevel=3)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)

    def exception(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=True, **fields)


def get_structured_logger(name: str) -> StructuredLogger:
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """Log the duration and outcome of the wrapped block; warn above the slow threshold."""
    logger = logger or get_structured_logger(__name__)
    logger.debug(f"Starting {operation_name}", operation=operation_name, **context)

    outcome = "ok"
    start = time.perf_counter()
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            f"Completed {operation_name}",
            operation=operation_name,
            outcome=outcome,
            processing_time_ms=elapsed_ms,
            **context,
        )
        if elapsed_ms > LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                f"Slow operation detected: {operation_name}",
                operation=operation_name,
                processing_time_ms=elapsed_ms,
                threshold_ms=LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS,
                **context,
            )


def timed(operation_name: Optional[str] = None, logger: Optional[StructuredLogger] = None):
    """Decorator form of ``log_timing`` for plain functions and coroutines."""
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or f"{func.__module__}.{func.__name__}"
        log = logger or get_structured_logger(func.__module__)

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                with log_timing(op_name, logger=log):
                    return await func(*args, **kwargs)
            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            with log_timing(op_name, logger=log):
                return func(*args, **kwargs)
        return sync_wrapper

    return decorator
