"""Error formatting helpers that keep credentials out of the logs."""

import logging
import re
from typing import Any, Dict, Optional

# Credentials that can appear inside driver error messages
SENSITIVE_PATTERNS = [
    r"password\s*[:=]\s*['\"]?([^'\"\s]+)['\"]?",
    r"mongodb(?:\+srv)?://[^:/@\s]+:([^@\s]+)@",  # Password in connection URL
]


def sanitize_error_message(message: str) -> str:
    """
    Mask credentials found in an error message.

    Args:
        message: The error message to sanitize

    Returns:
        The message with every matched secret replaced by ``***REDACTED***``
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(
            pattern,
            lambda m: (
                m.group(0).replace(m.group(1), "***REDACTED***")
                if m.lastindex
                else m.group(0)
            ),
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def truncate_error_message(error: Exception, max_length: int = 200) -> str:
    """
    Shorten a driver error for a single log line.

    Also sanitizes credentials.

    Args:
        error: The exception to format
        max_length: Maximum length of the returned message

    Returns:
        Truncated and sanitized error message
    """
    error_str = sanitize_error_message(str(error))

    # Server selection failures append the whole topology description
    if "Topology Description" in error_str:
        error_str = error_str.split("Topology Description")[0].strip().rstrip(",")

    if len(error_str) > max_length:
        error_str = error_str[:max_length] + "..."

    return error_str


def safe_log_error(
    logger_instance: logging.Logger,
    message: str,
    exc_info: bool = False,
    extra: Optional[Dict[str, Any]] = None,
    **kwargs
) -> None:
    """
    Log an error after masking credentials in the message and string extras.

    Args:
        logger_instance: The logger instance to use
        message: The error message (will be sanitized)
        exc_info: Whether to include exception info
        extra: Additional context to log
        **kwargs: Additional keyword arguments for logging
    """
    sanitized_message = sanitize_error_message(message)

    sanitized_extra = None
    if extra:
        sanitized_extra = {}
        for key, value in extra.items():
            if isinstance(value, str):
                sanitized_extra[key] = sanitize_error_message(value)
            else:
                sanitized_extra[key] = value

    logger_instance.error(
        sanitized_message, exc_info=exc_info, extra=sanitized_extra, **kwargs
    )
