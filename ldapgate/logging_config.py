"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Ldapgate, a product of Garudex Labs

Logging configuration for Ldapgate.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Ldapgate.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if not name.startswith("ldapgate"):
        name = f"ldapgate.{name}"
    return structlog.get_logger(name)


def log_config_validation(
    logger: structlog.stdlib.BoundLogger,
    urls: list,
    accepted: bool,
    rule: Optional[str] = None,
    reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of a client configuration validation.

    Only structural facts are logged. Bind credentials and key material
    must never be passed in ``kwargs``.

    Args:
        logger: Logger instance
        urls: Directory URLs as supplied, before ${ENV_VAR} expansion
        accepted: Whether the configuration was accepted
        rule: Name of the rule that rejected the configuration
        reason: Rejection message
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "config_validation",
        "urls": list(urls),
        "accepted": accepted,
    }

    if rule is not None:
        log_data["rule"] = rule
    if reason is not None:
        log_data["reason"] = reason

    log_data.update(kwargs)

    if accepted:
        logger.info("config_validation", **log_data)
    else:
        logger.warning("config_validation_failed", **log_data)
