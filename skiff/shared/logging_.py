"""Structured logging for Skiff."""
import logging
import sys
from pathlib import Path
from typing import Optional

from skiff.shared.errors import ErrorCode


def setup_logger(
    name: str = "skiff",
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Set up the application logger.

    Module loggers (``logging.getLogger(__name__)``) live under the
    ``skiff`` hierarchy and propagate to the handlers installed here.

    Args:
        name: Logger name
        level: Logging level
        log_file: Optional file path for file handler

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def log_lifecycle_event(
    logger: logging.Logger,
    event: str,
    state: str,
    app_id: Optional[str] = None,
    window: Optional[object] = None,
    action: Optional[str] = None,
    error_code: Optional[ErrorCode] = None,
    message: Optional[str] = None
):
    """
    Log a structured application lifecycle event.

    Args:
        logger: Logger instance
        event: Event name (activate/present/dispatch/transition/...)
        state: Application state after the event
        app_id: Application identifier (optional)
        window: Window involved (optional, logged by identity)
        action: Action name (optional)
        error_code: Error code if the event failed (optional)
        message: Additional message (optional)
    """
    parts = [
        f"event={event}",
        f"state={state}",
    ]

    if app_id:
        parts.append(f"app={app_id}")
    if window is not None:
        parts.append(f"window=0x{id(window):x}")
    if action:
        parts.append(f"action={action}")
    if error_code:
        parts.append(f"error={error_code.name}")
    if message:
        parts.append(f"msg={message}")

    log_msg = " | ".join(parts)

    if error_code:
        logger.error(log_msg)
    elif state == "terminating":
        logger.info(log_msg)
    else:
        logger.debug(log_msg)
