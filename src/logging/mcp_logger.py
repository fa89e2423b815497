"""
Standardized logging setup for the Axiom MCP server.
Uses Python's built-in logging with session correlation for tool calls.
"""

import logging
import sys
import os
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s%(session_part)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SessionColoredFormatter(logging.Formatter):
    """Formatter that prints the component, session and a colored level name."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors=True):
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record):
        session = getattr(record, 'session', '')
        record.session_part = f" {session}" if session else ""

        if not self.use_colors:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{self.COLORS.get(record.levelname, '')}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class SessionContextFilter(logging.Filter):
    """Add the current MCP session to log records."""

    def __init__(self):
        super().__init__()
        self.session_id = None

    def set_context(self, session_id: Optional[str] = None):
        self.session_id = session_id

    def filter(self, record):
        record.session = f"session:{self.session_id[:8]}..." if self.session_id else ""
        return True


class SessionHandler(logging.StreamHandler):
    """stderr handler with session-aware colored formatting."""

    def __init__(self, use_colors=True):
        super().__init__(sys.stderr)
        self.setFormatter(SessionColoredFormatter(use_colors=use_colors))


# stdout is reserved for the stdio transport, so everything goes to stderr
log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
log_level_value = getattr(logging, log_level, logging.INFO)
use_colors = os.getenv('LOG_COLORS', 'true').lower() in ('true', '1', 'yes', 'on')

# Third-party libraries only get warnings and errors
if not logging.getLogger().handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s:%(name)s:%(message)s'))
    logging.getLogger().addHandler(handler)
    logging.getLogger().setLevel(logging.WARNING)

session_filter = SessionContextFilter()


def get_logger(name: str) -> logging.Logger:
    """Get a component logger with session context and colored formatting."""
    logger = logging.getLogger(name)
    if session_filter not in logger.filters:
        logger.addFilter(session_filter)
        if not any(isinstance(h, SessionHandler) for h in logger.handlers):
            logger.addHandler(SessionHandler(use_colors=use_colors))
            logger.propagate = False
            logger.setLevel(log_level_value)
    return logger


def set_session_context(session_id: Optional[str] = None):
    """Set session context for all component loggers."""
    session_filter.set_context(session_id)


# Component-specific loggers
server_logger = get_logger('SERVER')
tool_logger = get_logger('TOOL')


def log_tool_call(tool_name: str, session_id: Optional[str] = None, **params):
    """Helper to log tool execution."""
    set_session_context(session_id)
    extra_str = " | ".join(f"{k}:{str(v)[:50]}" for k, v in params.items() if v is not None)
    tool_logger.info(f"executing {tool_name} | {extra_str}" if extra_str else f"executing {tool_name}")
