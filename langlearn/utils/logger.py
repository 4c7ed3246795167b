"""Centralized logging configuration for the skill service."""
import logging
import os
import sys
import traceback
from collections import deque
from datetime import datetime
from typing import Optional


class ServiceLogger:
    """Service logger with structured extras and a recent-entries buffer."""

    def __init__(self, service_name: str, log_dir: str = "logs", level: str = "INFO",
                 max_buffer_size: int = 100):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)
        self.logger.setLevel(logging.DEBUG)

        # Handlers are attached once per logger name
        if not self.logger.handlers:
            formatter = logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level.upper())
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(log_dir, f"{service_name}.log"))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        # In-memory buffer served by the /logs endpoint
        self.log_buffer = deque(maxlen=max_buffer_size)

    def _add_to_buffer(self, level: str, message: str, extra: Optional[dict] = None):
        self.log_buffer.append({
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "service": self.service_name,
            "message": message,
            "extra": extra or {},
        })

    def debug(self, message: str, **kwargs):
        self.logger.debug(message)
        self._add_to_buffer("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message)
        self._add_to_buffer("INFO", message, kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message)
        self._add_to_buffer("WARNING", message, kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message)
        self._add_to_buffer("ERROR", message, kwargs)

    def exception(self, message: str, exc: BaseException, **kwargs):
        """Log ``exc`` with its traceback; the buffer keeps only the cause summary."""
        self.logger.error(message, exc_info=(type(exc), exc, exc.__traceback__))
        kwargs["cause"] = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        self._add_to_buffer("ERROR", message, kwargs)

    def get_recent_logs(self, limit: int = 50):
        """Get recent log entries for the /logs endpoint."""
        if limit <= 0:
            return []
        return list(self.log_buffer)[-limit:]
