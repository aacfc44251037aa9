# transparency/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_DIR = settings.LOGS_PATH
LOG_DIR.mkdir(parents=True, exist_ok=True)

verbose_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)

# Keys the logging module sets on every LogRecord
RESERVED_ATTRS = frozenset({
    'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
    'funcName', 'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'msg', 'name', 'pathname', 'process', 'processName',
    'relativeCreated', 'stack_info', 'thread', 'threadName', 'taskName'
})


class TransparencyLogger:
    """Logger wrapper that keeps caller `extra` keys from clobbering LogRecord attributes"""
    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)
        self.setup_handlers()

    def setup_handlers(self):
        """Set up file and console handlers"""
        if self.logger.handlers:
            return

        file_handler = RotatingFileHandler(
            LOG_DIR / f"{self.logger.name}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(verbose_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(verbose_formatter)
        self.logger.addHandler(console_handler)

    @staticmethod
    def _sanitize_extra(extra):
        if extra is None:
            return None
        return {
            (f"extra_{key}" if key in RESERVED_ATTRS else key): value
            for key, value in extra.items()
        }

    def debug(self, msg, extra=None, exc_info=None):
        self.logger.debug(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self.logger.info(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self.logger.warning(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self.logger.error(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self.logger.critical(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

api_logger = TransparencyLogger("api")
db_logger = TransparencyLogger("database")
service_logger = TransparencyLogger("service")
stream_logger = TransparencyLogger("stream")

__all__ = ["api_logger", "db_logger", "service_logger", "stream_logger"]
