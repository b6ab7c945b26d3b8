"""
Thread-safe application logger with 7-day rotating file logs
"""
import logging
import logging.handlers
import threading
from datetime import datetime, timedelta
from pathlib import Path

from app_config import APP_NAME, LOG_FILE
from utils_paths import get_log_dir

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class AppLogger:
    """Logger writing to the console and to a daily rotating file"""

    def __init__(self, log_dir=None):
        self.console_level = logging.INFO
        self._console_lock = threading.Lock()

        self.log_dir = Path(log_dir) if log_dir else Path(get_log_dir())
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_file_logging()
        self._cleanup_old_logs()

    def _setup_file_logging(self):
        """Set up rotating file handler for 7-day logs"""
        # Silence third-party loggers before anything else logs
        for logger_name in ['PIL', 'PIL.PngImagePlugin', 'PIL.BmpImagePlugin']:
            third_party_logger = logging.getLogger(logger_name)
            third_party_logger.setLevel(logging.CRITICAL)
            third_party_logger.propagate = False

        # Dedicated logger for our app (not root logger)
        self.file_logger = logging.getLogger(APP_NAME)
        self.file_logger.setLevel(logging.DEBUG)
        self.file_logger.propagate = False

        # Remove any existing handlers to avoid duplicates
        for handler in list(self.file_logger.handlers):
            self.file_logger.removeHandler(handler)
            handler.close()

        handler = logging.handlers.TimedRotatingFileHandler(
            self.log_dir / LOG_FILE,
            when='midnight',
            interval=1,
            backupCount=7,  # Keep 7 days
            encoding='utf-8'
        )

        # Format: [2025-12-22 18:30:43] INFO     [render_0] - Message
        formatter = logging.Formatter('[%(asctime)s] %(levelname)-8s [%(threadName)s] - %(message)s',
                                      datefmt='%Y-%m-%d %H:%M:%S')
        handler.setFormatter(formatter)

        self.file_logger.addHandler(handler)
        self.file_handler = handler

    def _cleanup_old_logs(self):
        """Delete log files older than 7 days"""
        cutoff = datetime.now() - timedelta(days=7)
        for log_file in self.log_dir.glob(f'{LOG_FILE}*'):
            try:
                mtime = datetime.fromtimestamp(log_file.stat().st_mtime)
                if mtime < cutoff:
                    log_file.unlink()
            except OSError as e:
                print(f"Error cleaning up old log: {e}")

    def get_log_dir(self):
        """Get the log directory path"""
        return str(self.log_dir)

    def get_log_location(self):
        """Get the log file location for display to users"""
        return str(self.log_dir / LOG_FILE)

    def set_console_level(self, level):
        """Minimum level echoed to the console ("DEBUG", "INFO", ...)"""
        self.console_level = _LEVELS.get(level, logging.INFO)

    def log(self, message, level="INFO"):
        """Write a message to the console (if at or above console_level) and file"""
        log_level = _LEVELS.get(level, logging.INFO)

        if log_level >= self.console_level:
            timestamp = datetime.now().strftime('%H:%M:%S')
            with self._console_lock:
                print(f"[{timestamp}] {level}: {message}")

        self.file_logger.log(log_level, message)

    def info(self, message):
        """Log info message"""
        self.log(message, "INFO")

    def error(self, message):
        """Log error message"""
        self.log(message, "ERROR")

    def warning(self, message):
        """Log warning message"""
        self.log(message, "WARN")

    def debug(self, message):
        """Log debug message"""
        self.log(message, "DEBUG")


# Singleton pattern to ensure only one logger instance
_logger_instance = None

def get_app_logger():
    """Get or create the singleton logger instance"""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = AppLogger()
    return _logger_instance

# Global logger instance (singleton)
app_logger = get_app_logger()
