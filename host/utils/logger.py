# host/utils/logger.py
import datetime
import traceback
from typing import Callable, Optional

class LogLevel:
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4 # Only fatal errors

    NAMES = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARN",
        ERROR: "ERROR",
        CRITICAL: "CRIT"
    }

    @classmethod
    def from_name(cls, name: str) -> int:
        """Resolves 'debug', 'WARN', 'warning', etc. to a level constant."""
        lookup = name.strip().upper()
        if lookup == "WARNING": lookup = "WARN"
        if lookup == "CRITICAL": lookup = "CRIT"
        for level, level_name in cls.NAMES.items():
            if level_name == lookup:
                return level
        raise ValueError(f"Unknown log level '{name}'")

class Logger:
    _instance = None
    _level = LogLevel.DEBUG  # Default level
    _sink: Callable[[str], None] = print

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
        return cls._instance

    @classmethod
    def set_level(cls, level: int):
        """Sets the minimum logging level."""
        cls._level = level

    @classmethod
    def get_level(cls) -> int:
        return cls._level

    @classmethod
    def set_sink(cls, sink: Optional[Callable[[str], None]] = None):
        """Redirects formatted lines to `sink`. Passing None restores print."""
        cls._sink = sink if sink is not None else print

    @classmethod
    def _log(cls, level: int, source: str, message: str):
        if level >= cls._level:
            timestamp = datetime.datetime.now().strftime("%H:%M:%S")
            level_name = LogLevel.NAMES.get(level, "LOG")

            # Format: [TIME] [LEVEL] [Source] Message
            cls._sink(f"[{timestamp}] [{level_name:<5}] [{source}] {message}")

    @classmethod
    def debug(cls, source: str, message: str):
        cls._log(LogLevel.DEBUG, source, message)

    @classmethod
    def info(cls, source: str, message: str):
        cls._log(LogLevel.INFO, source, message)

    @classmethod
    def warning(cls, source: str, message: str):
        cls._log(LogLevel.WARNING, source, message)

    @classmethod
    def error(cls, source: str, message: str):
        cls._log(LogLevel.ERROR, source, message)

    @classmethod
    def critical(cls, source: str, message: str):
        cls._log(LogLevel.CRITICAL, source, message)

    @classmethod
    def exception(cls, source: str, message: str, exc: BaseException):
        """Logs an error followed by the traceback of `exc`."""
        cls._log(LogLevel.ERROR, source, f"{message}: {exc!r}")
        if LogLevel.ERROR >= cls._level:
            details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            for line in details.rstrip().splitlines():
                cls._sink(f"    {line}")
