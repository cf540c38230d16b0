import logging
import sys


class _ContextFormatter(logging.Formatter):
    """Appends `key=value` pairs passed as log context to the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context: dict[str, object] = getattr(record, "context", {})
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} | {pairs}"
        return line


class Log:
    """Centralized logging for the ingestion service."""

    _logger: logging.Logger = logging.getLogger("nutrireport")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra={"context": context})

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra={"context": context})

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra={"context": context})

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra={"context": context})
