import logging
import os
from typing import Iterable, Iterator, Optional, Sequence, Set

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_REDACTED_PLACEHOLDER = "[REDACTED]"
_SENSITIVE_KEY_PARTS = ("TOKEN", "SECRET", "KEY", "PASS", "PWD")


def is_sensitive_env_var(name: str) -> bool:
    upper_name = name.upper()
    return any(part in upper_name for part in _SENSITIVE_KEY_PARTS)


def collect_sensitive_values(extra_values: Optional[Iterable[Optional[str]]] = None) -> Sequence[str]:
    """Gather secret-looking environment values plus any explicit extras."""

    secrets: Set[str] = {value for key, value in os.environ.items() if value and is_sensitive_env_var(key)}
    for value in extra_values or ():
        if isinstance(value, str) and value:
            secrets.add(value)
    return tuple(secrets)


class RedactingFormatter(logging.Formatter):
    """Wrap another formatter and mask secrets in everything it emits."""

    def __init__(
        self,
        base_formatter: Optional[logging.Formatter] = None,
        secrets: Optional[Sequence[str]] = None,
        placeholder: str = _REDACTED_PLACEHOLDER,
    ) -> None:
        super().__init__()
        self._base_formatter = base_formatter or logging.Formatter(DEFAULT_FORMAT)
        self._secrets: Sequence[str] = _longest_first(secrets or ())
        self._placeholder = placeholder
        self.converter = self._base_formatter.converter

    @property
    def secrets(self) -> Sequence[str]:
        return self._secrets

    def update_secrets(self, secrets: Sequence[str]) -> None:
        self._secrets = _longest_first(secrets)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, self._placeholder)
        return text

    def format(self, record: logging.LogRecord) -> str:
        return self.redact(self._base_formatter.format(record))

    def formatException(self, ei):
        return self.redact(self._base_formatter.formatException(ei))

    def formatTime(self, record, datefmt=None):
        return self._base_formatter.formatTime(record, datefmt)


def _longest_first(secrets: Iterable[str]) -> Sequence[str]:
    # A secret that contains another one must be masked before it.
    return tuple(sorted(set(secrets), key=len, reverse=True))


def _iter_handlers() -> Iterator[logging.Handler]:
    yield from logging.getLogger().handlers
    for logger_obj in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger_obj, logging.Logger):
            yield from logger_obj.handlers


def configure_logging(
    *,
    level: Optional[str] = None,
    extra_values: Optional[Iterable[Optional[str]]] = None,
) -> None:
    """Configure root logging and redact sensitive values from all handlers."""

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT)
    root_logger.setLevel(level)

    secrets = collect_sensitive_values(extra_values)
    for handler in _iter_handlers():
        formatter = handler.formatter
        if isinstance(formatter, RedactingFormatter):
            formatter.update_secrets(secrets)
        else:
            handler.setFormatter(RedactingFormatter(formatter, secrets))
