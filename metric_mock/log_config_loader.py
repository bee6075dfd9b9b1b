from datetime import UTC, datetime
import logging
from pathlib import Path
import sys
from typing import Any, TextIO

import orjson

LOG_CONFIG_PATH = Path(__file__).parent / 'log_config.json'

QUIET_LOGGERS = ('uvicorn.access', 'uvicorn.error', 'asyncio')


def load_log_config(path: Path = LOG_CONFIG_PATH) -> dict[str, Any]:
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise RuntimeError(f'Log config file not found: {path}') from e
    except orjson.JSONDecodeError as e:
        raise RuntimeError(f'Invalid JSON in log config file {path}: {e}') from e

    if not isinstance(data, dict):
        raise RuntimeError(
            f'Expected JSON object in {path}, got {type(data).__name__}'
        )
    data['standard_fields'] = frozenset(data.get('standard_fields') or ())
    return data


DEFAULT_LOG_CONFIG: dict[str, Any] = load_log_config()


class ServiceFormatter(logging.Formatter):
    """Stamps every record with the service identity and its ``extra`` fields."""

    def __init__(self, service_name: str, version: str) -> None:
        super().__init__()
        self.service_name = service_name
        self.version = version
        self.standard_fields: frozenset[str] = DEFAULT_LOG_CONFIG['standard_fields']

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec='milliseconds')

    def extra_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.standard_fields and not key.startswith('_')
        }


class JsonFormatter(ServiceFormatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'service': self.service_name,
            'version': self.version,
            'logger': record.name,
            'message': record.getMessage(),
            **self.extra_fields(record),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        # Extras may hold sets, enums or models; fall back to their str().
        return orjson.dumps(entry, default=str).decode('utf-8')


class TextFormatter(ServiceFormatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = ' '.join(f'[{k}={v}]' for k, v in self.extra_fields(record).items())
        message = f'{record.getMessage()} {extras}'.strip()
        line = (
            f'{self.formatTime(record)} [{record.levelname:<8}] '
            f'{record.name}: {message}'
        )
        if record.exc_info:
            line += f'\n{self.formatException(record.exc_info)}'
        return line


FORMATTERS: dict[str, type[ServiceFormatter]] = {
    'json': JsonFormatter,
    'text': TextFormatter,
}


def create_formatter(
    log_format: str, service_name: str, version: str
) -> ServiceFormatter:
    formatter_cls = FORMATTERS.get(log_format.lower(), TextFormatter)
    return formatter_cls(service_name=service_name, version=version)


def setup_logging(
    service_name: str,
    level: str,
    log_format: str,
    version: str,
    stream: TextIO | None = None,
) -> logging.Handler:
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(create_formatter(log_format, service_name, version))
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    return handler
