"""
Loguru sinks and the stdlib bridge

Everything ends up in one loguru pipeline:
- application code logs through `Logger.base` / `@Logger.io`
- granian, SQLAlchemy and alembic log through stdlib `logging`, which is
  routed into loguru by InterceptHandler
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import re
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Tests point this at test/test_log
LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

# Booking requests carry the customer's email; never write it to a log line
SENSITIVE_KEYWORDS = frozenset({'customer_email', 'customerEmail'})
MASK = '********'

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


# granian access line: 127.0.0.1 - "POST /api/bookings HTTP/1.1" - 201 - 8ms
_ACCESS_STATUS = re.compile(r'"\s+-\s+(\d{3})\s+-')

_STATUS_LEVELS = (
    (500, 'CRITICAL'),
    (400, 'ERROR'),
    (300, 'WARNING'),
    (200, 'SUCCESS'),
)


def access_log_level(message: str) -> str | None:
    """Level for a granian access line by its status code, None for any other message."""
    if ' HTTP/' not in message or not (match := _ACCESS_STATUS.search(message)):
        return None
    status_code = int(match.group(1))
    return next((level for floor, level in _STATUS_LEVELS if status_code >= floor), 'INFO')


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()

        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _configure(log: 'LoguruLogger') -> None:
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    log.add(sys.stdout, format=io_log_format, level=level, enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
    # Statement echo stays off unless asked for explicitly
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    # Production relies on stdout collection; the file sink is for local runs and tests
    if settings.DEBUG:
        prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
        hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
        log.add(
            f'{LOG_DIR}/{prefix}{hour}.log',
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )


loguru_logger.remove()
custom_logger = loguru_logger.bind(**_default_extra())
_configure(custom_logger)
