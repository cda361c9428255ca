import logging
import sys
from logging import Filter, LogRecord

from uvicorn.logging import DefaultFormatter

from azsum.env import log_level

LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(message)s'
ACCESS_LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s'

QUIET_PATHS = ('/favicon.ico', '/healthz', '/metrics')


class AccessLogSuppressor(Filter):
    """
    Drops uvicorn access lines for health checks and metrics scrapes.

    uvicorn logs `client_addr, method, path, http_version, status` as record args,
    so the path is matched as a prefix instead of searching the whole line.
    """

    def __init__(self, paths=QUIET_PATHS):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: LogRecord) -> bool:
        args = record.args

        if isinstance(args, tuple) and len(args) >= 3:
            return not str(args[2]).startswith(self.paths)

        return True


def setup_logging(level=log_level):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(DefaultFormatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler])


def get_logger(name):
    return logging.getLogger(name)


def get_uvicorn_log_config(level=log_level) -> dict:
    """Dict config for uvicorn's own loggers, matching the application format."""

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {'()': 'uvicorn.logging.DefaultFormatter', 'fmt': LOG_FORMAT, 'use_colors': None},
            'access': {'()': 'uvicorn.logging.AccessFormatter', 'fmt': ACCESS_LOG_FORMAT},
        },
        'filters': {
            'quiet_paths': {'()': 'azsum.logs.AccessLogSuppressor'},
        },
        'handlers': {
            'default': {'formatter': 'default', 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout'},
            'access': {
                'formatter': 'access',
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stdout',
                'filters': ['quiet_paths'],
            },
        },
        'loggers': {
            'uvicorn': {'handlers': ['default'], 'level': level, 'propagate': False},
            'uvicorn.error': {'level': level},
            'uvicorn.access': {'handlers': ['access'], 'level': level, 'propagate': False},
        },
    }


setup_logging()
