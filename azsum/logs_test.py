import logging
import logging.config

from azsum.logs import AccessLogSuppressor, get_uvicorn_log_config


def access_record(path: str) -> logging.LogRecord:
    return logging.LogRecord(
        'uvicorn.access',
        logging.INFO,
        __file__,
        0,
        '%s - "%s %s HTTP/%s" %d',
        ('127.0.0.1:5000', 'GET', path, '1.1', 200),
        None,
    )


class TestAccessLogSuppressor:
    def test_drops_quiet_paths(self):
        '''Test that health checks and metrics scrapes are not logged.'''

        suppressor = AccessLogSuppressor()

        assert not suppressor.filter(access_record('/healthz'))
        assert not suppressor.filter(access_record('/metrics'))
        assert not suppressor.filter(access_record('/favicon.ico'))

    def test_keeps_other_paths(self):
        '''Test that other requests are logged even when a quiet path appears later in the line.'''

        suppressor = AccessLogSuppressor()

        assert suppressor.filter(access_record('/summarize'))
        assert suppressor.filter(access_record('/summarize?next=/metrics'))

    def test_keeps_records_without_access_args(self):
        '''Test that records not shaped like access lines pass through.'''

        record = logging.LogRecord('uvicorn.access', logging.INFO, __file__, 0, 'GET /metrics', None, None)

        assert AccessLogSuppressor().filter(record)


class TestUvicornLogConfig:
    def test_is_valid_dict_config(self):
        '''Test that the uvicorn config loads and puts the suppressor on the access handler.'''

        config = get_uvicorn_log_config('WARNING')
        logging.config.dictConfig(config)

        access_logger = logging.getLogger('uvicorn.access')

        assert access_logger.level == logging.WARNING
        assert any(
            isinstance(f, AccessLogSuppressor) for handler in access_logger.handlers for f in handler.filters
        )
