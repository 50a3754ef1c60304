"""Unit tests for the JSON logging setup in logging.py.

Test coverage includes:

1. JsonFormatter output fields (timestamp, level, logger, message)
2. `extra` fields are attached, exception info is serialized
3. initialize_logging() honors LOG_LEVEL
"""

import json
import logging
import sys

import pytest
from freezegun import freeze_time

from linkshortener.utils.logging import JsonFormatter, initialize_logging


def make_record(msg='Shortened %s', args=('https://example.com',), exc_info=None, **extra):
    record = logging.LogRecord(
        name='linkshortener.test',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@freeze_time('2025-12-26 12:00:00')
def test_json_formatter_standard_fields():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'linkshortener.test',
        'message': 'Shortened https://example.com',
    }


def test_json_formatter_extra_fields():
    log = json.loads(JsonFormatter().format(make_record(shortcode='abc123', event='SHORTEN_SUCCESS', attempt=2)))

    assert log['shortcode'] == 'abc123'
    assert log['event'] == 'SHORTEN_SUCCESS'
    assert log['attempt'] == 2


def test_json_formatter_serializes_unknown_types():
    log = json.loads(JsonFormatter().format(make_record(payload={1, 2})))
    assert isinstance(log['payload'], str)


def test_json_formatter_exception_info():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in log['exception']


@pytest.mark.parametrize('level, expected', [('debug', logging.DEBUG), ('WARNING', logging.WARNING), (None, logging.INFO)])
def test_initialize_logging_log_level(monkeypatch, level, expected):
    if level is None:
        monkeypatch.delenv('LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('LOG_LEVEL', level)

    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    try:
        initialize_logging()
        assert root.level == expected
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
