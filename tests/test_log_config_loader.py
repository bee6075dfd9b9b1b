import io
import json
import logging

import pytest

from metric_mock.log_config_loader import (
    DEFAULT_LOG_CONFIG,
    JsonFormatter,
    TextFormatter,
    create_formatter,
    load_log_config,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='metric_mock.service',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='Metric descriptor created',
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_default_config_has_standard_fields():
    assert 'levelname' in DEFAULT_LOG_CONFIG['standard_fields']
    assert isinstance(DEFAULT_LOG_CONFIG['standard_fields'], frozenset)


def test_load_log_config_reports_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match='not found'):
        load_log_config(tmp_path / 'absent.json')


def test_load_log_config_rejects_non_object(tmp_path):
    path = tmp_path / 'log_config.json'
    path.write_text('[1, 2]')
    with pytest.raises(RuntimeError, match='Expected JSON object'):
        load_log_config(path)


def test_json_formatter_includes_extras():
    formatter = JsonFormatter(service_name='metric-mock', version='1.2.3')

    line = formatter.format(
        make_record(descriptor='latency', missing_fields={'name'})
    )
    entry = json.loads(line)

    assert entry['service'] == 'metric-mock'
    assert entry['version'] == '1.2.3'
    assert entry['level'] == 'INFO'
    assert entry['message'] == 'Metric descriptor created'
    assert entry['descriptor'] == 'latency'
    assert entry['missing_fields'] == "{'name'}"
    assert 'lineno' not in entry


def test_text_formatter_appends_extras():
    formatter = TextFormatter(service_name='metric-mock', version='1.2.3')

    line = formatter.format(make_record(descriptor='latency'))

    assert '[INFO    ] metric_mock.service: Metric descriptor created' in line
    assert line.endswith('[descriptor=latency]')


def test_unknown_format_falls_back_to_text():
    assert isinstance(create_formatter('xml', 'svc', '1'), TextFormatter)
    assert isinstance(create_formatter('JSON', 'svc', '1'), JsonFormatter)


def test_setup_logging_installs_single_handler(restore_root_logger):
    stream = io.StringIO()

    setup_logging('metric-mock', 'debug', 'json', '0.1.0', stream=stream)
    logging.getLogger('metric_mock.test').debug('hello', extra={'k': 'v'})

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert logging.getLogger('uvicorn.access').level == logging.WARNING
    entry = json.loads(stream.getvalue().splitlines()[-1])
    assert entry['message'] == 'hello'
    assert entry['k'] == 'v'


def test_timestamp_is_utc_iso8601():
    formatter = JsonFormatter(service_name='metric-mock', version='1.2.3')
    record = make_record()
    record.created = 0.25

    entry = json.loads(formatter.format(record))

    assert entry['timestamp'] == '1970-01-01T00:00:00.250+00:00'
