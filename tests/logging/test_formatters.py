import logging

from profkit.logging.formatters import ProfkitFormatter, APICallFormatter


def _record(msg, args=(), **extra):
    record = logging.LogRecord(
        name="profkit.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_basic_format():
    output = ProfkitFormatter(include_timestamps=False).format(_record("hello"))

    assert output == "INFO [profkit.test] hello"


def test_formatter_process_info():
    output = ProfkitFormatter(include_timestamps=False, include_process_info=True).format(
        _record("hello")
    )
    assert "[PID:" in output


def test_formatter_sanitizes_dict_message():
    output = ProfkitFormatter(include_timestamps=False).format(
        _record({"password": "secret", "host": "mf"})
    )
    assert "secret" not in output
    assert "mf" in output


def test_formatter_sanitizes_args():
    output = ProfkitFormatter(include_timestamps=False).format(
        _record("profile %s %s", ("lpar1", {"tokenValue": "abc"}))
    )
    assert "abc" not in output


def test_formatter_without_sanitizing():
    output = ProfkitFormatter(include_timestamps=False, sanitize_sensitive=False).format(
        _record({"password": "secret"})
    )
    assert "secret" in output


def test_api_formatter_line():
    record = _record(
        "API call completed",
        api_method="POST",
        api_url="https://mf/zosmf/services/authenticate",
        api_status=204,
        api_duration=0.25,
    )
    output = APICallFormatter().format(record)

    assert "POST https://mf/zosmf/services/authenticate -> 204 (250.0ms)" in output


def test_api_formatter_error_line():
    record = _record("API call failed", api_method="DELETE", api_url="https://mf/x",
                     api_error="refused")
    output = APICallFormatter().format(record)

    assert "-> ---" in output
    assert "Error: refused" in output
