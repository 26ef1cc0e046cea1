import json
import logging
import sys
from unittest import mock

import pytest

from core.logging import JSONFormatter


def _log_record(msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord(
        name="incentive_desk",
        level=logging.WARNING,
        pathname=__file__,
        lineno=12,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(_log_record()))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "incentive_desk"
        assert payload["message"] == "hello world"
        assert payload["line"] == 12

    def test_extra_fields_and_korean_text(self):
        line = JSONFormatter().format(_log_record(msg="%s행", args=(3,), row=3))

        assert "3행" in line
        assert json.loads(line)["row"] == 3

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _log_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in payload["exc_info"]


@pytest.mark.django_db
def test_api_responses_are_not_cached(user_api):
    response = user_api.get("/api/v1/thresholds/")

    assert response.status_code == 200
    assert "no-store" in response["Cache-Control"]
    assert response["Pragma"] == "no-cache"


@pytest.mark.django_db
def test_slow_api_calls_are_logged(user_api, settings):
    settings.API_SLOW_REQUEST_SECONDS = 0

    with mock.patch("core.middleware.logger") as logger:
        user_api.get("/api/v1/thresholds/")

    assert logger.warning.called
    assert "/api/v1/thresholds/" in logger.warning.call_args.args
