"""Tests for the requests-based fetcher, with a mocked Session."""

from unittest.mock import Mock

import pytest
import requests

from seoinspector.core.config import FetchConfig
from seoinspector.core.errors import FetchError
from seoinspector.core.fetch import Fetcher, RequestsFetcher


def _response(status_code=200, text="<html></html>", reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.content = text.encode("utf-8")
    response.reason = reason
    return response


def _fetcher(session, **kwargs):
    session.headers = {}
    return RequestsFetcher(FetchConfig(backoff_seconds=0, **kwargs), session=session)


def test_satisfies_protocol():
    assert isinstance(_fetcher(Mock()), Fetcher)


def test_sets_user_agent():
    session = Mock()
    _fetcher(session, user_agent="test-agent")
    assert session.headers["User-Agent"] == "test-agent"


def test_returns_body():
    session = Mock()
    session.get.return_value = _response(text="<title>Hi</title>")
    assert _fetcher(session).fetch("https://example.com") == "<title>Hi</title>"
    session.get.assert_called_once_with("https://example.com", timeout=15.0)


def test_client_error_fails_without_retry():
    session = Mock()
    session.get.return_value = _response(404, reason="Not Found")
    with pytest.raises(FetchError, match="404 Not Found"):
        _fetcher(session).fetch("https://example.com/missing")
    assert session.get.call_count == 1


def test_server_error_is_retried():
    session = Mock()
    session.get.side_effect = [_response(503, reason="Unavailable"), _response(text="ok")]
    assert _fetcher(session).fetch("https://example.com") == "ok"
    assert session.get.call_count == 2


def test_network_error_exhausts_retries():
    session = Mock()
    session.get.side_effect = requests.ConnectionError("unreachable")
    with pytest.raises(FetchError, match="after 2 attempt"):
        _fetcher(session, max_retries=2).fetch("https://nowhere.invalid")
    assert session.get.call_count == 2


def test_missing_url():
    with pytest.raises(FetchError, match="URL missing"):
        _fetcher(Mock()).fetch("")


def test_close_closes_session():
    session = Mock()
    _fetcher(session).close()
    session.close.assert_called_once_with()
