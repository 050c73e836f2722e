"""Tests for RequestSession header defaults and failure handling."""

import requests
from unittest.mock import MagicMock, patch

from utils.session import RequestSession


def _make_session(**kwargs):
    with patch("utils.session.UserAgent") as ua:
        ua.return_value.chrome = "Mozilla/5.0 (test) Chrome"
        return RequestSession(**kwargs)


def _response(status_code):
    resp = MagicMock()
    resp.status_code = status_code
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=resp)
    return resp


class TestRequestSession:
    def test_default_headers(self):
        s = _make_session()
        assert s.session.headers["User-Agent"] == "Mozilla/5.0 (test) Chrome"
        assert "Accept-Language" in s.session.headers

    def test_explicit_user_agent_and_headers(self):
        s = _make_session(headers={"Referer": "https://example.com"}, user_agent="custom")
        assert s.session.headers["User-Agent"] == "custom"
        assert s.session.headers["Referer"] == "https://example.com"

    def test_success_returns_response(self):
        s = _make_session(timeout=5)
        resp = _response(200)
        s.session.get = MagicMock(return_value=resp)
        assert s.get("https://example.com", params={"a": 1}) is resp
        s.session.get.assert_called_once_with("https://example.com", params={"a": 1}, timeout=5)

    def test_http_error_returns_none(self):
        s = _make_session()
        s.session.get = MagicMock(return_value=_response(503))
        assert s.get("https://example.com") is None

    def test_timeout_returns_none(self):
        s = _make_session()
        s.session.get = MagicMock(side_effect=requests.exceptions.Timeout())
        assert s.get("https://example.com") is None

    def test_connection_error_returns_none(self):
        s = _make_session()
        s.session.get = MagicMock(side_effect=requests.exceptions.ConnectionError("refused"))
        assert s.get("https://example.com") is None
