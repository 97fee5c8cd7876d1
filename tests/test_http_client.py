"""Tests for shared HTTP helpers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from common import http_client
from common.logging_utils import safe_url
from repository.errors import TransportError


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(http_client.time, "sleep", lambda _seconds: None)


class TestSafeGet:
    """Test retry and error translation."""

    @patch('common.http_client.requests.request')
    def test_returns_response(self, mock_request):
        mock_request.return_value = MagicMock(status_code=404)

        res = http_client.safe_get("https://gitlab.example.com/api/v4/projects", context="gitlab", verify=False)

        assert res.status_code == 404
        args, kwargs = mock_request.call_args
        assert args == ("GET", "https://gitlab.example.com/api/v4/projects")
        assert kwargs["verify"] is False
        assert kwargs["timeout"] == http_client.Constants.REQUEST_TIMEOUT

    @patch('common.http_client.requests.request')
    def test_retries_connection_errors(self, mock_request):
        mock_request.side_effect = [
            requests.ConnectionError("reset"),
            MagicMock(status_code=200),
        ]

        res = http_client.safe_get("https://gitlab.example.com", context="gitlab")

        assert res.status_code == 200
        assert mock_request.call_count == 2

    @patch('common.http_client.requests.request')
    def test_raises_after_retries(self, mock_request):
        mock_request.side_effect = requests.Timeout("slow")

        with pytest.raises(TransportError):
            http_client.safe_get("https://gitlab.example.com", context="gitlab")
        assert mock_request.call_count == http_client.Constants.HTTP_RETRY_MAX

    @patch('common.http_client.requests.request')
    def test_tls_errors_are_not_retried(self, mock_request):
        mock_request.side_effect = requests.exceptions.SSLError("self signed")

        with pytest.raises(TransportError):
            http_client.safe_head("https://gitlab.example.com", context="gitlab")
        assert mock_request.call_count == 1
        assert mock_request.call_args[0][0] == "HEAD"

    @pytest.mark.parametrize("error", [
        requests.exceptions.MissingSchema("no scheme"),
        requests.exceptions.InvalidURL("bad host"),
        requests.exceptions.InvalidSchema("ftp"),
    ])
    @patch('common.http_client.requests.request')
    def test_invalid_urls_are_not_retried(self, mock_request, error):
        mock_request.side_effect = error

        with pytest.raises(TransportError) as excinfo:
            http_client.safe_get("gitlab.example.com/api/v4/projects", context="gitlab")
        assert mock_request.call_count == 1
        assert "invalid URL" in str(excinfo.value)


class TestSafeUrl:
    """Test token redaction in logged URLs."""

    def test_redacts_token_params(self):
        redacted = safe_url("https://gitlab.example.com/api/v4/projects?private_token=abc&page=2")
        assert "abc" not in redacted
        assert "page=2" in redacted

    def test_leaves_plain_urls(self):
        assert safe_url("https://gitlab.example.com/api/v4/projects") == "https://gitlab.example.com/api/v4/projects"
