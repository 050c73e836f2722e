"""Tests for AlphaVantageProvider quote lookup with mocked HTTP."""

import pytest
import requests
from unittest.mock import MagicMock, patch

from sources.equity.providers.alpha_vantage import AlphaVantageProvider
from sources.equity.providers.base import (
    DataNotFoundError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitError,
)


GLOBAL_QUOTE = {
    "Global Quote": {
        "01. symbol": "AAPL",
        "02. open": "148.00",
        "03. high": "151.00",
        "04. low": "147.50",
        "05. price": "150.75",
        "06. volume": "12345678",
        "08. previous close": "148.25",
        "09. change": "2.50",
        "10. change percent": "1.69%",
    }
}


def _make_provider():
    provider = AlphaVantageProvider(api_key="test-key")
    provider.session = MagicMock()
    return provider


def _ok(json_data):
    resp = MagicMock()
    resp.json.return_value = json_data
    resp.raise_for_status.return_value = None
    return resp


class TestGetQuote:
    def test_parses_quote(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok(GLOBAL_QUOTE)
        quote = provider.get_quote("aapl")
        assert quote.symbol == "AAPL"
        assert quote.price == pytest.approx(150.75)
        assert quote.change == pytest.approx(2.5)
        assert quote.change_percent == pytest.approx(1.69)
        assert quote.open == pytest.approx(148.0)
        assert quote.high == pytest.approx(151.0)
        assert quote.low == pytest.approx(147.5)
        assert quote.volume == 12345678
        assert quote.previous_close == pytest.approx(148.25)

    def test_serializes_camel_case(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok(GLOBAL_QUOTE)
        dumped = provider.get_quote("AAPL").model_dump(by_alias=True)
        assert dumped["changePercent"] == pytest.approx(1.69)
        assert dumped["previousClose"] == pytest.approx(148.25)

    def test_request_params(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok(GLOBAL_QUOTE)
        provider.get_quote("MSFT")
        args, kwargs = provider.session.get.call_args
        assert args[0] == AlphaVantageProvider.BASE_URL
        assert kwargs["params"]["function"] == "GLOBAL_QUOTE"
        assert kwargs["params"]["symbol"] == "MSFT"
        assert kwargs["params"]["apikey"] == "test-key"
        assert kwargs["timeout"] == 10

    def test_bad_numbers_become_zero(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok({"Global Quote": {"05. price": "n/a", "06. volume": ""}})
        quote = provider.get_quote("AAPL")
        assert quote.price == 0.0
        assert quote.volume == 0
        assert quote.change_percent == 0.0

    def test_empty_quote_not_found(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok({"Global Quote": {}})
        with pytest.raises(DataNotFoundError, match='Stock "NOTFOUND" not found'):
            provider.get_quote("NOTFOUND")

    def test_error_message_not_found(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok({"Error Message": "Invalid API call"})
        with pytest.raises(DataNotFoundError):
            provider.get_quote("AAPL")

    def test_frequency_note_rate_limited(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok({"Note": "Thank you for using Alpha Vantage! Our standard API call frequency is 5 calls per minute"})
        with pytest.raises(RateLimitError):
            provider.get_quote("AAPL")

    def test_information_provider_error(self):
        provider = _make_provider()
        provider.session.get.return_value = _ok({"Information": "Invalid API key"})
        with pytest.raises(ProviderError):
            provider.get_quote("AAPL")

    def test_timeout(self):
        provider = _make_provider()
        provider.session.get.side_effect = requests.exceptions.Timeout("read timed out")
        with pytest.raises(ProviderTimeoutError):
            provider.get_quote("AAPL")

    def test_connection_error(self):
        provider = _make_provider()
        provider.session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(ProviderError):
            provider.get_quote("AAPL")

    def test_http_429_rate_limited(self):
        provider = _make_provider()
        resp = MagicMock()
        resp.status_code = 429
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=resp)
        provider.session.get.return_value = resp
        with pytest.raises(RateLimitError):
            provider.get_quote("AAPL")


class TestApiKey:
    def test_missing_key_raises(self):
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match="Alpha Vantage API key required"):
                AlphaVantageProvider(api_key="")

    def test_key_from_environment(self):
        with patch.dict("os.environ", {"ALPHA_VANTAGE_API_KEY": "env-key"}, clear=True):
            assert AlphaVantageProvider().api_key == "env-key"
