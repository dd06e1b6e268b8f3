import logging
from datetime import date, timezone

import httpx
import pytest

from rate_weather.data_collection.providers import FrankfurterClient, get_provider
from rate_weather.utils.errors import FetchError, ValidationError


class DummyResponse:
    def __init__(self, data, status_code: int = 200, bad_json: bool = False):
        self._data = data
        self.status_code = status_code
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("error", request=None, response=None)


class DummyClient:
    """Stands in for httpx.AsyncClient; records requested URLs."""

    requests = []

    def __init__(self, timeout=None, response=None, should_raise: bool = False):
        self.timeout = timeout
        self._response = response
        self._should_raise = should_raise

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None):
        DummyClient.requests.append((url, params))
        if self._should_raise:
            raise httpx.ConnectError("network error")
        return self._response


@pytest.fixture
def patch_client(monkeypatch):
    DummyClient.requests = []

    def install(data=None, status_code=200, bad_json=False, should_raise=False):
        response = DummyResponse(data, status_code=status_code, bad_json=bad_json)
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda timeout=None: DummyClient(timeout=timeout, response=response, should_raise=should_raise),
        )
        return DummyClient.requests

    return install


def test_client_reads_config():
    client = FrankfurterClient()
    assert client.base_url == "https://frankfurter.test"
    assert client.timeout == 5.0
    assert client.history_days == 30


def test_get_provider():
    assert isinstance(get_provider("frankfurter"), FrankfurterClient)
    with pytest.raises(ValueError):
        get_provider("nope")


@pytest.mark.asyncio
async def test_current_rate_success(patch_client):
    requests = patch_client({"amount": 1.0, "base": "JPY", "date": "2024-05-02", "rates": {"EUR": 0.0061}})

    rate = await FrankfurterClient().get_current_rate("JPY", "EUR")

    assert rate.source == "frankfurter"
    assert rate.rate == 0.0061
    assert rate.currency_pair == "JPY/EUR"
    assert rate.timestamp.tzinfo == timezone.utc
    assert requests == [("https://frankfurter.test/latest", {"from": "JPY", "to": "EUR"})]


@pytest.mark.asyncio
async def test_current_rate_invalid_currency():
    with pytest.raises(ValidationError):
        await FrankfurterClient().get_current_rate("jpy", "EUR")  # lowercase should fail


@pytest.mark.asyncio
async def test_current_rate_http_status_error(patch_client):
    patch_client({"message": "not found"}, status_code=404)
    with pytest.raises(FetchError):
        await FrankfurterClient().get_current_rate("USD", "EUR")


@pytest.mark.asyncio
async def test_current_rate_network_error(patch_client):
    patch_client(should_raise=True)
    with pytest.raises(FetchError):
        await FrankfurterClient().get_current_rate("USD", "EUR")


@pytest.mark.asyncio
async def test_current_rate_unparseable_payload(patch_client):
    patch_client(bad_json=True)
    with pytest.raises(FetchError):
        await FrankfurterClient().get_current_rate("USD", "EUR")


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [
    {"rates": {}},
    {"rates": {"EUR": "0.92"}},
    {"rates": None},
    ["not", "a", "mapping"],
])
async def test_current_rate_missing_or_bad_value(patch_client, data):
    patch_client(data)
    with pytest.raises(FetchError):
        await FrankfurterClient().get_current_rate("USD", "EUR")


@pytest.mark.asyncio
async def test_historical_requests_trailing_window(patch_client):
    requests = patch_client({"rates": {}})

    series = await FrankfurterClient().get_historical_rates("USD", "EUR", today=date(2024, 3, 15))

    assert series.start == date(2024, 2, 14)
    assert series.end == date(2024, 3, 15)
    assert requests == [("https://frankfurter.test/2024-02-14..2024-03-15", {"from": "USD", "to": "EUR"})]


@pytest.mark.asyncio
async def test_historical_orders_by_date(patch_client):
    patch_client({"rates": {
        "2024-03-14": {"EUR": 0.93},
        "2024-03-12": {"EUR": 0.91},
        "2024-03-13": {"EUR": 0.92},
    }})

    series = await FrankfurterClient().get_historical_rates("USD", today=date(2024, 3, 15))

    assert series.rates == [0.91, 0.92, 0.93]
    assert not series.is_empty
    assert len(series) == 3


@pytest.mark.asyncio
async def test_historical_skips_malformed_days(patch_client):
    patch_client({"rates": {
        "2024-03-11": {"EUR": 0.91},
        "2024-03-12": {"USD": 1.0},
        "2024-03-13": {"EUR": "0.92"},
        "2024-03-14": {"EUR": True},
        "2024-03-15": 0.95,
        "2024-03-16": {"EUR": 0.93},
    }})

    series = await FrankfurterClient().get_historical_rates("USD", today=date(2024, 3, 16))

    assert series.rates == [0.91, 0.93]


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs", [
    {"data": {"rates": {"2024-03-11": {"EUR": 0.91}}}, "status_code": 500},
    {"should_raise": True},
    {"bad_json": True},
    {"data": {"rates": "oops"}},
    {"data": {"no_rates": True}},
    {"data": None},
])
async def test_historical_failures_yield_empty_series(patch_client, kwargs):
    patch_client(**kwargs)

    series = await FrankfurterClient().get_historical_rates("JPY", today=date(2024, 3, 16))

    assert series.rates == []
    assert series.is_empty


@pytest.mark.asyncio
async def test_historical_invalid_currency_yields_empty_series():
    series = await FrankfurterClient().get_historical_rates("usd")
    assert series.is_empty


@pytest.mark.asyncio
async def test_health_check(patch_client):
    patch_client({"rates": {"EUR": 0.92}})
    assert await FrankfurterClient().health_check() is True

    patch_client(should_raise=True)
    assert await FrankfurterClient().health_check() is False


@pytest.mark.asyncio
async def test_current_rate_failure_logged_once(patch_client, caplog):
    patch_client(should_raise=True)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(FetchError):
            await FrankfurterClient().get_current_rate("USD", "EUR")

    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert [r.name for r in errors] == ["rate_weather.utils.decorators"]
    assert errors[0].getMessage() == "Failed get_current_rate"
