"""Nominatim ジオコーダーのテスト"""

import asyncio

from revgeocode.features.geocoding.domain.models import Address, Coordinates, LookupStatus
from revgeocode.features.geocoding.providers.nominatim_geocoder import NominatimGeocoder
from revgeocode.shared.exceptions.errors import MalformedResponse, NetworkFailure
from revgeocode.shared.http.rate_limiter import RateLimiter

from fakes import FakeHTTPClient

BASE_URL = "https://nominatim.example.org"


def _geocoder(http_client: FakeHTTPClient) -> NominatimGeocoder:
    return NominatimGeocoder(
        http_client=http_client,  # type: ignore[arg-type]
        base_url=BASE_URL + "/",
        rate_limiter=RateLimiter(min_interval=0),
    )


def test_forward_returns_first_candidate() -> None:
    http_client = FakeHTTPClient(
        [
            {"lat": "47.6603", "lon": "9.1758", "display_name": "Konstanz"},
            {"lat": "10.0", "lon": "10.0", "display_name": "Elsewhere"},
        ]
    )

    result = asyncio.run(_geocoder(http_client).forward("  Konstanz "))

    assert result.is_found
    assert result.value == Coordinates(lat=47.6603, lng=9.1758)
    url, params = http_client.calls[0]
    assert url == f"{BASE_URL}/search"
    assert params == {"format": "json", "q": "Konstanz"}


def test_forward_empty_result_is_not_found() -> None:
    result = asyncio.run(_geocoder(FakeHTTPClient([])).forward("Atlantis"))

    assert result.status == LookupStatus.NOT_FOUND


def test_forward_blank_query_skips_request() -> None:
    http_client = FakeHTTPClient()

    result = asyncio.run(_geocoder(http_client).forward("   "))

    assert result.is_not_found
    assert http_client.calls == []


def test_forward_transport_error_is_failure_not_not_found() -> None:
    http_client = FakeHTTPClient(NetworkFailure("connection reset"))

    result = asyncio.run(_geocoder(http_client).forward("Konstanz"))

    assert result.status == LookupStatus.NETWORK_FAILURE
    assert result.is_failure


def test_forward_invalid_candidate_is_malformed() -> None:
    for payload in ({"unexpected": True}, [{"lat": "abc", "lon": "1"}], [{"lat": "95", "lon": "1"}]):
        result = asyncio.run(_geocoder(FakeHTTPClient(payload)).forward("Konstanz"))
        assert result.status == LookupStatus.MALFORMED_RESPONSE


def test_reverse_parses_address() -> None:
    http_client = FakeHTTPClient(
        {
            "display_name": "Konstanz, Germany",
            "address": {"city": "Konstanz", "country": "Germany", "postcode": "78462"},
        }
    )
    geocoder = _geocoder(http_client)

    address = asyncio.run(geocoder.reverse(Coordinates(lat=47.65, lng=9.45)))

    assert address == Address(city="Konstanz", country="Germany")
    url, params = http_client.calls[0]
    assert url == f"{BASE_URL}/reverse"
    assert params == {"format": "json", "lat": 47.65, "lon": 9.45}


def test_reverse_unable_to_geocode_returns_none() -> None:
    geocoder = _geocoder(FakeHTTPClient({"error": "Unable to geocode"}))

    result = asyncio.run(geocoder.reverse_lookup(Coordinates(lat=0.0, lng=-30.0)))

    assert result.is_not_found
    assert result.detail == "Unable to geocode"


def test_reverse_failures_return_none() -> None:
    coordinates = Coordinates(lat=47.65, lng=9.45)

    for response in (
        NetworkFailure("timeout"),
        MalformedResponse("not json"),
        {"display_name": "no address key"},
        ["not", "an", "object"],
    ):
        geocoder = _geocoder(FakeHTTPClient(response))
        assert asyncio.run(geocoder.reverse(coordinates)) is None
