"""テスト用のフェイク（外部APIの代わり）"""

import asyncio
from typing import Any, Optional, Union

from revgeocode.features.geocoding.domain.models import Address, Coordinates, GeocodingResult
from revgeocode.features.geocoding.providers.base import GeocodingClient
from revgeocode.features.location.domain.models import DEFAULT_SUMMARY
from revgeocode.shared.exceptions.errors import NetworkFailure, SummaryError


class FakeHTTPClient:
    """get_json の応答をキューで返すHTTPクライアント"""

    def __init__(self, *responses: Union[Any, Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get_json(self, url: str, params: Optional[dict[str, Any]] = None, headers: Any = None) -> Any:
        self.calls.append((url, dict(params or {})))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        pass


class FakeGeocoder(GeocodingClient):
    """
    座標ごとの逆ジオコーディング結果を返すジオコーダー

    gates に asyncio.Event を登録すると、その座標の応答はイベントがセットされるまで待つ
    """

    def __init__(
        self,
        addresses: Optional[dict[tuple[float, float], Address]] = None,
        places: Optional[dict[str, Coordinates]] = None,
        fail: bool = False,
    ) -> None:
        self.addresses = addresses or {}
        self.places = places or {}
        self.fail = fail
        self.gates: dict[tuple[float, float], asyncio.Event] = {}
        self.reverse_calls: list[Coordinates] = []
        self.forward_calls: list[str] = []

    async def forward(self, place_name: str) -> GeocodingResult[Coordinates]:
        self.forward_calls.append(place_name)
        if self.fail:
            return GeocodingResult.network_failure("connection refused")
        if place_name not in self.places:
            return GeocodingResult.not_found(place_name)
        return GeocodingResult.found(self.places[place_name])

    async def reverse_lookup(self, coordinates: Coordinates) -> GeocodingResult[Address]:
        self.reverse_calls.append(coordinates)
        gate = self.gates.get(coordinates.to_tuple())
        if gate is not None:
            await gate.wait()
        if self.fail:
            return GeocodingResult.network_failure("connection refused")
        address = self.addresses.get(coordinates.to_tuple())
        if address is None:
            return GeocodingResult.not_found()
        return GeocodingResult.found(address)


class RaisingGeocoder(FakeGeocoder):
    """reverse が想定外の例外を送出するジオコーダー"""

    async def reverse(self, coordinates: Coordinates) -> Optional[Address]:
        raise NetworkFailure("socket closed")


class FakeSummaryClient:
    """地名ごとのサマリーを返すクライアント"""

    def __init__(self, summaries: Optional[dict[str, str]] = None, fail: bool = False) -> None:
        self.summaries = summaries or {}
        self.fail = fail
        self.calls: list[str] = []

    async def lookup(self, place_name: str) -> str:
        self.calls.append(place_name)
        if self.fail:
            return DEFAULT_SUMMARY
        return self.summaries.get(place_name, DEFAULT_SUMMARY)


class RaisingSummaryClient(FakeSummaryClient):
    """lookup が例外を送出するクライアント"""

    async def lookup(self, place_name: str) -> str:
        self.calls.append(place_name)
        raise SummaryError(f"Summary service unavailable for {place_name}")


KONSTANZ = Coordinates(lat=47.65, lng=9.45)
BERLIN = Coordinates(lat=52.52, lng=13.405)
