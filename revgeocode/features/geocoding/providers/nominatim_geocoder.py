"""Nominatim (OpenStreetMap) ジオコーディングAPI実装"""
import asyncio
from typing import Any, Optional

from ....shared.exceptions.errors import MalformedResponse, NetworkFailure, ValidationError
from ....shared.http.client import HTTPClient
from ....shared.http.rate_limiter import RateLimiter
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ..domain.models import Address, Coordinates, GeocodingResult
from ..parsers.address_parser import parse_address
from .base import GeocodingClient

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"


class NominatimGeocoder(GeocodingClient):
    """
    Nominatim API実装

    HTTP呼び出しはブロッキングのため、ワーカースレッドで実行する
    """

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        base_url: str = DEFAULT_BASE_URL,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント（Noneの場合は新規作成）
            base_url: NominatimのベースURL
            rate_limiter: レート制限（Noneの場合は1リクエスト/秒）
        """
        self.http_client = http_client or HTTPClient()
        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter or RateLimiter(requests_per_second=1.0)

        logger.info(f"NominatimGeocoder initialized: {self.base_url}")

    async def forward(self, place_name: str) -> GeocodingResult[Coordinates]:
        query = normalize_text(place_name)
        if not query:
            logger.warning("Empty place name provided for geocoding")
            return GeocodingResult.not_found("empty query")

        logger.debug(f"Geocoding place: {query}")

        try:
            data = await asyncio.to_thread(
                self._get_json, "search", {"format": "json", "q": query}
            )
        except NetworkFailure as e:
            return GeocodingResult.network_failure(str(e))
        except MalformedResponse as e:
            return GeocodingResult.malformed(str(e))

        if not isinstance(data, list):
            logger.error(f"Unexpected search payload for {query}: {type(data).__name__}")
            return GeocodingResult.malformed("search payload is not a list")

        if not data:
            logger.warning(f"No geocoding results for place: {query}")
            return GeocodingResult.not_found(query)

        # 最初の候補を使用
        first = data[0]
        try:
            coordinates = Coordinates(lat=float(first["lat"]), lng=float(first["lon"]))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Invalid geocoding result for {query}: {e}")
            return GeocodingResult.malformed(f"invalid candidate: {e}")

        logger.debug(f"Geocoded: {query} -> ({coordinates.lat}, {coordinates.lng})")
        return GeocodingResult.found(coordinates)

    async def reverse_lookup(self, coordinates: Coordinates) -> GeocodingResult[Address]:
        logger.debug(f"Reverse geocoding: ({coordinates.lat}, {coordinates.lng})")

        try:
            data = await asyncio.to_thread(
                self._get_json,
                "reverse",
                {"format": "json", "lat": coordinates.lat, "lon": coordinates.lng},
            )
        except NetworkFailure as e:
            return GeocodingResult.network_failure(str(e))
        except MalformedResponse as e:
            return GeocodingResult.malformed(str(e))

        if not isinstance(data, dict):
            return GeocodingResult.malformed("reverse payload is not an object")

        # 海上など住所がない地点は {"error": "Unable to geocode"} が返る
        if "error" in data:
            logger.warning(
                f"No reverse geocoding result for ({coordinates.lat}, {coordinates.lng}): "
                f"{data['error']}"
            )
            return GeocodingResult.not_found(str(data["error"]))

        components = data.get("address")
        if not isinstance(components, dict):
            logger.error(f"Reverse payload without address for {coordinates}")
            return GeocodingResult.malformed("missing address object")

        address = parse_address(components)
        logger.debug(f"Reverse geocoded: ({coordinates.lat}, {coordinates.lng}) -> {address}")
        return GeocodingResult.found(address)

    def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        """レート制限を守ってGETする（ワーカースレッドで実行）"""
        self.rate_limiter.wait()
        return self.http_client.get_json(f"{self.base_url}/{path}", params=params)
