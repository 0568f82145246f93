"""Google Maps Geocoding API実装"""
import asyncio
from typing import Any, Optional

import googlemaps

from ....shared.exceptions.errors import GeocodingError, ValidationError
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ..domain.models import Address, Coordinates, GeocodingResult
from ..parsers.address_parser import parse_address
from .base import GeocodingClient

logger = get_logger(__name__)

# Google の address_components の type → 住所コンポーネントのキー（優先順）
COMPONENT_KEYS: tuple[tuple[str, str], ...] = (
    ("street_number", "street_number"),
    ("route", "road"),
    ("locality", "city"),
    ("postal_town", "town"),
    ("sublocality", "suburb"),
    ("country", "country"),
)

_TRANSPORT_ERRORS = (
    googlemaps.exceptions.TransportError,
    googlemaps.exceptions.HTTPError,
    googlemaps.exceptions.Timeout,
)


def to_component_bag(address_components: list[dict[str, Any]]) -> dict[str, str]:
    """
    Google の address_components を AddressParser が解釈できるキーに変換

    Args:
        address_components: Geocoding APIの address_components

    Returns:
        dict[str, str]: 住所コンポーネント
    """
    bag: dict[str, str] = {}
    for google_type, key in COMPONENT_KEYS:
        for component in address_components:
            if google_type in component.get("types", []):
                bag[key] = component.get("long_name", "")
                break
    return bag


class GoogleMapsGeocoder(GeocodingClient):
    """Google Maps Geocoding API実装"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 10,
        client: Optional[googlemaps.Client] = None,
    ) -> None:
        """
        Args:
            api_key: Google Maps API キー
            timeout: タイムアウト（秒）
            client: 既存のクライアント（指定時は api_key を無視）
        """
        if client is not None:
            self.client = client
        else:
            try:
                self.client = googlemaps.Client(key=api_key, timeout=timeout)
            except Exception as e:
                raise GeocodingError(f"Failed to initialize Google Maps client: {e}") from e

        logger.info("GoogleMapsGeocoder initialized")

    async def forward(self, place_name: str) -> GeocodingResult[Coordinates]:
        query = normalize_text(place_name)
        if not query:
            logger.warning("Empty place name provided for geocoding")
            return GeocodingResult.not_found("empty query")

        try:
            results = await asyncio.to_thread(self.client.geocode, query)
        except _TRANSPORT_ERRORS as e:
            logger.error(f"Google Maps transport error for {query}: {e}")
            return GeocodingResult.network_failure(str(e))
        except googlemaps.exceptions.ApiError as e:
            logger.error(f"Google Maps API error for {query}: {e}")
            return GeocodingResult.network_failure(str(e))

        if not results:
            logger.warning(f"No geocoding results for place: {query}")
            return GeocodingResult.not_found(query)

        # 最初の結果を使用
        location = results[0].get("geometry", {}).get("location", {})
        try:
            coordinates = Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Invalid geocoding result (missing lat/lng): {query}")
            return GeocodingResult.malformed(f"invalid candidate: {e}")

        logger.debug(f"Geocoded: {query} -> ({coordinates.lat}, {coordinates.lng})")
        return GeocodingResult.found(coordinates)

    async def reverse_lookup(self, coordinates: Coordinates) -> GeocodingResult[Address]:
        try:
            results = await asyncio.to_thread(
                self.client.reverse_geocode, coordinates.to_tuple()
            )
        except _TRANSPORT_ERRORS as e:
            logger.error(f"Google Maps transport error for {coordinates}: {e}")
            return GeocodingResult.network_failure(str(e))
        except googlemaps.exceptions.ApiError as e:
            logger.error(f"Google Maps API error for {coordinates}: {e}")
            return GeocodingResult.network_failure(str(e))

        if not results:
            logger.warning(f"No reverse geocoding results for: {coordinates}")
            return GeocodingResult.not_found()

        components = results[0].get("address_components")
        if not isinstance(components, list):
            return GeocodingResult.malformed("missing address_components")

        address = parse_address(to_component_bag(components))
        logger.debug(f"Reverse geocoded: {coordinates} -> {address}")
        return GeocodingResult.found(address)
