"""位置解決サービス"""

from typing import Optional

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinates
from ...geocoding.providers.base import GeocodingClient
from ...summary.providers.wikipedia_client import WikipediaSummaryClient
from ..domain.models import DEFAULT_LOCATION_RECORD, DEFAULT_SUMMARY, LocationRecord

logger = get_logger(__name__)


class LocationResolver:
    """
    座標を LocationRecord に解決するサービス

    逆ジオコーディング → 住所パース → サマリー取得 を1つの操作にまとめる。
    resolve_location は失敗せず、解決できない場合は既定値に縮退する
    """

    def __init__(
        self,
        geocoder: GeocodingClient,
        summary_client: WikipediaSummaryClient,
        default_record: LocationRecord = DEFAULT_LOCATION_RECORD,
    ) -> None:
        """
        Args:
            geocoder: ジオコーディングクライアント
            summary_client: サマリー取得クライアント
            default_record: 解決できない場合に返す地点
        """
        self.geocoder = geocoder
        self.summary_client = summary_client
        self.default_record = default_record

    async def resolve_location(self, coordinates: Coordinates) -> LocationRecord:
        """
        座標を解決

        Args:
            coordinates: 座標

        Returns:
            LocationRecord: 解決済みの地点（住所が得られない場合は既定の地点）
        """
        try:
            address = await self.geocoder.reverse(coordinates)
        except Exception as e:
            logger.error(f"Reverse geocoding raised for {coordinates}: {e}")
            address = None

        if address is None:
            logger.warning(
                f"location unresolved: ({coordinates.lat}, {coordinates.lng}), "
                "using default location"
            )
            return self.default_record

        summary = DEFAULT_SUMMARY
        if address.city:
            try:
                summary = await self.summary_client.lookup(address.city)
            except Exception as e:
                logger.error(f"Summary lookup raised for {address.city}: {e}")
                summary = DEFAULT_SUMMARY
        else:
            logger.debug(f"No city for {coordinates}, skipping summary lookup")

        record = LocationRecord(coordinates=coordinates, address=address, summary=summary)
        logger.info(f"Resolved ({coordinates.lat}, {coordinates.lng}) -> {address.city}")
        return record

    async def locate_place(self, place_name: str) -> Optional[Coordinates]:
        """
        地名を座標に変換（正ジオコーディング）

        Args:
            place_name: 地名

        Returns:
            Optional[Coordinates]: 最初の候補の座標（見つからない・失敗の場合はNone）
        """
        result = await self.geocoder.forward(place_name)

        if result.is_not_found:
            logger.warning(f"No coordinates found for {place_name}")
            return None
        if not result.is_found:
            logger.error(
                f"Geocoding failed for {place_name}: {result.status.value} ({result.detail})"
            )
            return None

        return result.value
