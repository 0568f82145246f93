"""ジオコーダーの基底クラス"""

from abc import ABC, abstractmethod
from typing import Optional

from ....shared.logging.config import get_logger
from ..domain.models import Address, Coordinates, GeocodingResult

logger = get_logger(__name__)


class GeocodingClient(ABC):
    """
    ジオコーディングクライアントの抽象基底クラス

    正ジオコーディング（地名 → 座標）と逆ジオコーディング（座標 → 住所）を提供する。
    いずれの操作も例外を送出せず、結果種別またはNoneで失敗を表す
    """

    @abstractmethod
    async def forward(self, place_name: str) -> GeocodingResult[Coordinates]:
        """
        地名を座標に変換（正ジオコーディング）

        Args:
            place_name: 地名（自由入力）

        Returns:
            GeocodingResult[Coordinates]: 最初の候補の座標、NOT_FOUND、または失敗
        """
        pass

    @abstractmethod
    async def reverse_lookup(self, coordinates: Coordinates) -> GeocodingResult[Address]:
        """
        座標を住所に変換（逆ジオコーディング、結果種別付き）

        Args:
            coordinates: 座標

        Returns:
            GeocodingResult[Address]: 住所、NOT_FOUND、または失敗
        """
        pass

    async def reverse(self, coordinates: Coordinates) -> Optional[Address]:
        """
        座標を住所に変換（逆ジオコーディング）

        Returns:
            Optional[Address]: 住所（通信失敗・不正レスポンス・該当なしの場合はNone）
        """
        try:
            result = await self.reverse_lookup(coordinates)
        except Exception as e:
            logger.error(f"Unexpected error during reverse geocoding {coordinates}: {e}")
            return None

        if not result.is_found:
            logger.debug(
                f"Reverse geocoding gave no address for {coordinates}: "
                f"{result.status.value} ({result.detail})"
            )
            return None

        return result.value
