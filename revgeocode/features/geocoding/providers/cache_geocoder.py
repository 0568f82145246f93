"""キャッシュ付きジオコーダー"""

from typing import Union

from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ..domain.models import Address, Coordinates, GeocodingResult
from .base import GeocodingClient

logger = get_logger(__name__)


class CacheGeocoder(GeocodingClient):
    """
    キャッシュ付きジオコーダー

    同じ地点・地名へのAPI呼び出しを削減するため、メモリ内キャッシュを使用。
    失敗（通信エラー・不正レスポンス）はキャッシュしない
    """

    def __init__(self, geocoder: GeocodingClient) -> None:
        """
        Args:
            geocoder: ベースとなるジオコーダー
        """
        self.geocoder = geocoder
        self.cache: dict[str, Union[GeocodingResult[Coordinates], GeocodingResult[Address]]] = {}
        self.hit_count = 0
        self.miss_count = 0

        logger.info("CacheGeocoder initialized")

    async def forward(self, place_name: str) -> GeocodingResult[Coordinates]:
        cache_key = f"q:{(normalize_text(place_name) or '').lower()}"

        if cache_key in self.cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for place: {place_name}")
            return self.cache[cache_key]

        self.miss_count += 1
        logger.debug(f"Cache miss for place: {place_name}")

        result = await self.geocoder.forward(place_name)
        if not result.is_failure:
            self.cache[cache_key] = result

        return result

    async def reverse_lookup(self, coordinates: Coordinates) -> GeocodingResult[Address]:
        # 座標をキーとして使用（小数点以下6桁で丸める）
        cache_key = f"c:{coordinates.lat:.6f},{coordinates.lng:.6f}"

        if cache_key in self.cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for coordinates: ({coordinates.lat}, {coordinates.lng})")
            return self.cache[cache_key]

        self.miss_count += 1
        logger.debug(f"Cache miss for coordinates: ({coordinates.lat}, {coordinates.lng})")

        result = await self.geocoder.reverse_lookup(coordinates)
        if result.is_found:
            self.cache[cache_key] = result

        return result

    def clear_cache(self) -> None:
        """キャッシュをクリア"""
        cache_size = len(self.cache)
        self.cache.clear()
        self.hit_count = 0
        self.miss_count = 0
        logger.info(f"Cache cleared: {cache_size} entries removed")

    def get_cache_stats(self) -> dict[str, float]:
        """
        キャッシュ統計を取得

        Returns:
            dict[str, float]: キャッシュ統計（サイズ、ヒット数、ミス数、ヒット率）
        """
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        stats = {
            "cache_size": len(self.cache),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }

        logger.debug(f"Cache stats: {stats}")

        return stats
