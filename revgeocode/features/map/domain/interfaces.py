"""地図UIとの境界インターフェース"""
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

from ...geocoding.domain.models import Coordinates
from ...location.domain.models import LocationRecord


class MapSurface(ABC):
    """
    地図の描画面

    マーカーの描画と地図の移動を担当する（描画自体はこのパッケージの外側）
    """

    @abstractmethod
    def clear_markers(self) -> None:
        """全マーカーを削除"""
        pass

    @abstractmethod
    def place_marker(
        self,
        coordinates: Coordinates,
        popup_title: Optional[str],
        on_click: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        マーカーを配置

        Args:
            coordinates: 配置する座標
            popup_title: ポップアップの見出し
            on_click: マーカークリック時のコールバック
        """
        pass

    @abstractmethod
    def recenter(self, coordinates: Coordinates) -> None:
        """地図の中心を移動"""
        pass


class DetailPanel(ABC):
    """解決済みの地点を表示する詳細パネル"""

    @abstractmethod
    def show(self, record: LocationRecord) -> None:
        pass


class GeolocationProvider(ABC):
    """端末の位置情報"""

    @abstractmethod
    async def locate(self) -> Coordinates:
        """
        現在地を取得

        Raises:
            GeolocationError: 権限拒否・測位不能の場合
        """
        pass
