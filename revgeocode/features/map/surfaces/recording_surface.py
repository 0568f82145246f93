"""コマンドを記録する地図描画面（HTTPホスト用）"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from ....shared.exceptions.errors import GeolocationError, ValidationError
from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinates
from ...location.domain.models import LocationRecord
from ..domain.interfaces import DetailPanel, GeolocationProvider, MapSurface

logger = get_logger(__name__)

# 描画面が保持するマーカーの上限
DEFAULT_MAX_MARKERS = 100


@dataclass
class Marker:
    """描画面上のマーカー"""

    coordinates: Coordinates
    popup_title: Optional[str] = None
    on_click: Optional[Callable[[], None]] = None


class RecordingMapSurface(MapSurface):
    """
    地図コマンドを記録し、Webクライアントに返すための描画面

    実際の描画はクライアント側で行う。drain_commands で未送信のコマンドを取り出す。
    保持するマーカーは max_markers 個までで、超えた分は古い順に捨てる
    """

    def __init__(self, max_markers: int = DEFAULT_MAX_MARKERS) -> None:
        self.max_markers = max_markers
        self.markers: dict[int, Marker] = {}
        self._next_marker_id = 0
        self.center: Optional[Coordinates] = None
        self._commands: list[dict[str, Any]] = []

    def clear_markers(self) -> None:
        self.markers.clear()
        self._next_marker_id = 0
        self._commands.append({"command": "clear_markers"})

    def place_marker(
        self,
        coordinates: Coordinates,
        popup_title: Optional[str],
        on_click: Optional[Callable[[], None]] = None,
    ) -> None:
        marker_id = self._next_marker_id
        self._next_marker_id += 1
        self.markers[marker_id] = Marker(coordinates, popup_title, on_click)
        while len(self.markers) > self.max_markers:
            del self.markers[next(iter(self.markers))]

        self._commands.append(
            {
                "command": "place_marker",
                "marker_id": marker_id,
                "coordinates": coordinates.to_dict(),
                "popup_title": popup_title,
            }
        )

    def recenter(self, coordinates: Coordinates) -> None:
        self.center = coordinates
        self._commands.append({"command": "recenter", "coordinates": coordinates.to_dict()})

    def click_marker(self, marker_id: int) -> None:
        """
        マーカーのクリックを再生

        Raises:
            ValidationError: 該当するマーカーがない場合
        """
        marker = self.markers.get(marker_id)
        if marker is None:
            raise ValidationError(f"Unknown marker: {marker_id}")

        if marker.on_click is not None:
            marker.on_click()

    def drain_commands(self) -> list[dict[str, Any]]:
        """記録済みのコマンドを取り出してクリア"""
        commands, self._commands = self._commands, []
        return commands


class RecordingDetailPanel(DetailPanel):
    """最後に表示を要求された地点を保持する詳細パネル"""

    def __init__(self) -> None:
        self.record: Optional[LocationRecord] = None

    def show(self, record: LocationRecord) -> None:
        logger.debug(f"Detail panel opened: {record.address.city}")
        self.record = record


class ClientGeolocation(GeolocationProvider):
    """クライアントから送られた測位結果を返す（未送信の場合は測位失敗）"""

    def __init__(self, fix: Optional[Coordinates] = None) -> None:
        self.fix = fix

    async def locate(self) -> Coordinates:
        if self.fix is None:
            raise GeolocationError("No device position available")
        return self.fix
