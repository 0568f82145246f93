"""地図操作コントローラー"""

from collections.abc import Iterable
from typing import Optional

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinates
from ...location.domain.models import LocationRecord, Slot
from ...location.services.location_resolver import LocationResolver
from ...location.state.location_state_store import LocationStateStore
from ...routing.services.waypoint_manager import RoutingWaypointManager
from ..domain.interfaces import DetailPanel, GeolocationProvider, MapSurface

logger = get_logger(__name__)

# イベントごとに書き込むスロット
CLICK_SLOTS = (Slot.CURRENT, Slot.ORIGIN)
SEARCH_SLOTS = (Slot.CURRENT, Slot.DESTINATION)


class MapInteractionController:
    """
    地図イベントを位置解決・共有ステート・ウェイポイントに振り分ける

    | イベント | 書き込むスロット | ウェイポイント |
    |---|---|---|
    | click / locationfound | current, origin | set_single |
    | search | current, destination | set_single |
    | home-button | current, origin（+ 地図の再センタリング） | set_single |
    | navigate | なし（origin, destination を読む） | set_pair |

    イベント間の状態は LocationStateStore にのみ保持する。
    同時に走る解決はキャンセルされず、最後に完了したものが各スロットに残る
    """

    def __init__(
        self,
        resolver: LocationResolver,
        store: LocationStateStore,
        waypoints: RoutingWaypointManager,
        surface: MapSurface,
        detail_panel: DetailPanel,
        geolocation: GeolocationProvider,
        default_coordinates: Coordinates,
    ) -> None:
        """
        Args:
            resolver: 位置解決サービス
            store: 共有位置ステート
            waypoints: ウェイポイント管理
            surface: 地図の描画面
            detail_panel: 詳細パネル
            geolocation: 端末の位置情報
            default_coordinates: 位置情報が取得できない場合の座標
        """
        self.resolver = resolver
        self.store = store
        self.waypoints = waypoints
        self.surface = surface
        self.detail_panel = detail_panel
        self.geolocation = geolocation
        self.default_coordinates = default_coordinates

    async def handle_click(self, lat: float, lng: float) -> Optional[LocationRecord]:
        """
        地図クリック: current と origin を更新

        Returns:
            Optional[LocationRecord]: 解決済みの地点（古い完了として破棄された場合はNone）
        """
        coordinates = Coordinates(lat=lat, lng=lng)
        logger.info(f"Click at ({lat}, {lng})")

        # 前回のマーカーを消してからクリック地点を表示
        self.surface.clear_markers()
        self.surface.place_marker(coordinates, None)

        return await self._resolve_and_apply(coordinates, CLICK_SLOTS)

    async def handle_location_found(self, lat: float, lng: float) -> Optional[LocationRecord]:
        """端末の測位結果: クリックと同じ経路"""
        logger.info(f"Location found at ({lat}, {lng})")
        return await self.handle_click(lat, lng)

    async def handle_search_result(self, lat: float, lng: float) -> Optional[LocationRecord]:
        """
        検索結果: current と destination を更新

        経路のペアリングは navigate まで行わない
        """
        coordinates = Coordinates(lat=lat, lng=lng)
        logger.info(f"Search result at ({lat}, {lng})")

        self.surface.place_marker(coordinates, None)

        return await self._resolve_and_apply(coordinates, SEARCH_SLOTS)

    async def search(self, query: str) -> Optional[LocationRecord]:
        """
        地名検索（正ジオコーディング → 検索結果イベント）

        Returns:
            Optional[LocationRecord]: 解決済みの地点（見つからない・失敗の場合はNone、ステートは変更しない）
        """
        coordinates = await self.resolver.locate_place(query)
        if coordinates is None:
            return None

        return await self.handle_search_result(coordinates.lat, coordinates.lng)

    async def handle_home_button(
        self,
        geolocation: Optional[GeolocationProvider] = None,
    ) -> Optional[LocationRecord]:
        """
        ホームボタン: 端末の位置を取り直し、その地点に地図を戻す

        位置情報が取得できない場合は既定の座標で続行する（UIにはエラーを出さない）

        Args:
            geolocation: 今回だけ使う位置情報プロバイダー（省略時は既定のもの）
        """
        provider = geolocation or self.geolocation
        try:
            coordinates = await provider.locate()
        except Exception as e:
            logger.warning(f"Error getting current location: {e}; using default coordinates")
            coordinates = self.default_coordinates

        record = await self.handle_location_found(coordinates.lat, coordinates.lng)
        if record is not None:
            self.surface.recenter(record.coordinates)

        return record

    def navigate(self) -> tuple[Coordinates, Coordinates]:
        """
        origin から destination への経路を要求

        両スロットの整合性（未設定・同一地点）は確認しない

        Returns:
            tuple[Coordinates, Coordinates]: 設定したウェイポイント
        """
        origin = self.store.get(Slot.ORIGIN)
        destination = self.store.get(Slot.DESTINATION)

        if origin.coordinates == destination.coordinates:
            logger.warning(
                f"Origin and destination are identical {origin.coordinates}; "
                "route will be zero-length"
            )

        logger.info(f"Navigate: {origin.address.city} -> {destination.address.city}")
        self.waypoints.set_pair(origin.coordinates, destination.coordinates)

        return (origin.coordinates, destination.coordinates)

    async def _resolve_and_apply(
        self,
        coordinates: Coordinates,
        slots: Iterable[Slot],
    ) -> Optional[LocationRecord]:
        """解決結果をスロット・ウェイポイント・マーカーに反映"""
        tokens = {slot: self.store.issue_token(slot) for slot in slots}

        record = await self.resolver.resolve_location(coordinates)

        written = [self.store.set(slot, record, token=token) for slot, token in tokens.items()]
        if not any(written):
            logger.info(f"Resolution for {coordinates} superseded by a newer interaction")
            return None

        self.waypoints.set_single(record.coordinates)
        self.surface.place_marker(
            record.coordinates,
            record.address.city,
            on_click=lambda: self.detail_panel.show(record),
        )

        return record
