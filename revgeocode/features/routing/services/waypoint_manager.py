"""ルーティングのウェイポイント管理"""

from collections.abc import Callable

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinates

logger = get_logger(__name__)

RoutingWaypointSet = tuple[Coordinates, ...]
WaypointListener = Callable[[RoutingWaypointSet], None]


class RoutingWaypointManager:
    """
    ルーティングエンジンに渡すウェイポイント列を管理

    ウェイポイントは常に0〜2点で、書き込みは毎回全置換。
    ルーティングエンジンは変更のたびに全体から経路を再計算する
    """

    def __init__(self) -> None:
        self._waypoints: RoutingWaypointSet = ()
        self._listeners: list[WaypointListener] = []

    @property
    def waypoints(self) -> RoutingWaypointSet:
        """現在のウェイポイント列"""
        return self._waypoints

    def set_single(self, point: Coordinates) -> None:
        """
        ウェイポイントを1点に置換（地点表示のみ、経路なし）

        Args:
            point: 表示する地点
        """
        self._replace((point,))

    def set_pair(self, start: Coordinates, end: Coordinates) -> None:
        """
        ウェイポイントを出発地・目的地の2点に置換

        Args:
            start: 出発地
            end: 目的地
        """
        self._replace((start, end))

    def clear(self) -> None:
        """ウェイポイントを空にする"""
        self._replace(())

    def subscribe(self, listener: WaypointListener) -> Callable[[], None]:
        """
        ウェイポイント変更の購読を登録（ルーティングエンジン用）

        Returns:
            Callable[[], None]: 購読解除関数
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, waypoints: RoutingWaypointSet) -> None:
        self._waypoints = waypoints
        logger.debug(f"Waypoints replaced: {[p.to_tuple() for p in waypoints]}")

        for listener in list(self._listeners):
            try:
                listener(waypoints)
            except Exception as e:
                logger.error(f"Waypoint listener failed: {e}", exc_info=True)
