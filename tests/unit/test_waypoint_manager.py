"""ウェイポイント管理のテスト"""

from fakes import BERLIN, KONSTANZ
from revgeocode.features.geocoding.domain.models import Coordinates
from revgeocode.features.routing.services.waypoint_manager import (
    RoutingWaypointManager,
    RoutingWaypointSet,
)


def test_starts_empty(waypoint_manager: RoutingWaypointManager) -> None:
    assert waypoint_manager.waypoints == ()


def test_set_single_then_pair_overwrites(waypoint_manager: RoutingWaypointManager) -> None:
    waypoint_manager.set_single(Coordinates(lat=10.0, lng=10.0))
    waypoint_manager.set_pair(KONSTANZ, BERLIN)

    assert waypoint_manager.waypoints == (KONSTANZ, BERLIN)


def test_pair_order_is_preserved(waypoint_manager: RoutingWaypointManager) -> None:
    waypoint_manager.set_pair(BERLIN, KONSTANZ)

    assert waypoint_manager.waypoints[0] == BERLIN
    assert waypoint_manager.waypoints[1] == KONSTANZ


def test_set_single_after_pair_leaves_one_point(waypoint_manager: RoutingWaypointManager) -> None:
    waypoint_manager.set_pair(KONSTANZ, BERLIN)
    waypoint_manager.set_single(BERLIN)

    assert waypoint_manager.waypoints == (BERLIN,)

    waypoint_manager.clear()
    assert waypoint_manager.waypoints == ()


def test_routing_engine_receives_full_set_on_every_write(
    waypoint_manager: RoutingWaypointManager,
) -> None:
    received: list[RoutingWaypointSet] = []
    unsubscribe = waypoint_manager.subscribe(received.append)

    waypoint_manager.set_single(KONSTANZ)
    waypoint_manager.set_pair(KONSTANZ, BERLIN)
    unsubscribe()
    waypoint_manager.clear()

    assert received == [(KONSTANZ,), (KONSTANZ, BERLIN)]
