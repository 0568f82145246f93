"""ユニットテスト共通のフィクスチャ"""

import pytest

from fakes import BERLIN, KONSTANZ, FakeGeocoder, FakeSummaryClient
from revgeocode.features.geocoding.domain.models import Address, Coordinates
from revgeocode.features.location.services.location_resolver import LocationResolver
from revgeocode.features.location.state.location_state_store import LocationStateStore
from revgeocode.features.map.controllers.map_interaction_controller import (
    MapInteractionController,
)
from revgeocode.features.map.surfaces.recording_surface import (
    ClientGeolocation,
    RecordingDetailPanel,
    RecordingMapSurface,
)
from revgeocode.features.routing.services.waypoint_manager import RoutingWaypointManager


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        addresses={
            KONSTANZ.to_tuple(): Address(city="Konstanz", country="Germany"),
            BERLIN.to_tuple(): Address(city="Berlin", country="Germany", street="Unter den Linden"),
        },
        places={"Berlin": BERLIN, "Konstanz": KONSTANZ},
    )


@pytest.fixture
def summary_client() -> FakeSummaryClient:
    return FakeSummaryClient(
        {
            "Konstanz": "A city in Germany.",
            "Berlin": "The capital of Germany.",
        }
    )


@pytest.fixture
def resolver(geocoder: FakeGeocoder, summary_client: FakeSummaryClient) -> LocationResolver:
    return LocationResolver(geocoder, summary_client)


@pytest.fixture
def store() -> LocationStateStore:
    return LocationStateStore()


@pytest.fixture
def waypoint_manager() -> RoutingWaypointManager:
    return RoutingWaypointManager()


@pytest.fixture
def surface() -> RecordingMapSurface:
    return RecordingMapSurface()


@pytest.fixture
def detail_panel() -> RecordingDetailPanel:
    return RecordingDetailPanel()


@pytest.fixture
def controller(
    resolver: LocationResolver,
    store: LocationStateStore,
    waypoint_manager: RoutingWaypointManager,
    surface: RecordingMapSurface,
    detail_panel: RecordingDetailPanel,
) -> MapInteractionController:
    return MapInteractionController(
        resolver=resolver,
        store=store,
        waypoints=waypoint_manager,
        surface=surface,
        detail_panel=detail_panel,
        geolocation=ClientGeolocation(),
        default_coordinates=Coordinates(lat=1.2756005, lng=103.8619528),
    )
