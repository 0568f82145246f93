"""アプリケーションオーケストレーター"""

from ...infrastructure.config.settings import Settings
from ...shared.exceptions.errors import ConfigurationError
from ...shared.http.client import HTTPClient
from ...shared.http.rate_limiter import RateLimiter
from ...shared.logging.config import get_logger
from ..geocoding.domain.models import Coordinates
from ..geocoding.providers.base import GeocodingClient
from ..geocoding.providers.cache_geocoder import CacheGeocoder
from ..geocoding.providers.google_maps_geocoder import GoogleMapsGeocoder
from ..geocoding.providers.nominatim_geocoder import NominatimGeocoder
from ..location.services.location_resolver import LocationResolver
from ..location.state.location_state_store import LocationStateStore
from ..map.controllers.map_interaction_controller import MapInteractionController
from ..map.surfaces.recording_surface import (
    ClientGeolocation,
    RecordingDetailPanel,
    RecordingMapSurface,
)
from ..routing.services.waypoint_manager import RoutingWaypointManager
from ..summary.providers.wikipedia_client import WikipediaSummaryClient

logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("nominatim", "google")


class AppOrchestrator:
    """
    アプリケーションオーケストレーター

    各Featureを統合し、依存性注入を行う
    """

    def __init__(self, settings: Settings) -> None:
        """
        Args:
            settings: アプリケーション設定

        Raises:
            ConfigurationError: 設定が不正な場合
        """
        self.settings = settings

        # 外部API共通のHTTPクライアント
        self.http_client = HTTPClient(
            timeout=settings.http_timeout,
            max_retries=settings.http_max_retries,
            user_agent=settings.http_user_agent,
        )

        self.geocoder = self._create_geocoder()
        self.summary_client = WikipediaSummaryClient(
            http_client=self.http_client,
            api_url=settings.wikipedia_api_url,
            sentences=settings.summary_sentences,
        )
        self.resolver = LocationResolver(self.geocoder, self.summary_client)

        self.store = LocationStateStore(discard_stale=settings.discard_stale_resolutions)
        self.waypoints = RoutingWaypointManager()

        self.surface = RecordingMapSurface()
        self.detail_panel = RecordingDetailPanel()

        self.controller = MapInteractionController(
            resolver=self.resolver,
            store=self.store,
            waypoints=self.waypoints,
            surface=self.surface,
            detail_panel=self.detail_panel,
            geolocation=ClientGeolocation(),
            default_coordinates=Coordinates(
                lat=settings.default_latitude,
                lng=settings.default_longitude,
            ),
        )

        logger.info(
            f"AppOrchestrator initialized: provider={settings.geocoding_provider}, "
            f"cache={settings.geocoding_cache_enabled}, "
            f"discard_stale={settings.discard_stale_resolutions}"
        )

    def _create_geocoder(self) -> GeocodingClient:
        """設定に応じたジオコーダーを作成"""
        provider = self.settings.geocoding_provider.lower()

        if provider == "nominatim":
            geocoder: GeocodingClient = NominatimGeocoder(
                http_client=self.http_client,
                base_url=self.settings.nominatim_base_url,
                rate_limiter=RateLimiter(
                    requests_per_second=self.settings.nominatim_requests_per_second
                ),
            )
        elif provider == "google":
            if not self.settings.google_maps_api_key:
                raise ConfigurationError(
                    "google_maps_api_key is required when geocoding_provider=google"
                )
            geocoder = GoogleMapsGeocoder(
                api_key=self.settings.google_maps_api_key,
                timeout=self.settings.http_timeout,
            )
        else:
            raise ConfigurationError(
                f"Unknown geocoding provider: {provider} (supported: {SUPPORTED_PROVIDERS})"
            )

        if self.settings.geocoding_cache_enabled:
            return CacheGeocoder(geocoder)
        return geocoder

    def close(self) -> None:
        """外部リソースを解放"""
        self.http_client.close()
        logger.info("AppOrchestrator closed")
