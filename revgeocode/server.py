"""地図クライアント向けHTTPサーバー（FastAPI）"""
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .features.app.orchestrator import AppOrchestrator
from .features.geocoding.domain.models import Coordinates
from .features.location.domain.models import LocationRecord, Slot
from .features.map.surfaces.recording_surface import ClientGeolocation
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ValidationError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)

SERVICE_NAME = "RevGeoCode 地点解決サービス"
SERVICE_VERSION = "1.0.0"


class PointRequest(BaseModel):
    """地図上の地点"""

    lat: float = Field(..., ge=-90, le=90, description="緯度")
    lng: float = Field(..., ge=-180, le=180, description="経度")


class SearchRequest(BaseModel):
    """地名検索"""

    query: str = Field(..., min_length=1, description="地名")


class DeviceFixRequest(BaseModel):
    """端末の測位結果（取得できなかった場合は省略）"""

    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)


def _record(record: Optional[LocationRecord]) -> Optional[dict[str, Any]]:
    return record.to_dict() if record is not None else None


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[AppOrchestrator] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    FastAPIアプリケーションを作成

    Args:
        settings: アプリケーション設定（Noneの場合は環境変数から読み込み）
        orchestrator: 既存のオーケストレーター（テスト用）
        configure_logging: ルートロガーを設定するか

    Returns:
        FastAPI: アプリケーション
    """
    settings = settings or Settings()
    if configure_logging:
        setup_logging(level=settings.log_level)

    orchestrator = orchestrator or AppOrchestrator(settings)
    controller = orchestrator.controller
    surface = orchestrator.surface

    app = FastAPI(
        title=SERVICE_NAME,
        description="地図のクリック・検索・現在地を住所と百科事典サマリー付きの地点に解決し、ルートの出発地・目的地を管理する",
        version=SERVICE_VERSION,
    )
    app.state.orchestrator = orchestrator

    def event_response(record: Optional[LocationRecord]) -> dict[str, Any]:
        return {"location": _record(record), "commands": surface.drain_commands()}

    @app.on_event("startup")
    async def startup_event() -> None:
        """起動時の処理"""
        logger.info("Application starting up")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Geocoding provider: {settings.geocoding_provider}")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        """シャットダウン時の処理"""
        logger.info("Application shutting down")
        orchestrator.close()

    @app.get("/")
    async def root() -> dict[str, Any]:
        """ルートエンドポイント"""
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "status": "running",
            "environment": settings.environment,
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """ヘルスチェックエンドポイント"""
        return {"status": "healthy"}

    @app.post("/map/click")
    async def map_click(point: PointRequest) -> dict[str, Any]:
        """地図クリック"""
        record = await controller.handle_click(point.lat, point.lng)
        return event_response(record)

    @app.post("/map/locationfound")
    async def map_location_found(point: PointRequest) -> dict[str, Any]:
        """端末の測位結果"""
        record = await controller.handle_location_found(point.lat, point.lng)
        return event_response(record)

    @app.post("/map/search")
    async def map_search(search: SearchRequest) -> dict[str, Any]:
        """地名検索"""
        record = await controller.search(search.query)
        if record is None:
            surface.drain_commands()
            raise HTTPException(status_code=404, detail=f"No location found for {search.query}")
        return event_response(record)

    @app.post("/map/home")
    async def map_home(fix: Optional[DeviceFixRequest] = None) -> dict[str, Any]:
        """ホームボタン"""
        coordinates = None
        if fix is not None and fix.lat is not None and fix.lng is not None:
            coordinates = Coordinates(lat=fix.lat, lng=fix.lng)

        record = await controller.handle_home_button(geolocation=ClientGeolocation(coordinates))
        return event_response(record)

    @app.post("/map/markers/{marker_id}/click")
    async def map_marker_click(marker_id: int) -> dict[str, Any]:
        """マーカークリック（詳細パネルを開く）"""
        surface.click_marker(marker_id)
        return {"detail": _record(orchestrator.detail_panel.record)}

    @app.post("/navigate")
    async def navigate() -> dict[str, Any]:
        """出発地から目的地へのルートを要求"""
        controller.navigate()
        return {"waypoints": [p.to_dict() for p in orchestrator.waypoints.waypoints]}

    @app.get("/state")
    async def get_state() -> dict[str, Any]:
        """全スロットの現在値"""
        return {slot.value: record.to_dict() for slot, record in orchestrator.store.snapshot().items()}

    @app.get("/state/{slot}")
    async def get_slot(slot: Slot) -> dict[str, Any]:
        """スロットの現在値"""
        return orchestrator.store.get(slot).to_dict()

    @app.get("/routing/waypoints")
    async def get_waypoints() -> dict[str, Any]:
        """現在のウェイポイント"""
        return {"waypoints": [p.to_dict() for p in orchestrator.waypoints.waypoints]}

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """入力エラー"""
        logger.warning(f"Invalid request to {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"message": "Invalid request", "detail": str(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """グローバル例外ハンドラー"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "detail": str(exc)},
        )

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
