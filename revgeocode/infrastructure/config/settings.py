"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Geocoding
    geocoding_provider: str = Field(
        default="nominatim",
        description="ジオコーディングプロバイダー (nominatim, google)",
    )
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Nominatim APIのベースURL",
    )
    nominatim_requests_per_second: float = Field(
        default=1.0,
        description="Nominatimへの最大リクエスト数（リクエスト/秒、利用規約上限は1）",
    )
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key（geocoding_provider=google の場合に必須）",
    )
    geocoding_cache_enabled: bool = Field(
        default=True,
        description="ジオコーディングキャッシュを有効にするか",
    )

    # Summary
    wikipedia_api_url: str = Field(
        default="https://en.wikipedia.org/w/api.php",
        description="MediaWiki APIのエンドポイント",
    )
    summary_sentences: int = Field(
        default=10,
        description="サマリーとして取得する文の数",
    )

    # HTTP
    http_timeout: float = Field(
        default=10.0,
        description="外部API呼び出しのタイムアウト（秒）",
    )
    http_max_retries: int = Field(
        default=0,
        description="外部API呼び出しのリトライ回数（デフォルトはリトライなし）",
    )
    http_user_agent: str = Field(
        default="RevGeoCode/1.0 (+https://github.com/revgeocode/revgeocode)",
        description="外部API呼び出しのUser-Agent",
    )

    # Map
    default_latitude: float = Field(
        default=1.2756005,
        description="端末の位置情報が取得できない場合に使う緯度",
    )
    default_longitude: float = Field(
        default=103.8619528,
        description="端末の位置情報が取得できない場合に使う経度",
    )
    discard_stale_resolutions: bool = Field(
        default=False,
        description="後から発行された解決結果より古い完了をスロットに書き込まないか",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )
