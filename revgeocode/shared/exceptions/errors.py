"""カスタム例外定義"""


class RevGeoCodeError(Exception):
    """アプリケーション基底例外"""

    pass


class HTTPError(RevGeoCodeError):
    """HTTP関連のエラー"""

    pass


class NetworkFailure(HTTPError):
    """外部API呼び出しの通信エラー（接続失敗、タイムアウト、HTTPエラーステータス）"""

    pass


class MalformedResponse(RevGeoCodeError):
    """想定外の形式のレスポンス"""

    pass


class GeocodingError(RevGeoCodeError):
    """ジオコーディングエラー"""

    pass


class SummaryError(RevGeoCodeError):
    """百科事典サマリー取得エラー"""

    pass


class GeolocationError(RevGeoCodeError):
    """端末の位置情報取得エラー（権限拒否、測位不能）"""

    pass


class ConfigurationError(RevGeoCodeError):
    """設定エラー"""

    pass


class ValidationError(RevGeoCodeError):
    """バリデーションエラー"""

    pass
