"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from ....shared.exceptions.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Coordinates:
    """緯度経度（不変値オブジェクト）"""

    lat: float  # 緯度 [-90, 90]
    lng: float  # 経度 [-180, 180]

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValidationError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValidationError(f"Longitude out of range: {self.lng}")

    def __repr__(self) -> str:
        return f"Coordinates(lat={self.lat}, lng={self.lng})"

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.lat, self.lng)

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Address:
    """
    正規化された住所

    全フィールド任意。Noneは「不明」を意味し、エラーではない
    """

    country: Optional[str] = None  # 国
    city: Optional[str] = None  # 市区町村（サマリー検索のキー）
    street: Optional[str] = None  # 通り
    street_number: Optional[str] = None  # 番地

    @property
    def is_empty(self) -> bool:
        """既知のフィールドが1つもないかどうか"""
        return not self.to_dict()

    def to_dict(self) -> dict[str, str]:
        """既知のフィールドのみを含む辞書に変換"""
        fields = {
            "country": self.country,
            "city": self.city,
            "street": self.street,
            "streetNumber": self.street_number,
        }
        return {key: value for key, value in fields.items() if value is not None}


class LookupStatus(str, Enum):
    """外部ルックアップの結果種別"""

    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK_FAILURE = "network_failure"


@dataclass(frozen=True)
class GeocodingResult(Generic[T]):
    """
    ジオコーディング結果

    レスポンスのプロパティ有無から推測せず、結果種別を明示的に持つ。
    NETWORK_FAILURE と MALFORMED_RESPONSE はまとめて「失敗」として扱う
    """

    status: LookupStatus
    value: Optional[T] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, value: T) -> "GeocodingResult[T]":
        return cls(status=LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls, detail: Optional[str] = None) -> "GeocodingResult[Any]":
        return cls(status=LookupStatus.NOT_FOUND, detail=detail)

    @classmethod
    def malformed(cls, detail: str) -> "GeocodingResult[Any]":
        return cls(status=LookupStatus.MALFORMED_RESPONSE, detail=detail)

    @classmethod
    def network_failure(cls, detail: str) -> "GeocodingResult[Any]":
        return cls(status=LookupStatus.NETWORK_FAILURE, detail=detail)

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def is_not_found(self) -> bool:
        return self.status == LookupStatus.NOT_FOUND

    @property
    def is_failure(self) -> bool:
        """通信エラーまたは不正レスポンスかどうか"""
        return self.status in (LookupStatus.MALFORMED_RESPONSE, LookupStatus.NETWORK_FAILURE)
