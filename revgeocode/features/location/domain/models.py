"""位置解決機能のドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ...geocoding.domain.models import Address, Coordinates

# サマリーが見つからない場合の既定テキスト
DEFAULT_SUMMARY = "No Wikipedia article found for this city."


class Slot(str, Enum):
    """共有位置ステートのスロット"""

    CURRENT = "current"  # 最後に解決した地点（詳細パネル表示用）
    ORIGIN = "origin"  # ルートの出発地
    DESTINATION = "destination"  # ルートの目的地


@dataclass(frozen=True)
class LocationRecord:
    """
    解決済みの地点（座標 + 住所 + サマリー）

    LocationResolver だけが生成する不変の単位。部分的に構築された状態で公開されることはない
    """

    coordinates: Coordinates
    address: Address
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "coordinates": self.coordinates.to_dict(),
            "address": self.address.to_dict(),
            "summary": self.summary,
        }


# 解決に失敗した場合に使う既定の地点
DEFAULT_LOCATION_RECORD = LocationRecord(
    coordinates=Coordinates(lat=1.2756005, lng=103.8619528),
    address=Address(
        country="Singapore",
        city="Singapore",
        street="Marina Gardens Drive",
        street_number="1",
    ),
    summary=DEFAULT_SUMMARY,
)
