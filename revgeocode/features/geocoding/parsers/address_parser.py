"""住所コンポーネントのパーサー"""
from collections.abc import Mapping
from typing import Any, Optional

from ..domain.models import Address

# 市区町村として扱うキー
CITY_KEYS = frozenset({"suburb", "village", "town", "city", "hamlet"})


def _classify(key: str) -> Optional[str]:
    """キーを Address のフィールド名に分類（該当なしは None）"""
    if "number" in key:
        return "street_number"
    if key == "road":
        return "street"
    if key in CITY_KEYS:
        return "city"
    if key == "country":
        return "country"
    return None


def parse_address(components: Optional[Mapping[str, Any]]) -> Address:
    """
    逆ジオコーディングの住所コンポーネントを Address に変換

    分類ルール（キーごとに評価）:
    - "number" を含むキー → street_number
    - "road" → street
    - suburb / village / town / city / hamlet → city
    - "country" → country

    同じフィールドに分類されるキーが複数ある場合は最初のものを採用する。
    未知のキーは無視する。

    Args:
        components: キーと値の住所コンポーネント

    Returns:
        Address: 正規化された住所（空入力の場合は空の Address）
    """
    fields: dict[str, str] = {}

    for key, value in (components or {}).items():
        field_name = _classify(str(key))
        if field_name is None or field_name in fields:
            continue
        if value is None or value == "":
            continue
        fields[field_name] = str(value)

    return Address(**fields)
