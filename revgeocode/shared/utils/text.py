"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    テキストを正規化

    - 前後の空白を除去
    - 連続する空白を1つに
    - 全角スペースを半角スペースに変換
    """
    if not text:
        return None

    # 全角スペースを半角に変換
    text = text.replace("　", " ")

    # 連続する空白を1つに
    text = re.sub(r"\s+", " ", text)

    text = text.strip()

    return text if text else None
