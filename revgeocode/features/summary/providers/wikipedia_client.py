"""Wikipedia サマリー取得クライアント"""
import asyncio
from typing import Any, Optional

from ....shared.exceptions.errors import MalformedResponse, NetworkFailure, SummaryError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ...location.domain.models import DEFAULT_SUMMARY

logger = get_logger(__name__)

DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"


class WikipediaSummaryClient:
    """
    MediaWiki API から記事冒頭の抜粋を取得する

    該当記事なし・通信エラー・不正レスポンスの場合は DEFAULT_SUMMARY を返し、例外は送出しない
    """

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        api_url: str = DEFAULT_API_URL,
        sentences: int = 10,
        default_summary: str = DEFAULT_SUMMARY,
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント（Noneの場合は新規作成）
            api_url: MediaWiki APIのエンドポイント
            sentences: 抜粋する文の数
            default_summary: 記事が見つからない場合のテキスト
        """
        self.http_client = http_client or HTTPClient()
        self.api_url = api_url
        self.sentences = sentences
        self.default_summary = default_summary

        logger.info(f"WikipediaSummaryClient initialized: {self.api_url}")

    async def lookup(self, place_name: str) -> str:
        """
        地名のサマリーを取得

        Args:
            place_name: 地名（記事タイトル）

        Returns:
            str: 記事の抜粋（見つからない場合は既定テキスト）
        """
        title = normalize_text(place_name)
        if not title:
            return self.default_summary

        try:
            data = await asyncio.to_thread(self._fetch, title)
            extract = self._extract(data)
        except (NetworkFailure, MalformedResponse, SummaryError) as e:
            logger.error(f"Summary lookup failed for {title}: {e}")
            return self.default_summary

        if not extract:
            logger.info(f"No article found for: {title}")
            return self.default_summary

        logger.debug(f"Summary found for {title} ({len(extract)} chars)")
        return extract

    def _fetch(self, title: str) -> Any:
        params = {
            "format": "json",
            "action": "query",
            "prop": "extracts",
            "exintro": 1,
            "explaintext": 1,
            "redirects": 1,
            "exsentences": self.sentences,
            "titles": title,
        }
        return self.http_client.get_json(self.api_url, params=params)

    @staticmethod
    def _extract(data: Any) -> Optional[str]:
        """
        レスポンスから最初のページの抜粋を取り出す

        Raises:
            SummaryError: 想定外のレスポンス形式
        """
        try:
            pages = data["query"]["pages"]
            first_page = next(iter(pages.values()))
        except (KeyError, TypeError, AttributeError, StopIteration) as e:
            raise SummaryError(f"Unexpected summary payload: {e}") from e

        if not isinstance(first_page, dict):
            raise SummaryError("Unexpected page entry in summary payload")

        extract = first_page.get("extract")
        if not isinstance(extract, str):
            return None

        return extract.strip() or None
