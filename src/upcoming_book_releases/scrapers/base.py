"""擷取器基礎模組：定義 UpcomingRelease 資料模型與 BasePageParser 抽象類別。

所有書店解析器必須繼承 BasePageParser 並實作 search_url() 與 extract_blocks()。
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

import httpx

from ..config import REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpcomingRelease:
    """即將出版書籍的資料模型。"""
    author: str       # 作者（「名 姓」格式）
    title: str        # 書名
    date: datetime    # 出版日期（UTC 午夜）


class FetchError(RuntimeError):
    """搜尋頁面請求失敗（非 2xx 狀態碼或連線錯誤）。"""


class BasePageParser(ABC):
    """書店搜尋頁解析器抽象基礎類別。

    提供共用的 HTTP 請求與文字整理工具方法。
    子類別需設定 name 屬性並實作 search_url() 與 extract_blocks()。
    """
    name: str = "base"

    @abstractmethod
    def search_url(self, author: str) -> str:
        """依「姓, 名」格式的作者名稱組出搜尋網址。"""
        ...

    @abstractmethod
    def extract_blocks(self, markup: str, max_blocks: int) -> Iterator[list[str]]:
        """從搜尋結果頁面逐一產生最多 max_blocks 個內容區塊。"""
        ...

    def fetch(self, author: str) -> str:
        """取得作者的搜尋結果頁面 HTML。失敗時拋出 FetchError。"""
        url = self.search_url(author)
        logger.debug(f"{self.name}：請求網址 '{url}'")
        try:
            resp = self._get(url)
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"作者 '{author}' 的請求失敗，狀態碼：{e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"無法送出 HTTP GET 請求至 '{url}'：{e}") from e
        return resp.text

    def _get(self, url: str) -> httpx.Response:
        """發送 HTTP GET 請求，附帶 User-Agent 標頭與逾時設定。"""
        headers = {"User-Agent": USER_AGENT}
        resp = httpx.get(url, headers=headers, timeout=REQUEST_TIMEOUT, follow_redirects=True)
        resp.raise_for_status()
        return resp

    @staticmethod
    def clean_lines(text: str) -> list[str]:
        """依換行切分文字，去除每行前後空白並捨棄空白行。"""
        return [line.strip() for line in text.splitlines() if line.strip()]
