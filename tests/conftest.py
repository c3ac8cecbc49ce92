"""全域測試 fixtures：HTML fixture 讀取、HTTP 模擬與測試紀錄。"""

from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest
import respx

from upcoming_book_releases.scrapers.base import UpcomingRelease

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "html"


def load_fixture(name: str) -> str:
    """讀取 HTML fixture 檔案。"""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def mock_http():
    """攔截所有 httpx 請求的 respx router；未被呼叫的路由不視為錯誤。"""
    with respx.mock(assert_all_called=False) as router:
        yield router


def mock_response(html: str = "", status_code: int = 200) -> httpx.Response:
    """以 HTML 內容與狀態碼建立書店回應。"""
    return httpx.Response(status_code, text=html)


def make_release(author: str, title: str, year: int, month: int, day: int) -> UpcomingRelease:
    """建立出版日期為 UTC 午夜的測試紀錄。"""
    return UpcomingRelease(
        author=author,
        title=title,
        date=datetime(year, month, day, tzinfo=timezone.utc),
    )
