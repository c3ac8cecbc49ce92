"""BasePageParser 基礎方法測試。"""

import dataclasses
from datetime import datetime, timezone

import httpx
import pytest

from tests.conftest import mock_response
from upcoming_book_releases.scrapers.base import BasePageParser, FetchError, UpcomingRelease

SEARCH_URL = "https://example.com/search?q=Brown+Dan"


class DummyParser(BasePageParser):
    name = "Dummy"

    def search_url(self, author: str) -> str:
        return "https://example.com/search?q=" + author.replace(", ", "+")

    def extract_blocks(self, markup, max_blocks):
        yield self.clean_lines(markup)


class TestCleanLines:
    """clean_lines() 靜態方法測試。"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("  Sakrileg  \n  Dan Brown ", ["Sakrileg", "Dan Brown"]),
            ("\n\n  \nTitel\n\t\nAutor\n", ["Titel", "Autor"]),
            ("Bd. 7\r\nKnochenkälte", ["Bd. 7", "Knochenkälte"]),
            ("   ", []),
            ("", []),
        ],
    )
    def test_clean_lines(self, text, expected):
        assert BasePageParser.clean_lines(text) == expected

    def test_keeps_inner_whitespace(self):
        assert BasePageParser.clean_lines("  Im Labyrinth der Rache  ") == ["Im Labyrinth der Rache"]


class TestFetch:
    """fetch() 的 HTTP 行為測試。"""

    def test_fetch_returns_body(self, mock_http):
        mock_http.get(SEARCH_URL).mock(return_value=mock_response("<html>ok</html>"))
        assert DummyParser().fetch("Brown, Dan") == "<html>ok</html>"

    def test_fetch_sends_user_agent(self, mock_http):
        route = mock_http.get(SEARCH_URL).mock(return_value=mock_response())
        DummyParser().fetch("Brown, Dan")
        assert "Mozilla" in route.calls.last.request.headers["User-Agent"]

    def test_fetch_http_error_is_fatal(self, mock_http):
        mock_http.get(SEARCH_URL).mock(return_value=mock_response(status_code=503))
        with pytest.raises(FetchError, match="503"):
            DummyParser().fetch("Brown, Dan")

    def test_fetch_transport_error(self, mock_http):
        mock_http.get(SEARCH_URL).mock(side_effect=httpx.ConnectError("connection refused"))
        with pytest.raises(FetchError, match="example.com"):
            DummyParser().fetch("Brown, Dan")


class TestUpcomingReleaseDataclass:
    """UpcomingRelease 資料模型測試。"""

    def test_release_creation(self):
        date = datetime(2024, 9, 30, tzinfo=timezone.utc)
        r = UpcomingRelease(author="Dan Brown", title="Sakrileg", date=date)
        assert r.author == "Dan Brown"
        assert r.title == "Sakrileg"
        assert r.date == date

    def test_release_is_immutable(self):
        r = UpcomingRelease(author="A", title="B", date=datetime(2024, 1, 1, tzinfo=timezone.utc))
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.title = "C"
