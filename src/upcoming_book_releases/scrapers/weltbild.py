"""Weltbild 解析器（HTML）。

來源：weltbild.de — 德國線上書店。
擷取方式：以作者「姓+名」搜尋，篩選當年度、書籍類、德文版本的結果。
頁面結構：
  - 每筆搜尋結果包含在 div.inner-flex-container 中
  - 區塊文字依序為：（系列）、書名、作者、評分、裝訂、價格、「Erscheint am DD.MM.YYYY」
"""

import logging
from collections.abc import Iterator
from urllib.parse import quote

from bs4 import BeautifulSoup

from .base import BasePageParser
from ..config import TRACE

logger = logging.getLogger(__name__)

BASE_URL = "https://www.weltbild.de"
SEARCH = "/suche/"
RELEASE_YEAR = "?jahr=0"                    # 當年度
NODE = "&node=%2Fbuecher"                   # 只要書籍，不含有聲書等
LANGUAGE = "&sprache=%2Flanguage%2Fger"     # 只要德文版本

TILE_SELECTOR = "div.inner-flex-container"


class WeltbildParser(BasePageParser):
    name = "Weltbild"

    def search_url(self, author: str) -> str:
        # 「Brown, Dan」→「Brown+Dan」，各部分做百分比編碼
        query = "+".join(quote(part, safe="") for part in author.split(", "))
        return BASE_URL + SEARCH + query + RELEASE_YEAR + NODE + LANGUAGE

    def extract_blocks(self, markup: str, max_blocks: int) -> Iterator[list[str]]:
        if max_blocks <= 0:
            return

        soup = BeautifulSoup(markup, "lxml")
        tiles = soup.select(TILE_SELECTOR, limit=max_blocks)

        if not tiles:
            logger.debug(f"{self.name}：找不到 {TILE_SELECTOR}，無候選結果")
            return

        for tile in tiles:
            lines = self.clean_lines(tile.get_text())
            logger.log(TRACE, f"{self.name}：整理後的區塊內容 {lines!r}")
            yield lines
