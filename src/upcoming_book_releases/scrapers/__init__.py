"""解析器註冊表：匯入所有書店解析器並組成 ALL_PARSERS 對照表。

主流程預設使用 DEFAULT_PARSER。
新增書店時，在此匯入並加入對照表即可。
"""

from .base import BasePageParser, FetchError, UpcomingRelease
from .weltbild import WeltbildParser

ALL_PARSERS: dict[str, BasePageParser] = {
    "weltbild": WeltbildParser(),   # Weltbild — HTML 擷取（搜尋結果頁）
}

DEFAULT_PARSER = ALL_PARSERS["weltbild"]

__all__ = [
    "ALL_PARSERS",
    "DEFAULT_PARSER",
    "BasePageParser",
    "FetchError",
    "UpcomingRelease",
    "WeltbildParser",
]
