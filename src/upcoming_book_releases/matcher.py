"""比對模組：從搜尋結果區塊判斷是否為作者的新書，並解析書名與出版日期。

每個步驟失敗時拋出 MatchSkipped（附帶原因），呼叫端記錄後繼續下一個區塊，
單一格式異常的區塊不會中斷整體流程。
"""

import enum
import logging
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from .scrapers.base import UpcomingRelease

logger = logging.getLogger(__name__)

AUTHOR_SEPARATOR = ", "

# 「Erscheint am 30.09.2024」：德文的「將於……出版」
RELEASE_DATE_PATTERN = re.compile(r"Erscheint am (.+)")
DATE_FORMAT = re.compile(r"([0-9]{2})\.([0-9]{2})\.([0-9]{4})")


class AuthorFormatError(ValueError):
    """作者名稱不是「姓, 名」格式。"""


class SkipReason(enum.Enum):
    AUTHOR_NOT_FOUND = "區塊中找不到作者"
    CATEGORY_MISMATCH = "不是指定的書籍類別"
    NO_PRECEDING_TITLE = "作者位於第一行，前面沒有書名"
    AUTHOR_LINE_NOT_FOUND = "找不到作者所在的行"
    NO_DATE_PATTERN = "找不到「Erscheint am」日期"
    UNPARSABLE_DATE = "無法解析出版日期"


class MatchSkipped(Exception):
    """區塊不是有效的新書資訊，應略過。"""

    def __init__(self, reason: SkipReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = reason.value if not detail else f"{reason.value}：{detail}"
        super().__init__(message)


def normalize_author(author: str) -> str:
    """將「姓, 名」重排為「名 姓」。

    例如 "Brown, Dan" → "Dan Brown"。
    必須恰好包含一個 ", " 分隔符號，否則拋出 AuthorFormatError。
    """
    parts = author.split(AUTHOR_SEPARATOR)
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise AuthorFormatError(f"無法重排作者名稱：'{author}'")

    surname, forename = parts
    return f"{forename} {surname}"


def extract_title(lines: Sequence[str], author: str) -> str:
    """書名為作者所在行的前一行。

    優先採用與作者完全相同的第一行，其次為包含作者的第一行。
    """
    index = next((i for i, line in enumerate(lines) if line == author), None)
    if index is None:
        index = next((i for i, line in enumerate(lines) if author in line), None)

    if index is None:
        raise MatchSkipped(SkipReason.AUTHOR_LINE_NOT_FOUND, author)
    if index == 0:
        raise MatchSkipped(SkipReason.NO_PRECEDING_TITLE, author)

    return lines[index - 1]


def extract_release_date(text: str) -> datetime:
    """從區塊文字中擷取「Erscheint am DD.MM.YYYY」並轉為 UTC 午夜時間。"""
    match = RELEASE_DATE_PATTERN.search(text)
    if not match:
        raise MatchSkipped(SkipReason.NO_DATE_PATTERN)

    raw = match.group(1).strip()
    parts = DATE_FORMAT.fullmatch(raw)
    if not parts:
        raise MatchSkipped(SkipReason.UNPARSABLE_DATE, raw)

    day, month, year = (int(p) for p in parts.groups())
    try:
        date = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError as e:
        raise MatchSkipped(SkipReason.UNPARSABLE_DATE, raw) from e

    logger.debug(f"解析出版日期：{date.isoformat()}")
    return date


def match_block(
    block: Sequence[str],
    author: str,
    category_filter: Iterable[str] | None = None,
) -> UpcomingRelease:
    """判斷區塊是否為作者的新書，成功時回傳 UpcomingRelease。

    Args:
        block: 整理後的區塊文字行。
        author: 「名 姓」格式的作者名稱。
        category_filter: 區塊需包含其中至少一個字詞（如「Taschenbuch」），None 表示不篩選。

    Raises:
        MatchSkipped: 區塊不符合條件，reason 說明原因。
    """
    content = "\n".join(block)

    if author not in content:
        raise MatchSkipped(SkipReason.AUTHOR_NOT_FOUND, author)

    if category_filter is not None and not any(token in content for token in category_filter):
        raise MatchSkipped(SkipReason.CATEGORY_MISMATCH, author)

    title = extract_title(block, author)
    date = extract_release_date(content)
    return UpcomingRelease(author=author, title=title, date=date)
