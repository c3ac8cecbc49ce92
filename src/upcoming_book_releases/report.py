"""報表模組：將新書紀錄依出版日期排序、分組，輸出為純文字檔。

檔案格式：
    Upcoming Book Releases

    30. September 2024
    -----------------------------------------------------------（共 83 個「-」）
    Simon Beckett - "Knochenkälte / David Hunter Bd.7"
"""

import enum
import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from .scrapers.base import UpcomingRelease

logger = logging.getLogger(__name__)

REPORT_TITLE = "Upcoming Book Releases"
SEPARATOR = "-" * 83

# 德文月份名稱（1–12 月）
GERMAN_MONTHS = (
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
)


class NoReleasesError(ValueError):
    """沒有任何新書紀錄可寫入。"""


class InvalidReleaseError(ValueError):
    """新書紀錄缺少作者或書名。"""


class CollisionPolicy(str, enum.Enum):
    """報表檔案已存在時的處理方式。"""
    REPLACE = "replace"      # 寫入暫存檔後取代舊檔
    OVERWRITE = "overwrite"  # 清空舊檔後寫入
    APPEND = "append"        # 追加至舊檔結尾


def format_release_date(date: datetime) -> str:
    """以德文格式顯示日期，例如「1. September 2024」。"""
    return f"{date.day}. {GERMAN_MONTHS[date.month - 1]} {date.year}"


def build_report(releases: Sequence[UpcomingRelease]) -> str:
    """依出版日期排序並分組，回傳完整報表文字。

    同一天出版的書共用一個日期標題。

    Raises:
        NoReleasesError: releases 為空。
        InvalidReleaseError: 任一紀錄缺少作者或書名。
    """
    if not releases:
        raise NoReleasesError("沒有任何新書紀錄")

    logger.debug(f"共 {len(releases)} 筆紀錄待處理")

    lines = [REPORT_TITLE]
    current_date: str | None = None

    for release in sorted(releases, key=lambda r: r.date):
        if not release.author:
            raise InvalidReleaseError(f"紀錄缺少作者：{release!r}")
        if not release.title:
            raise InvalidReleaseError(f"紀錄缺少書名：{release!r}")

        formatted_date = format_release_date(release.date)
        if formatted_date != current_date:
            current_date = formatted_date
            lines.extend(["", formatted_date, SEPARATOR])

        lines.append(f'{release.author} - "{release.title}"')

    return "\n".join(lines) + "\n"


def write_report(
    releases: Sequence[UpcomingRelease],
    destination: Path | str,
    file_name: str,
    policy: CollisionPolicy | str = CollisionPolicy.REPLACE,
) -> Path:
    """產生報表並寫入 destination/file_name，回傳檔案路徑。

    目錄不存在時自動建立。報表在寫檔前完整產生，
    因此紀錄有誤時不會留下寫到一半的檔案。
    """
    policy = CollisionPolicy(policy)
    content = build_report(releases)

    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    report_path = destination / file_name

    if policy is CollisionPolicy.APPEND:
        with report_path.open("a", encoding="utf-8") as f:
            f.write(content)
    elif policy is CollisionPolicy.OVERWRITE:
        report_path.write_text(content, encoding="utf-8")
    else:
        _write_atomic(report_path, content)

    logger.info(f"報表已建立：'{report_path}'")
    return report_path


def _write_atomic(path: Path, content: str) -> None:
    """先寫入同目錄的暫存檔，再搬移至目標路徑。

    搬移會直接取代既有檔案；權限沿用既有檔案，否則依 umask 設定。
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _target_mode(path: Path) -> int:
    """既有檔案的權限位元；檔案不存在時為 0o666 扣除 umask。"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
