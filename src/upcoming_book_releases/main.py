"""主流程模組：調度讀取作者、搜尋書店、比對新書、輸出報表的完整流程。

使用方式：
    python -m upcoming_book_releases                              # 完整執行（使用 .env 或預設設定）
    python -m upcoming_book_releases -a ~/authors -d ~/ -r releases
    python -m upcoming_book_releases --dry-run                    # 僅輸出報表至終端，不寫檔
    python -m upcoming_book_releases --collision append           # 報表檔已存在時追加
    python -m upcoming_book_releases -l debug                     # 調整日誌等級
"""

import argparse
import logging
import sys
import time
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .authors import read_authors
from .collector import aggregate
from .config import (
    AUTHORS_FILE,
    CATEGORY_FILTER,
    COLLISION_POLICY,
    LOG_LEVEL,
    MAX_BLOCKS_PER_AUTHOR,
    RELEASES_DIR,
    RELEASES_FILE,
    REQUEST_INTERVAL,
    TRACE,
)
from .matcher import AuthorFormatError, MatchSkipped, match_block, normalize_author
from .report import CollisionPolicy, build_report, write_report
from .scrapers import DEFAULT_PARSER
from .scrapers.base import BasePageParser, FetchError, UpcomingRelease
from .throttle import RequestThrottle

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "upcoming_book_releases"

LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_logging_configured = False


def configure_logging(level: str = "info") -> None:
    """設定日誌格式與本套件的日誌等級。只會生效一次，重複呼叫不做任何事。"""
    global _logging_configured
    if _logging_configured:
        return

    try:
        package_level = LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"不支援的日誌等級：'{level}'") from None

    logging.addLevelName(TRACE, "TRACE")
    # 其他套件（如 httpx）維持 INFO，本套件依參數調整
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    _logging_configured = True


def collect_releases(
    authors: Sequence[str],
    parser: BasePageParser = DEFAULT_PARSER,
    throttle: RequestThrottle | None = None,
    max_blocks: int = MAX_BLOCKS_PER_AUTHOR,
    category_filter: Iterable[str] | None = CATEGORY_FILTER,
) -> list[UpcomingRelease]:
    """逐一搜尋每位作者，回傳所有找到的新書紀錄。

    單一區塊或作者的解析失敗只會略過；任一作者的請求失敗（FetchError）則中止整個流程。

    Raises:
        ValueError: authors 為空（不會送出任何請求）。
        FetchError: 搜尋頁面請求失敗。
    """
    if not authors:
        raise ValueError("作者清單為空")

    if throttle is None:
        throttle = RequestThrottle(REQUEST_INTERVAL)

    logger.info(f"待處理作者數：{len(authors)}")
    releases = aggregate(
        _match_authors(authors, parser, throttle, max_blocks, category_filter)
    )

    releasing_authors = {release.author for release in releases}
    logger.info(f"找到新書的作者：{len(releasing_authors)}/{len(authors)}")
    return releases


def _match_authors(
    authors: Sequence[str],
    parser: BasePageParser,
    throttle: RequestThrottle,
    max_blocks: int,
    category_filter: Iterable[str] | None,
) -> Iterator[UpcomingRelease]:
    """逐一請求作者的搜尋頁，產生每筆比對成功的新書紀錄。"""
    for index, author in enumerate(authors, 1):
        logger.info(f"處理作者 '{author}'（{index}/{len(authors)}）")

        try:
            formatted_author = normalize_author(author)
        except AuthorFormatError as e:
            logger.debug(f"略過 '{author}'：{e}")
            continue

        throttle.wait()
        markup = parser.fetch(author)
        logger.debug(f"請求成功，解析 '{author}' 的 HTML 內容")

        for block in parser.extract_blocks(markup, max_blocks):
            try:
                yield match_block(block, formatted_author, category_filter)
            except MatchSkipped as e:
                logger.debug(f"略過 '{formatted_author}' 的區塊：{e}")


def run(
    authors_file: Path | str = AUTHORS_FILE,
    destination: Path | str = RELEASES_DIR,
    file_name: str = RELEASES_FILE,
    policy: CollisionPolicy | str = COLLISION_POLICY,
    dry_run: bool = False,
    parser: BasePageParser = DEFAULT_PARSER,
    throttle: RequestThrottle | None = None,
) -> Path | None:
    """主流程：讀取作者 → 搜尋比對 → 輸出報表。回傳報表路徑（乾跑模式為 None）。"""
    authors = read_authors(authors_file)
    releases = collect_releases(authors, parser=parser, throttle=throttle)

    # 乾跑模式：僅列出報表內容，不寫檔
    if dry_run:
        print(build_report(releases), end="")
        return None

    return write_report(releases, destination, file_name, policy)


def main() -> None:
    """CLI 進入點：解析命令列參數並執行主流程。"""
    parser = argparse.ArgumentParser(description="查詢作者即將出版的新書並輸出報表")
    parser.add_argument("-a", "--authors-file", default=str(AUTHORS_FILE),
                        help="作者清單檔案路徑（每行「姓, 名」）")
    parser.add_argument("-d", "--dest-release", default=str(RELEASES_DIR),
                        help="報表輸出目錄（不存在時自動建立）")
    parser.add_argument("-r", "--release-file", default=RELEASES_FILE,
                        help="報表檔名")
    parser.add_argument("-l", "--loglevel", default=LOG_LEVEL, type=str.lower,
                        choices=list(LOG_LEVELS), help="日誌等級")
    parser.add_argument("--collision", default=COLLISION_POLICY,
                        choices=[p.value for p in CollisionPolicy],
                        help="報表檔已存在時：replace（以新檔取代，預設）、overwrite、append")
    parser.add_argument("--dry-run", action="store_true", help="僅輸出報表至終端，不寫檔")
    args = parser.parse_args()

    configure_logging(args.loglevel)
    logger.debug(f"{args}")

    start = time.perf_counter()
    try:
        run(
            authors_file=args.authors_file,
            destination=args.dest_release,
            file_name=args.release_file,
            policy=args.collision,
            dry_run=args.dry_run,
        )
    except (FetchError, OSError, ValueError) as e:
        logger.error(f"執行失敗：{e}")
        sys.exit(1)

    logger.info(f"耗時 {time.perf_counter() - start:.2f} 秒")
