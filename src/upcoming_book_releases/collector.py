"""彙整模組：收集所有作者的新書資訊。

紀錄只能追加，不以書名去重；另記錄有新書的作者，用於統計摘要。
"""

import logging
from collections.abc import Iterable

from .scrapers.base import UpcomingRelease

logger = logging.getLogger(__name__)


class ReleaseCollector:
    """新書紀錄的追加式容器。"""

    def __init__(self) -> None:
        self._releases: list[UpcomingRelease] = []
        self._authors: set[str] = set()

    def add(self, release: UpcomingRelease) -> None:
        self._releases.append(release)
        self._authors.add(release.author)
        logger.info(f"'{release.author}' 有新書：'{release.title}'")

    @property
    def releases(self) -> tuple[UpcomingRelease, ...]:
        """目前所有紀錄的唯讀快照。"""
        return tuple(self._releases)

    @property
    def releasing_authors(self) -> frozenset[str]:
        return frozenset(self._authors)

    def __len__(self) -> int:
        return len(self._releases)


def aggregate(candidates: Iterable[UpcomingRelease]) -> list[UpcomingRelease]:
    """將候選紀錄全數收集，保留原始順序。"""
    collector = ReleaseCollector()
    for candidate in candidates:
        collector.add(candidate)

    logger.debug(
        f"彙整完成：{len(collector)} 筆新書，來自 {len(collector.releasing_authors)} 位作者"
    )
    return list(collector.releases)
