"""作者清單模組：讀取每行一位「姓, 名」的文字檔。"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_authors(path: Path | str) -> list[str]:
    """讀取作者清單，忽略空白行。

    Raises:
        FileNotFoundError: 檔案不存在。
        ValueError: 檔案中沒有任何作者。
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"找不到作者清單 '{path}'")

    authors: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        author = line.strip()
        if not author:
            continue
        authors.append(author)
        logger.debug(f"從清單讀取 '{author}'")

    if not authors:
        raise ValueError(f"作者清單 '{path}' 中沒有任何作者")

    logger.debug(f"共讀取 {len(authors)} 位作者")
    return authors
