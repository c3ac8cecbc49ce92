"""設定模組：從 .env 載入環境變數，定義全域常數。"""

import os
from pathlib import Path

from dotenv import load_dotenv

# 載入 .env 檔案中的環境變數
load_dotenv()

# ── 檔案路徑 ──
AUTHORS_FILE = Path(os.environ.get("AUTHORS_FILE", "/home/authors"))     # 作者清單（每行「姓, 名」）
RELEASES_DIR = Path(os.environ.get("RELEASES_DIR", "/home"))             # 報表輸出目錄
RELEASES_FILE = os.environ.get("RELEASES_FILE", "releases")              # 報表檔名

# ── 執行設定 ──
LOG_LEVEL = os.environ.get("LOG_LEVEL", "info")
# 報表檔案已存在時的處理方式：replace（以新檔取代）、overwrite、append
COLLISION_POLICY = os.environ.get("COLLISION_POLICY", "replace")

# ── 網頁擷取設定 ──
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "30"))    # HTTP 請求逾時秒數
REQUEST_INTERVAL = float(os.environ.get("REQUEST_INTERVAL", "1"))   # 兩次請求間最少間隔秒數
MAX_BLOCKS_PER_AUTHOR = int(os.environ.get("MAX_BLOCKS_PER_AUTHOR", "3"))  # 每位作者最多檢查的搜尋結果數

# 只接受紙本書（排除有聲書、電子書）；設為空字串即停用篩選
CATEGORY_FILTER: tuple[str, ...] | None = tuple(
    token.strip()
    for token in os.environ.get("CATEGORY_FILTER", "Taschenbuch,Buch").split(",")
    if token.strip()
) or None

# 比 DEBUG 更細的日誌等級（對應命令列的 trace）
TRACE = 5
