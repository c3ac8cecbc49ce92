"""請求節流：確保連續兩次請求之間至少間隔指定秒數。"""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RequestThrottle:
    """最小請求間隔排程策略。

    每次請求前呼叫 wait()；第一次不等待，之後補足與上次請求的間隔。
    clock 與 sleep 可替換，方便測試。
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_interval < 0:
            raise ValueError(f"min_interval 不可為負數：{min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    def wait(self) -> None:
        if self._last is not None:
            remaining = self.min_interval - (self._clock() - self._last)
            if remaining > 0:
                logger.debug(f"等待 {remaining:.2f} 秒後再送出請求")
                self._sleep(remaining)
        self._last = self._clock()
