"""시간 유틸리티"""
import time
from typing import Callable

Clock = Callable[[], int]
"""현재 시각(ms)을 반환하는 함수 타입"""


def current_millis() -> int:
    """현재 시각 (epoch ms)"""
    return int(time.time() * 1000)
