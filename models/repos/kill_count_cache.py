"""
보스 처치 수 캐시

난이도 스케일러는 동기 함수로 처치 수를 조회하므로,
DB의 누적 처치 수를 시작 시 메모리로 읽어두고 이후 처치는 메모리에서 바로 반영합니다.
"""
import logging
import threading
from typing import Mapping

logger = logging.getLogger(__name__)


class KillCountCache:
    """보스 종류 → 누적 처치 수"""

    def __init__(self, initial: Mapping[str, int] | None = None):
        self._counts: dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def kill_count(self, boss_type: str) -> int:
        """누적 처치 수 (기록 없으면 0)"""
        return self._counts.get(boss_type, 0)

    def record_kill(self, boss_type: str) -> int:
        with self._lock:
            self._counts[boss_type] = self._counts.get(boss_type, 0) + 1
            return self._counts[boss_type]

    def load(self, counts: Mapping[str, int]) -> None:
        """DB 집계 결과로 교체"""
        with self._lock:
            self._counts = {boss_type: max(0, int(count)) for boss_type, count in counts.items()}
        logger.info(f"Kill count cache loaded: {len(self._counts)} boss types")

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def __call__(self, boss_type: str) -> int:
        return self.kill_count(boss_type)
