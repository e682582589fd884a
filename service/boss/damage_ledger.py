"""
데미지 장부 (Damage Ledger)

보스 1마리의 전투 동안 참가자별 누적 데미지/타격 횟수/마지막 타격 시각을 기록합니다.
여러 스레드에서 동시에 record()를 호출해도 누락 없이 합산됩니다.
"""
import logging
import math
import threading
from dataclasses import dataclass
from typing import Iterator, Optional
from uuid import UUID

from config import BossTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageRankEntry:
    """데미지 순위 항목"""

    rank: int
    """순위 (1부터)"""

    participant_id: UUID
    """참가자 ID"""

    damage: float
    """누적 데미지"""

    percentage: float
    """전체 데미지 대비 비율 (0.0 ~ 1.0)"""


class DamageLedger:
    """
    보스 인카운터별 데미지 장부

    기록은 추가만 가능하며(되돌리기 없음) clear()로만 초기화됩니다.
    불변식: sum(참가자 데미지) == total_damage, sum(타격 횟수) == total_hit_count
    """

    def __init__(
        self,
        boss_id: UUID,
        boss_type: str = "Unknown",
        tier: BossTier = BossTier.NORMAL,
        created_at: int = 0,
    ):
        self.boss_id = boss_id
        self.boss_type = boss_type
        self.tier = tier
        self.created_at = created_at

        self._lock = threading.Lock()
        self._damage: dict[UUID, float] = {}
        self._hit_count: dict[UUID, int] = {}
        self._last_hit: dict[UUID, int] = {}
        self._total_damage = 0.0
        self._total_hit_count = 0

    # =========================================================================
    # 기록
    # =========================================================================

    def record(self, participant_id: Optional[UUID], damage: float, timestamp: int) -> None:
        """
        데미지 기록

        데미지가 0 이하이거나 유한한 값이 아니면, 또는 참가자 ID가 없으면 무시합니다.

        Args:
            participant_id: 공격한 참가자
            damage: 데미지
            timestamp: 타격 시각 (ms)
        """
        if participant_id is None:
            return
        if not math.isfinite(damage) or damage <= 0:
            return

        with self._lock:
            self._damage[participant_id] = self._damage.get(participant_id, 0.0) + damage
            self._hit_count[participant_id] = self._hit_count.get(participant_id, 0) + 1
            self._last_hit[participant_id] = timestamp
            self._total_damage += damage
            self._total_hit_count += 1

    def clear(self) -> None:
        """모든 기록 초기화"""
        with self._lock:
            self._damage.clear()
            self._hit_count.clear()
            self._last_hit.clear()
            self._total_damage = 0.0
            self._total_hit_count = 0

    # =========================================================================
    # 조회
    # =========================================================================

    @property
    def total_damage(self) -> float:
        return self._total_damage

    @property
    def total_hit_count(self) -> int:
        return self._total_hit_count

    def damage_of(self, participant_id: UUID) -> float:
        """참가자의 누적 데미지 (기록 없으면 0)"""
        return self._damage.get(participant_id, 0.0)

    def hit_count_of(self, participant_id: UUID) -> int:
        return self._hit_count.get(participant_id, 0)

    def last_hit_of(self, participant_id: UUID) -> Optional[int]:
        return self._last_hit.get(participant_id)

    def percentage_of(self, participant_id: UUID) -> float:
        """
        참가자의 데미지 비율

        Returns:
            0.0 ~ 1.0 (총 데미지가 0 이하이면 0.0)
        """
        total = self._total_damage
        if total <= 0:
            return 0.0
        return self.damage_of(participant_id) / total

    def average_damage_of(self, participant_id: UUID) -> float:
        """참가자의 1회 평균 데미지"""
        with self._lock:
            count = self._hit_count.get(participant_id, 0)
            if count == 0:
                return 0.0
            return self._damage[participant_id] / count

    def average_damage_per_participant(self) -> float:
        with self._lock:
            if not self._damage:
                return 0.0
            return self._total_damage / len(self._damage)

    def participants(self) -> set[UUID]:
        """데미지를 입힌 모든 참가자"""
        with self._lock:
            return {pid for pid, damage in self._damage.items() if damage > 0}

    def participant_count(self) -> int:
        return len(self._damage)

    def snapshot(self) -> dict[UUID, float]:
        """참가자별 데미지 사본 (보상 분배/저장용)"""
        with self._lock:
            return dict(self._damage)

    def top_damagers(self, limit: int) -> Iterator[UUID]:
        """
        데미지 상위 참가자

        데미지 내림차순, 동률이면 ID 순으로 정렬합니다.
        반환된 이터레이터는 한 번만 순회할 수 있으므로 다시 필요하면 재호출합니다.

        Args:
            limit: 최대 인원

        Returns:
            참가자 ID 이터레이터
        """
        ranked = self._ranked_items()[:max(limit, 0)]
        return (participant_id for participant_id, _ in ranked)

    def top_damager(self) -> Optional[UUID]:
        return next(self.top_damagers(1), None)

    def max_damage(self) -> float:
        with self._lock:
            return max(self._damage.values(), default=0.0)

    def ranking(self, limit: int) -> list[DamageRankEntry]:
        """순위표 (상위 limit명)"""
        with self._lock:
            items = list(self._damage.items())
            total = self._total_damage
        ranked = sorted(items, key=lambda item: (-item[1], item[0]))[:max(limit, 0)]
        return [
            DamageRankEntry(
                rank=index,
                participant_id=participant_id,
                damage=damage,
                percentage=damage / total if total > 0 else 0.0,
            )
            for index, (participant_id, damage) in enumerate(ranked, start=1)
        ]

    def _ranked_items(self) -> list[tuple[UUID, float]]:
        with self._lock:
            items = list(self._damage.items())
        return sorted(items, key=lambda item: (-item[1], item[0]))

    def __repr__(self) -> str:
        return (
            f"DamageLedger(boss={self.boss_id}, type={self.boss_type}, tier={self.tier.level}, "
            f"total={self._total_damage:.1f}, players={len(self._damage)})"
        )
