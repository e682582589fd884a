"""
데미지 통계 서비스

보스 ID별 데미지 장부를 관리합니다.
서로 다른 보스는 장부를 공유하지 않으므로 장부 생성/삭제만 잠금으로 보호합니다.
"""
import logging
import threading
from typing import Optional
from uuid import UUID

from config import BossTier
from service.boss.damage_ledger import DamageLedger, DamageRankEntry
from utils.time_utils import Clock, current_millis

logger = logging.getLogger(__name__)


class DamageStatistics:
    """보스별 데미지 장부 레지스트리"""

    def __init__(self, clock: Clock = current_millis):
        self._clock = clock
        self._ledgers: dict[UUID, DamageLedger] = {}
        self._lock = threading.Lock()

    def open_ledger(
        self,
        boss_id: UUID,
        boss_type: str = "Unknown",
        tier: BossTier = BossTier.NORMAL,
    ) -> DamageLedger:
        """
        보스 장부 생성 (이미 있으면 기존 장부 반환)

        Args:
            boss_id: 보스 인스턴스 ID
            boss_type: 보스 종류
            tier: 보스 등급
        """
        with self._lock:
            ledger = self._ledgers.get(boss_id)
            if ledger is None:
                ledger = DamageLedger(boss_id, boss_type, tier, created_at=self._clock())
                self._ledgers[boss_id] = ledger
                logger.debug(f"Damage ledger opened: boss={boss_id}, type={boss_type}")
            return ledger

    def ledger_for(self, boss_id: UUID) -> Optional[DamageLedger]:
        return self._ledgers.get(boss_id)

    def record_damage(
        self,
        boss_id: UUID,
        participant_id: Optional[UUID],
        damage: float,
        timestamp: Optional[int] = None,
    ) -> None:
        """
        데미지 기록 (장부가 없으면 생성)

        Args:
            boss_id: 보스 인스턴스 ID
            participant_id: 공격한 참가자
            damage: 데미지
            timestamp: 타격 시각 (ms, 생략 시 현재 시각)
        """
        if boss_id is None:
            return

        ledger = self._ledgers.get(boss_id) or self.open_ledger(boss_id)
        ledger.record(participant_id, damage, timestamp if timestamp is not None else self._clock())

    def record_if_open(
        self,
        boss_id: UUID,
        participant_id: Optional[UUID],
        damage: float,
        timestamp: Optional[int] = None,
    ) -> bool:
        """
        열린 장부에만 데미지 기록 (장부를 새로 만들지 않음)

        조회와 기록이 clear()와 같은 잠금 안에서 이루어지므로
        폐기된 보스의 장부가 다시 생기지 않습니다.

        Returns:
            장부가 열려 있었는지
        """
        when = timestamp if timestamp is not None else self._clock()
        with self._lock:
            ledger = self._ledgers.get(boss_id)
            if ledger is None:
                return False
            ledger.record(participant_id, damage, when)
            return True

    def damage_of(self, boss_id: UUID, participant_id: UUID) -> float:
        ledger = self._ledgers.get(boss_id)
        return ledger.damage_of(participant_id) if ledger else 0.0

    def total_damage(self, boss_id: UUID) -> float:
        ledger = self._ledgers.get(boss_id)
        return ledger.total_damage if ledger else 0.0

    def participants(self, boss_id: UUID) -> set[UUID]:
        ledger = self._ledgers.get(boss_id)
        return ledger.participants() if ledger else set()

    def rankings(self, boss_id: UUID, limit: int) -> list[DamageRankEntry]:
        """데미지 순위 (상위 limit명)"""
        ledger = self._ledgers.get(boss_id)
        return ledger.ranking(limit) if ledger else []

    def all_damage(self, boss_id: UUID) -> dict[UUID, float]:
        """참가자별 데미지 사본"""
        ledger = self._ledgers.get(boss_id)
        return ledger.snapshot() if ledger else {}

    def clear(self, boss_id: UUID) -> Optional[DamageLedger]:
        """
        보스 장부 폐기

        Returns:
            폐기된 장부 (없으면 None)
        """
        with self._lock:
            ledger = self._ledgers.pop(boss_id, None)
        if ledger is not None:
            logger.debug(f"Damage ledger discarded: {ledger}")
        return ledger

    def active_boss_ids(self) -> list[UUID]:
        with self._lock:
            return list(self._ledgers)
