"""
보스 보상 분배기

등급별 기본 보상에 품질/난이도 배율을 곱해 경험치/정기 풀을 만들고,
데미지 기여도에 비례해 참가자에게 나눕니다.

- 기여도 1% 미만 참가자는 분배 대상에서 제외 (항목 자체가 없음)
- 막타 보너스(+20%)는 비례 분배 이후에 더하므로 다른 참가자 몫은 줄지 않음
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Mapping, Optional
from uuid import UUID

from config import BOSS_REWARD, BossTier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardShare:
    """참가자 1명의 보상"""

    experience: float
    spirits: float


@dataclass(frozen=True)
class RewardAllocation:
    """인카운터 1회의 보상 분배 결과"""

    total_experience: float
    total_spirits: float
    killer_id: Optional[UUID] = None
    shares: dict[UUID, RewardShare] = field(default_factory=dict)

    def __contains__(self, participant_id: UUID) -> bool:
        return participant_id in self.shares

    def __getitem__(self, participant_id: UUID) -> RewardShare:
        return self.shares[participant_id]

    def __len__(self) -> int:
        return len(self.shares)

    def experience_map(self) -> dict[UUID, float]:
        return {pid: share.experience for pid, share in self.shares.items()}

    def spirits_map(self) -> dict[UUID, float]:
        return {pid: share.spirits for pid, share in self.shares.items()}


def _finite_multiplier(name: str, value: float) -> float:
    if math.isfinite(value):
        return value
    logger.warning(f"Non-finite {name} multiplier ignored: {value}")
    return 1.0


class RewardAllocator:
    """등급별 보상 풀 계산 및 기여도 비례 분배"""

    def __init__(self, tier: BossTier):
        self.tier = tier
        self.base_experience = BOSS_REWARD.BASE_EXPERIENCE_PER_TIER * tier.level
        self.base_spirits = BOSS_REWARD.BASE_SPIRITS_PER_TIER * tier.level

    # =========================================================================
    # 보상 풀
    # =========================================================================

    @staticmethod
    def calculate_final_reward(base_reward: float, quality_multiplier: float, difficulty_multiplier: float) -> float:
        quality_multiplier = _finite_multiplier("quality", quality_multiplier)
        difficulty_multiplier = _finite_multiplier("difficulty", difficulty_multiplier)
        return base_reward * quality_multiplier * difficulty_multiplier

    def calculate_experience(self, quality_multiplier: float, difficulty_multiplier: float) -> float:
        """경험치 풀 = 100 × 등급 × 품질 배율 × 난이도 배율"""
        return self.calculate_final_reward(self.base_experience, quality_multiplier, difficulty_multiplier)

    def calculate_spirits(self, quality_multiplier: float, difficulty_multiplier: float) -> float:
        """정기 풀 = 10 × 등급 × 품질 배율 × 난이도 배율"""
        return self.calculate_final_reward(self.base_spirits, quality_multiplier, difficulty_multiplier)

    # =========================================================================
    # 분배
    # =========================================================================

    @staticmethod
    def distribute(
        total_pool: float,
        damage_by_participant: Mapping[UUID, float],
        killer_id: Optional[UUID] = None,
    ) -> dict[UUID, float]:
        """
        기여도 비례 분배

        Args:
            total_pool: 분배할 총량
            damage_by_participant: 참가자별 데미지
            killer_id: 막타 참가자 (없으면 None)

        Returns:
            참가자별 보상 (1% 미만 기여자는 포함되지 않음)
        """
        rewards: dict[UUID, float] = {}

        if not damage_by_participant:
            return rewards
        if not math.isfinite(total_pool):
            logger.warning(f"Non-finite reward pool skipped: {total_pool}")
            return rewards

        total_damage = sum(damage_by_participant.values())
        if not total_damage > 0:
            return rewards

        threshold = total_damage * BOSS_REWARD.MIN_CONTRIBUTION_RATIO

        for participant_id, damage in damage_by_participant.items():
            if damage < threshold:
                continue

            share = total_pool * (damage / total_damage)
            if killer_id is not None and participant_id == killer_id:
                share *= 1.0 + BOSS_REWARD.KILLER_BONUS

            rewards[participant_id] = share

        return rewards

    def allocate(
        self,
        total_experience: float,
        total_spirits: float,
        damage_by_participant: Mapping[UUID, float],
        killer_id: Optional[UUID] = None,
    ) -> RewardAllocation:
        """경험치/정기 풀을 같은 기여도로 각각 분배"""
        experience = self.distribute(total_experience, damage_by_participant, killer_id)
        spirits = self.distribute(total_spirits, damage_by_participant, killer_id)

        shares = {
            participant_id: RewardShare(experience=amount, spirits=spirits.get(participant_id, 0.0))
            for participant_id, amount in experience.items()
        }
        for participant_id, amount in spirits.items():
            if participant_id not in shares:
                shares[participant_id] = RewardShare(experience=0.0, spirits=amount)

        logger.info(
            f"Boss rewards allocated: tier={self.tier.level}, exp={total_experience:.1f}, "
            f"spirits={total_spirits:.1f}, recipients={len(shares)}"
        )
        return RewardAllocation(
            total_experience=total_experience,
            total_spirits=total_spirits,
            killer_id=killer_id,
            shares=shares,
        )

    # =========================================================================
    # 드롭
    # =========================================================================

    @staticmethod
    def calculate_drop_count(base_drop_count: int, drop_multiplier: float) -> int:
        """드롭 개수 = max(1, floor(기본 × 배율))"""
        drop_multiplier = _finite_multiplier("drop", drop_multiplier)
        return max(BOSS_REWARD.MIN_DROP_COUNT, math.floor(base_drop_count * drop_multiplier))

    @staticmethod
    def calculate_rarity_probability(base_rarity: float, quality_multiplier: float) -> float:
        """희귀 드롭 확률 = min(1.0, 기본 확률 × 품질 배율)"""
        quality_multiplier = _finite_multiplier("quality", quality_multiplier)
        return min(BOSS_REWARD.MAX_RARITY_PROBABILITY, base_rarity * quality_multiplier)

    # =========================================================================
    # 리포트
    # =========================================================================

    @staticmethod
    def reward_report(allocation: RewardAllocation, limit: int = BOSS_REWARD.REPORT_LIMIT) -> list[str]:
        """경험치 순 보상 리포트 (상위 limit명)"""
        ranked = sorted(
            allocation.shares.items(),
            key=lambda item: (-item[1].experience, item[0]),
        )[:limit]

        lines = []
        for rank, (participant_id, share) in enumerate(ranked, start=1):
            marker = " [막타]" if participant_id == allocation.killer_id else ""
            lines.append(
                f"{rank}. {str(participant_id)[:8]}: "
                f"{share.experience:.0f} EXP / {share.spirits:.0f} 정기{marker}"
            )
        return lines
