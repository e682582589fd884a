"""
보스 속성 배율 스케일러

보스 등급, 누적 처치 기록, 참가자 전투력과 권장 전투력의 차이로
체력/공격력/속도/방어력/공격 범위/드롭 6가지 배율을 계산합니다.

계산 결과는 cache_expire_ms 동안 재사용합니다. 캐시 확인은 잠금 없이 이루어지므로
동시에 만료를 본 두 호출이 각자 계산할 수 있지만, 계산이 순수 함수라 마지막 결과가
덮어써도 동일하게 유효합니다 (최대 cache_expire_ms 만큼 오래된 값을 볼 수 있음).
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from config import SCALING, BossTier
from exceptions import ScalingComputationError
from utils.time_utils import Clock, current_millis

logger = logging.getLogger(__name__)

KillHistoryQuery = Callable[[str], int]
"""보스 종류별 누적 처치 수 조회 함수"""


@dataclass
class AttributeProgressionState:
    """보스 인스턴스의 속성 배율 상태"""

    health_multiplier: float = 1.0
    """체력 배율 (1.0 ~ 5.0)"""

    damage_multiplier: float = 1.0
    """공격력 배율 (1.0 ~ 3.0)"""

    speed_multiplier: float = 1.0
    """이동 속도 배율 (1.0 ~ 2.0)"""

    armor_multiplier: float = 1.0
    """방어력 배율 (1.0 ~ 1.5)"""

    attack_range_multiplier: float = 1.0
    """공격 범위 배율 (1.0 ~ 1.5)"""

    drop_multiplier: float = 1.0
    """드롭 배율 (1.0 ~ 3.0)"""

    last_calculation_time: Optional[int] = None
    """마지막 계산 시각 (ms, None이면 캐시 없음)"""

    cache_expire_ms: int = SCALING.CACHE_EXPIRE_MS
    """캐시 유지 시간 (ms)"""


def calculate_kill_count_modifier(kill_count: int) -> float:
    """
    처치 기록 보정

    공식: min(1.0 + 처치 수 × 0.05, 2.5)
    0회 = 1.0x, 10회 = 1.5x, 30회 이상 = 2.5x
    """
    kill_count = max(0, kill_count)
    return min(1.0 + kill_count * SCALING.KILL_MODIFIER_PER_KILL, SCALING.MAX_KILL_MODIFIER)


def calculate_player_power_modifier(player_average_power: float, boss_recommended_power: float) -> float:
    """
    플레이어 전투력 보정

    전투력 차이 = (평균 전투력 - 권장 전투력) / 권장 전투력
    - 차이 < -50%: 2.0x
    - 차이 > +50%: 0.5x
    - 그 외: 1.0 + 차이 (선형 보간)

    권장 전투력이 0 이하이면 1.0
    """
    if boss_recommended_power <= 0:
        return 1.0

    power_difference = (player_average_power - boss_recommended_power) / boss_recommended_power

    if power_difference < SCALING.POWER_WEAK_THRESHOLD:
        return SCALING.POWER_WEAK_MODIFIER
    if power_difference > SCALING.POWER_STRONG_THRESHOLD:
        return SCALING.POWER_STRONG_MODIFIER
    return 1.0 + power_difference


def _bounded(field_name: str, value: float, ceiling: float) -> float:
    if not math.isfinite(value):
        raise ScalingComputationError(field_name, value)
    return max(SCALING.MIN_MULTIPLIER, min(value, ceiling))


class DifficultyScaler:
    """
    보스 속성 배율 계산기

    처치 기록 조회 함수와 시계는 생성자로 주입받습니다.
    조회 함수가 없으면 처치 수는 0으로 간주합니다.
    """

    def __init__(
        self,
        boss_id: UUID,
        boss_type: str,
        tier: BossTier,
        kill_history: Optional[KillHistoryQuery] = None,
        clock: Clock = current_millis,
        cache_expire_ms: int = SCALING.CACHE_EXPIRE_MS,
    ):
        self.boss_id = boss_id
        self.boss_type = boss_type
        self.tier = tier
        self._kill_history = kill_history
        self._clock = clock
        self.state = AttributeProgressionState(cache_expire_ms=cache_expire_ms)
        self._apply_base_tier_multipliers()

    # =========================================================================
    # 계산
    # =========================================================================

    def calculate_progression(
        self,
        player_average_power: float,
        boss_recommended_power: float,
        participant_count: int,
    ) -> bool:
        """
        속성 배율 계산

        Args:
            player_average_power: 참가자 평균 전투력
            boss_recommended_power: 보스 권장 전투력
            participant_count: 참가 인원

        Returns:
            계산 성공 여부 (캐시가 유효하면 재계산 없이 True,
            실패하면 이전 배율을 유지하고 False)
        """
        if self.is_cache_valid():
            return True

        try:
            kill_count = self._historical_kill_count()
            kill_modifier = calculate_kill_count_modifier(kill_count)
            power_modifier = calculate_player_power_modifier(player_average_power, boss_recommended_power)

            self._apply_final_multipliers(kill_modifier, power_modifier)
            self.state.last_calculation_time = self._clock()

            logger.debug(
                f"Progression calculated: boss={self.boss_id}, kills={kill_count}, "
                f"participants={participant_count}, kill_mod={kill_modifier:.2f}, "
                f"power_mod={power_modifier:.2f}, {self.attribute_info()}"
            )
            return True
        except Exception as e:
            logger.error(f"Failed to calculate progression for boss {self.boss_id}: {e}", exc_info=True)
            return False

    def _historical_kill_count(self) -> int:
        if self._kill_history is None:
            return 0
        return max(0, int(self._kill_history(self.boss_type)))

    def _apply_base_tier_multipliers(self) -> None:
        """등급 기본 배율 (처치/전투력 보정 없음)"""
        self._apply_final_multipliers(1.0, 1.0)

    def _apply_final_multipliers(self, kill_modifier: float, power_modifier: float) -> None:
        base = self.tier.health_multiplier

        health = _bounded("health", base * kill_modifier * power_modifier, SCALING.MAX_HEALTH_MULTIPLIER)
        damage = _bounded("damage", health * SCALING.DAMAGE_RATIO, SCALING.MAX_DAMAGE_MULTIPLIER)
        armor = _bounded("armor", health * SCALING.ARMOR_RATIO, SCALING.MAX_ARMOR_MULTIPLIER)
        speed = _bounded(
            "speed",
            1.0 + (kill_modifier - 1.0) * SCALING.SPEED_KILL_WEIGHT,
            SCALING.MAX_SPEED_MULTIPLIER,
        )
        attack_range = _bounded(
            "attack_range",
            1.0 + (kill_modifier - 1.0) * SCALING.ATTACK_RANGE_KILL_WEIGHT,
            SCALING.MAX_ATTACK_RANGE_MULTIPLIER,
        )
        drop = _bounded("drop", health, SCALING.MAX_DROP_MULTIPLIER)

        # 모두 검증된 뒤에만 반영
        state = self.state
        state.health_multiplier = health
        state.damage_multiplier = damage
        state.armor_multiplier = armor
        state.speed_multiplier = speed
        state.attack_range_multiplier = attack_range
        state.drop_multiplier = drop

    # =========================================================================
    # 적용
    # =========================================================================

    def apply_health_multiplier(self, base_health: float) -> float:
        return base_health * self.state.health_multiplier

    def apply_damage_multiplier(self, base_damage: float) -> float:
        return base_damage * self.state.damage_multiplier

    def apply_speed_multiplier(self, base_speed: float) -> float:
        return base_speed * self.state.speed_multiplier

    def apply_armor_multiplier(self, base_armor: float) -> float:
        return base_armor * self.state.armor_multiplier

    def apply_attack_range_multiplier(self, base_range: float) -> float:
        return base_range * self.state.attack_range_multiplier

    def apply_drop_multiplier(self, base_drops: int) -> int:
        """드롭 개수 (최소 1개)"""
        return max(1, int(base_drops * self.state.drop_multiplier))

    # =========================================================================
    # 조회
    # =========================================================================

    def multipliers(self) -> dict[str, float]:
        state = self.state
        return {
            "health": state.health_multiplier,
            "damage": state.damage_multiplier,
            "speed": state.speed_multiplier,
            "armor": state.armor_multiplier,
            "attack_range": state.attack_range_multiplier,
            "drop": state.drop_multiplier,
        }

    def attribute_info(self) -> str:
        state = self.state
        return (
            f"Health: {state.health_multiplier:.2f}x, Damage: {state.damage_multiplier:.2f}x, "
            f"Speed: {state.speed_multiplier:.2f}x, Armor: {state.armor_multiplier:.2f}x, "
            f"Range: {state.attack_range_multiplier:.2f}x, Drops: {state.drop_multiplier:.2f}x"
        )

    def difficulty_description(self) -> str:
        """체력/공격력 배율 평균에 따른 난이도 표시"""
        average = (self.state.health_multiplier + self.state.damage_multiplier) / 2.0

        if average < 1.2:
            return "쉬움"
        elif average < 1.5:
            return "보통"
        elif average < 2.0:
            return "어려움"
        elif average < 3.0:
            return "지옥"
        return "절망"

    # =========================================================================
    # 캐시 관리
    # =========================================================================

    def is_cache_valid(self) -> bool:
        last = self.state.last_calculation_time
        if last is None:
            return False
        return (self._clock() - last) < self.state.cache_expire_ms

    def set_cache_expire_ms(self, milliseconds: int) -> None:
        self.state.cache_expire_ms = milliseconds

    def invalidate_cache(self) -> None:
        """다음 calculate_progression() 호출 시 강제 재계산"""
        self.state.last_calculation_time = None

    def reset(self) -> None:
        """등급 기본 배율로 복원"""
        self._apply_base_tier_multipliers()
        self.invalidate_cache()
