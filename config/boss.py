"""보스 등급(Tier) 설정"""
from dataclasses import dataclass
from enum import IntEnum


class BossTier(IntEnum):
    """보스 등급 (1~4)"""
    NORMAL = 1
    ELITE = 2
    WORLD_BOSS = 3
    LEGENDARY = 4

    @classmethod
    def from_level(cls, level: int) -> "BossTier":
        """
        레벨 값으로 등급 조회

        Raises:
            InvalidBossTierError: 1~4 범위를 벗어난 레벨
        """
        try:
            return cls(level)
        except ValueError:
            from exceptions import InvalidBossTierError
            raise InvalidBossTierError(level) from None

    @property
    def level(self) -> int:
        return int(self)

    @property
    def health_multiplier(self) -> int:
        """체력 배율 (레벨 × 10)"""
        return self.level * 10

    def next_tier(self) -> "BossTier":
        """다음 등급 (최고 등급이면 자기 자신)"""
        if self is BossTier.LEGENDARY:
            return self
        return BossTier(self.level + 1)

    def previous_tier(self) -> "BossTier":
        """이전 등급 (최저 등급이면 자기 자신)"""
        if self is BossTier.NORMAL:
            return self
        return BossTier(self.level - 1)

    def is_higher_than(self, other: "BossTier") -> bool:
        return self.level > other.level

    def is_lower_than(self, other: "BossTier") -> bool:
        return self.level < other.level


@dataclass(frozen=True)
class BossTierInfo:
    """등급별 고정 수치"""
    tier: BossTier
    name: str
    cultivation_multiplier: float
    recommended_health: int
    recommended_damage: int
    recommended_armor: int
    color_emoji: str

    @property
    def health_multiplier(self) -> int:
        return self.tier.health_multiplier


# 등급별 설정 테이블
TIER_TABLE: dict[BossTier, BossTierInfo] = {
    BossTier.NORMAL: BossTierInfo(
        BossTier.NORMAL, "일반 보스", 0.5, 5000, 50, 10, "🟨"
    ),
    BossTier.ELITE: BossTierInfo(
        BossTier.ELITE, "정예 보스", 2.0, 15000, 80, 30, "🟧"
    ),
    BossTier.WORLD_BOSS: BossTierInfo(
        BossTier.WORLD_BOSS, "월드 보스", 3.0, 50000, 120, 50, "🟥"
    ),
    BossTier.LEGENDARY: BossTierInfo(
        BossTier.LEGENDARY, "전설 보스", 5.0, 200000, 200, 80, "🟪"
    ),
}


def get_tier_info(tier: BossTier) -> BossTierInfo:
    """등급 정보 조회"""
    return TIER_TABLE[BossTier(tier)]
