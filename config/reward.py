"""보스 보상 분배 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class BossRewardConfig:
    """보스 보상 설정"""

    BASE_EXPERIENCE_PER_TIER: float = 100.0
    """등급 1당 기본 경험치 풀"""

    BASE_SPIRITS_PER_TIER: float = 10.0
    """등급 1당 기본 정기(재화) 풀"""

    KILLER_BONUS: float = 0.2
    """막타 보너스 (+20%, 비례 분배 이후 적용)"""

    MIN_CONTRIBUTION_RATIO: float = 0.01
    """최소 기여도 (1% 미만은 보상 제외)"""

    MIN_DROP_COUNT: int = 1
    """최소 드롭 개수"""

    MAX_RARITY_PROBABILITY: float = 1.0
    """희귀 드롭 확률 상한"""

    REPORT_LIMIT: int = 10
    """보상 리포트 최대 표시 인원"""


BOSS_REWARD = BossRewardConfig()
