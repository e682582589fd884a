"""
보스 전투 분석/보상 엔진 설정 상수

모든 매직 넘버와 밸런스 관련 상수를 여기서 관리합니다.
각 도메인별 설정은 config/ 하위 모듈에 정의되어 있습니다.
"""
from config.boss import BossTier, BossTierInfo, TIER_TABLE, get_tier_info
from config.difficulty import (
    ScalingConfig, SCALING,
    DifficultyConfig, DIFFICULTY,
    DifficultyLevel, DifficultyLevelInfo, DIFFICULTY_LEVEL_TABLE,
)
from config.quality import (
    QualityLevel, QualityLevelInfo, QUALITY_TABLE,
    QualityConfig, QUALITY,
)
from config.reward import BossRewardConfig, BOSS_REWARD

__all__ = [
    # boss tier
    "BossTier", "BossTierInfo", "TIER_TABLE", "get_tier_info",
    # scaling & difficulty
    "ScalingConfig", "SCALING",
    "DifficultyConfig", "DIFFICULTY",
    "DifficultyLevel", "DifficultyLevelInfo", "DIFFICULTY_LEVEL_TABLE",
    # quality
    "QualityLevel", "QualityLevelInfo", "QUALITY_TABLE",
    "QualityConfig", "QUALITY",
    # reward
    "BossRewardConfig", "BOSS_REWARD",
]
