"""전투 품질 평가 설정"""
from dataclasses import dataclass
from enum import Enum


class QualityLevel(Enum):
    """전투 품질 등급"""
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def from_score(cls, score: int) -> "QualityLevel":
        """점수(0~100)에 해당하는 등급 (범위 밖이면 D)"""
        for level, info in QUALITY_TABLE.items():
            if info.min_score <= score <= info.max_score:
                return level
        return cls.D

    @property
    def info(self) -> "QualityLevelInfo":
        return QUALITY_TABLE[self]

    @property
    def experience_multiplier(self) -> float:
        return QUALITY_TABLE[self].experience_multiplier

    @property
    def drop_multiplier(self) -> float:
        return QUALITY_TABLE[self].drop_multiplier


@dataclass(frozen=True)
class QualityLevelInfo:
    """품질 등급별 보상 배율"""
    level: QualityLevel
    min_score: int
    max_score: int
    experience_multiplier: float
    drop_multiplier: float
    color_emoji: str


QUALITY_TABLE: dict[QualityLevel, QualityLevelInfo] = {
    QualityLevel.S: QualityLevelInfo(QualityLevel.S, 90, 100, 2.0, 3.0, "🟨"),
    QualityLevel.A: QualityLevelInfo(QualityLevel.A, 75, 89, 1.5, 2.0, "🟪"),
    QualityLevel.B: QualityLevelInfo(QualityLevel.B, 50, 74, 1.0, 1.0, "🟦"),
    QualityLevel.C: QualityLevelInfo(QualityLevel.C, 25, 49, 0.8, 0.8, "🟩"),
    QualityLevel.D: QualityLevelInfo(QualityLevel.D, 0, 24, 0.5, 0.5, "⬜"),
}


@dataclass(frozen=True)
class QualityConfig:
    """품질 점수 가감 조건"""

    MIN_SCORE: int = 0
    MAX_SCORE: int = 100

    FALLBACK_SCORE: int = 50
    """계산 실패 시 기본 점수 (B등급)"""

    # 가산점
    BONUS_NO_DEATH: int = 10
    """사망자 없음"""

    BONUS_UNDER_TIME_LIMIT: int = 5
    """10분 이내 처치"""

    BONUS_ALL_SURVIVE: int = 15
    """3인 이상 참가 + 전원 생존"""

    BONUS_HIGH_DIFFICULTY: int = 15
    """고난이도(70 초과) 무사망 처치"""

    ALL_SURVIVE_MIN_PARTICIPANTS: int = 3
    """전원 생존 보너스 최소 인원"""

    HIGH_DIFFICULTY_THRESHOLD: int = 70
    """고난이도 기준 점수"""

    # 감점
    PENALTY_OVERTIME: int = -10
    """40분 초과"""

    PENALTY_PER_DEATH: int = -5
    """사망 1회당"""

    PENALTY_BOSS_WEAKENED: int = -20
    """시간 초과로 보스가 약화됨"""

    PENALTY_FARM_KILL: int = -15
    """반복 사냥"""

    # 시간 기준 (ms)
    TIME_LIMIT_BONUS_MS: int = 10 * 60 * 1000
    """보너스 기준 시간 (10분)"""

    TIME_LIMIT_PENALTY_MS: int = 40 * 60 * 1000
    """감점 기준 시간 (40분)"""


QUALITY = QualityConfig()
