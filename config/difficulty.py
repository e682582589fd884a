"""보스 난이도 관련 설정 (속성 배율 스케일링 / 난이도 점수)"""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ScalingConfig:
    """보스 속성 배율 스케일링 설정"""

    # 배율 상한
    MAX_HEALTH_MULTIPLIER: float = 5.0
    """최대 체력 배율"""

    MAX_DAMAGE_MULTIPLIER: float = 3.0
    """최대 공격력 배율"""

    MAX_SPEED_MULTIPLIER: float = 2.0
    """최대 이동 속도 배율"""

    MAX_ARMOR_MULTIPLIER: float = 1.5
    """최대 방어력 배율"""

    MAX_ATTACK_RANGE_MULTIPLIER: float = 1.5
    """최대 공격 범위 배율"""

    MAX_DROP_MULTIPLIER: float = 3.0
    """최대 드롭 배율"""

    MIN_MULTIPLIER: float = 1.0
    """모든 배율의 하한 (기본 스탯 이하로 내려가지 않음)"""

    # 체력 기준 파생 비율
    DAMAGE_RATIO: float = 0.6
    """공격력 = 체력 배율 × 0.6"""

    ARMOR_RATIO: float = 0.3
    """방어력 = 체력 배율 × 0.3"""

    SPEED_KILL_WEIGHT: float = 0.5
    """속도 = 1 + (처치 보정 - 1) × 0.5"""

    ATTACK_RANGE_KILL_WEIGHT: float = 0.3
    """공격 범위 = 1 + (처치 보정 - 1) × 0.3"""

    # 처치 기록 보정
    KILL_MODIFIER_PER_KILL: float = 0.05
    """처치 1회당 보정 증가량"""

    MAX_KILL_MODIFIER: float = 2.5
    """처치 보정 상한 (30회 이상 처치 시)"""

    # 전투력 보정
    POWER_WEAK_THRESHOLD: float = -0.5
    """플레이어 전투력이 권장치보다 50% 이상 낮은 기준"""

    POWER_STRONG_THRESHOLD: float = 0.5
    """플레이어 전투력이 권장치보다 50% 이상 높은 기준"""

    POWER_WEAK_MODIFIER: float = 2.0
    """플레이어가 매우 약할 때 보정"""

    POWER_STRONG_MODIFIER: float = 0.5
    """플레이어가 매우 강할 때 보정"""

    # 캐시
    CACHE_EXPIRE_MS: int = 1000
    """재계산 생략 구간 (1초)"""


SCALING = ScalingConfig()


@dataclass(frozen=True)
class DifficultyConfig:
    """보스 난이도 점수(0~100) 설정"""

    BASE_SCORE: int = 50
    """기본 난이도 점수"""

    PARTICIPANT_BASE: int = 3
    """표준 참가 인원"""

    PARTICIPANT_SCORE_PER_PERSON: int = 10
    """인원 1명 차이당 점수 조정"""

    PARTICIPANT_SCORE_CAP: int = 30
    """인원 조정 상하한 (±30)"""

    POWER_SCORE_SCALE: int = 40
    """전투력 차이 → 점수 환산 계수"""

    POWER_SCORE_CAP: int = 40
    """전투력 조정 상하한 (±40)"""

    HISTORY_SCORE_PER_KILL: float = 0.6
    """누적 처치 1회당 점수 (10회당 6점)"""

    HISTORY_SCORE_CAP: int = 30
    """누적 처치 조정 상한"""

    RECENT_KILL_SCORE: int = 2
    """최근 처치 1회당 점수"""

    RECENT_KILL_SCORE_CAP: int = 10
    """최근 처치 조정 상한"""

    # 배율 보정
    PARTICIPANT_MULTIPLIER_PER_PERSON: float = 0.1
    """인원 1명 차이당 배율 조정"""

    PARTICIPANT_MULTIPLIER_MIN: float = 0.3
    """인원 배율 하한"""

    PARTICIPANT_MULTIPLIER_MAX: float = 1.5
    """인원 배율 상한"""

    HISTORY_MULTIPLIER_PER_KILL: float = 0.02
    """누적 처치 1회당 배율"""

    HISTORY_MULTIPLIER_MAX: float = 2.0
    """누적 처치 배율 상한"""

    RECENT_KILL_MULTIPLIER_PER_KILL: float = 0.05
    """최근 처치 1회당 배율"""

    RECENT_KILL_MULTIPLIER_MAX: float = 1.2
    """최근 처치 배율 상한"""

    HISTORY_MULTIPLIER_WEIGHT: float = 0.5
    """종합 배율에서 누적 처치 가중치"""

    RECENT_KILL_MULTIPLIER_WEIGHT: float = 0.3
    """종합 배율에서 최근 처치 가중치"""

    # 시간
    RECENT_KILL_WINDOW_MS: int = 60 * 60 * 1000
    """최근 처치 집계 구간 (1시간)"""

    UPDATE_INTERVAL_MS: int = 1000
    """난이도 재계산 간격 (1초)"""

    FARM_KILL_THRESHOLD: int = 3
    """최근 1시간 처치 수가 이 값 이상이면 반복 사냥으로 판정"""


DIFFICULTY = DifficultyConfig()


class DifficultyLevel(Enum):
    """난이도 등급"""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    HELL = "hell"
    DESPERATE = "desperate"

    @classmethod
    def from_score(cls, score: int) -> "DifficultyLevel":
        for level, info in DIFFICULTY_LEVEL_TABLE.items():
            if info.min_score <= score <= info.max_score:
                return level
        return cls.DESPERATE


@dataclass(frozen=True)
class DifficultyLevelInfo:
    """난이도 등급별 설정"""
    level: DifficultyLevel
    name: str
    min_score: int
    max_score: int
    min_multiplier: float
    max_multiplier: float


DIFFICULTY_LEVEL_TABLE: dict[DifficultyLevel, DifficultyLevelInfo] = {
    DifficultyLevel.EASY: DifficultyLevelInfo(
        DifficultyLevel.EASY, "쉬움", 0, 20, 1.0, 1.2
    ),
    DifficultyLevel.NORMAL: DifficultyLevelInfo(
        DifficultyLevel.NORMAL, "보통", 21, 40, 1.2, 1.5
    ),
    DifficultyLevel.HARD: DifficultyLevelInfo(
        DifficultyLevel.HARD, "어려움", 41, 60, 1.5, 2.0
    ),
    DifficultyLevel.HELL: DifficultyLevelInfo(
        DifficultyLevel.HELL, "지옥", 61, 80, 2.0, 3.0
    ),
    DifficultyLevel.DESPERATE: DifficultyLevelInfo(
        DifficultyLevel.DESPERATE, "절망", 81, 100, 3.0, 5.0
    ),
}
