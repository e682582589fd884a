"""
보스 전투 품질 평가

종료된 보스 전투의 결과(인원, 등급, 난이도, 소요 시간, 사망 수, 보스 약화 여부,
반복 사냥 여부)로 0~100 품질 점수와 S/A/B/C/D 등급을 계산합니다.
계산 실패가 보상 분배를 막지 않도록 오류 시 50점(B등급)으로 대체합니다.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from config import QUALITY, QualityLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualityScore:
    """품질 평가 결과"""

    score: int
    """품질 점수 (0~100)"""

    level: QualityLevel
    """품질 등급"""

    @classmethod
    def from_score(cls, score: int) -> "QualityScore":
        return cls(score=score, level=QualityLevel.from_score(score))

    @property
    def experience_multiplier(self) -> float:
        return self.level.experience_multiplier

    @property
    def drop_multiplier(self) -> float:
        return self.level.drop_multiplier


FALLBACK_QUALITY = QualityScore.from_score(QUALITY.FALLBACK_SCORE)


def _clamp_score(score: int) -> int:
    return max(QUALITY.MIN_SCORE, min(QUALITY.MAX_SCORE, score))


class QualityScorer:
    """
    전투 품질 평가기

    계산 자체는 순수 함수이며, 마지막 결과만 보관해 조회에 사용합니다.
    """

    def __init__(self, boss_id: Optional[UUID] = None):
        self.boss_id = boss_id
        self.last_result: QualityScore = FALLBACK_QUALITY

    def calculate_quality(
        self,
        participant_count: int,
        boss_level: int,
        difficulty_score: int,
        duration_ms: int,
        death_count: int,
        boss_was_weakened: bool,
        was_farm_kill: bool,
    ) -> int:
        """
        품질 점수 계산

        기본 점수 = (인원 + 보스 등급×20 + 난이도×30) / 3  (0~100 제한)

        가산점:
            - 사망자 없음 +10
            - 10분 이내 처치 +5
            - 3인 이상 전원 생존 +15
            - 난이도 70 초과 무사망 +15

        감점:
            - 40분 초과 -10
            - 사망 1회당 -5
            - 보스 약화 -20
            - 반복 사냥 -15

        Args:
            participant_count: 참가 인원
            boss_level: 보스 등급 (1~4)
            difficulty_score: 난이도 점수 (0~100)
            duration_ms: 전투 시간 (ms)
            death_count: 사망 횟수
            boss_was_weakened: 시간 초과로 보스가 약화되었는지
            was_farm_kill: 반복 사냥 처치인지

        Returns:
            품질 점수 (0~100)
        """
        try:
            base_score = _clamp_score(
                (participant_count + boss_level * 20 + difficulty_score * 30) // 3
            )
            no_death = death_count == 0

            score = base_score

            # 가산점
            if no_death:
                score += QUALITY.BONUS_NO_DEATH
            if duration_ms < QUALITY.TIME_LIMIT_BONUS_MS:
                score += QUALITY.BONUS_UNDER_TIME_LIMIT
            if no_death and participant_count >= QUALITY.ALL_SURVIVE_MIN_PARTICIPANTS:
                score += QUALITY.BONUS_ALL_SURVIVE
            if difficulty_score > QUALITY.HIGH_DIFFICULTY_THRESHOLD and no_death:
                score += QUALITY.BONUS_HIGH_DIFFICULTY

            # 감점
            if duration_ms > QUALITY.TIME_LIMIT_PENALTY_MS:
                score += QUALITY.PENALTY_OVERTIME
            score += death_count * QUALITY.PENALTY_PER_DEATH
            if boss_was_weakened:
                score += QUALITY.PENALTY_BOSS_WEAKENED
            if was_farm_kill:
                score += QUALITY.PENALTY_FARM_KILL

            self.last_result = QualityScore.from_score(_clamp_score(int(score)))
        except Exception as e:
            logger.error(f"Failed to calculate quality for boss {self.boss_id}: {e}", exc_info=True)
            self.last_result = FALLBACK_QUALITY

        return self.last_result.score

    @property
    def quality_score(self) -> int:
        return self.last_result.score

    @property
    def quality_level(self) -> QualityLevel:
        return self.last_result.level

    @property
    def experience_multiplier(self) -> float:
        return self.last_result.experience_multiplier

    @property
    def drop_multiplier(self) -> float:
        return self.last_result.drop_multiplier

    def quality_info(self) -> str:
        result = self.last_result
        return (
            f"품질: {result.level.value}, 점수: {result.score}/100, "
            f"경험치: {result.experience_multiplier:.1f}x, 드롭: {result.drop_multiplier:.1f}x"
        )

    def reset(self) -> None:
        self.last_result = FALLBACK_QUALITY
