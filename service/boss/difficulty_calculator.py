"""
보스 난이도 계산기

참가 인원, 전투력 차이, 누적 처치, 최근 1시간 처치 수로
0~100 난이도 점수와 보상용 난이도 배율을 계산합니다.
점수는 품질 평가의 입력, 배율은 보상 풀 계산의 입력으로 사용됩니다.
"""
import logging
import threading
from typing import Optional
from uuid import UUID

from config import DIFFICULTY, DIFFICULTY_LEVEL_TABLE, DifficultyLevel
from service.boss.difficulty_scaler import calculate_player_power_modifier
from utils.time_utils import Clock, current_millis

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class RecentKillWindow:
    """
    최근 처치 시각 기록 (기본 1시간 구간)

    같은 보스 종류의 여러 인스턴스가 하나의 구간을 공유할 수 있습니다.
    """

    def __init__(self, clock: Clock = current_millis, window_ms: int = DIFFICULTY.RECENT_KILL_WINDOW_MS):
        self._clock = clock
        self.window_ms = window_ms
        self._kill_times: list[int] = []
        self._lock = threading.Lock()

    def record(self, timestamp: int) -> None:
        """처치 시각 기록 (구간을 벗어난 기록은 정리)"""
        window_start = self._clock() - self.window_ms
        with self._lock:
            self._kill_times.append(timestamp)
            self._kill_times = [t for t in self._kill_times if t >= window_start]

    def count(self) -> int:
        window_start = self._clock() - self.window_ms
        with self._lock:
            return sum(1 for t in self._kill_times if t >= window_start)

    def clear(self) -> None:
        with self._lock:
            self._kill_times.clear()


class DifficultyCalculator:
    """보스 난이도 점수/배율 계산기"""

    def __init__(
        self,
        boss_id: Optional[UUID] = None,
        clock: Clock = current_millis,
        update_interval_ms: int = DIFFICULTY.UPDATE_INTERVAL_MS,
        kill_window: Optional[RecentKillWindow] = None,
    ):
        self.boss_id = boss_id
        self._clock = clock
        self.update_interval_ms = update_interval_ms
        self.kill_window = kill_window or RecentKillWindow(clock)

        self.current_score = DIFFICULTY.BASE_SCORE
        self.current_level = DifficultyLevel.from_score(self.current_score)
        self._last_update_time: Optional[int] = None

    # =========================================================================
    # 점수
    # =========================================================================

    def calculate_difficulty_score(
        self,
        participant_count: int,
        player_average_power: float,
        boss_recommended_power: float,
        total_kill_count: int,
        recent_kill_count: int,
    ) -> int:
        """
        난이도 점수 계산

        기본 50점에서
        - 인원 조정 (-30 ~ +30): 3명 기준, 적을수록 어려움
        - 전투력 조정 (-40 ~ +40)
        - 누적 처치 조정 (0 ~ +30)
        - 최근 처치 조정 (0 ~ +10)
        을 더한 뒤 0~100으로 제한합니다.

        갱신 간격 이내의 재호출은 이전 점수를 그대로 반환합니다.

        Returns:
            난이도 점수 (0~100)
        """
        if not self._should_update():
            return self.current_score

        try:
            score = DIFFICULTY.BASE_SCORE
            score += self._participant_adjustment(participant_count)
            score += self._power_adjustment(player_average_power, boss_recommended_power)
            score += self._history_adjustment(total_kill_count)
            score += self._time_adjustment(recent_kill_count)
            score = _clamp(score, 0, 100)

            self.current_score = score
            self.current_level = DifficultyLevel.from_score(score)
            self._last_update_time = self._clock()
            return score
        except Exception as e:
            logger.error(f"Failed to calculate difficulty score for boss {self.boss_id}: {e}", exc_info=True)
            return self.current_score

    @staticmethod
    def _participant_adjustment(participant_count: int) -> int:
        cap = DIFFICULTY.PARTICIPANT_SCORE_CAP
        adjustment = (DIFFICULTY.PARTICIPANT_BASE - participant_count) * DIFFICULTY.PARTICIPANT_SCORE_PER_PERSON
        return _clamp(adjustment, -cap, cap)

    @staticmethod
    def _power_adjustment(player_average_power: float, boss_recommended_power: float) -> int:
        if boss_recommended_power <= 0:
            return 0
        power_difference = (player_average_power - boss_recommended_power) / boss_recommended_power
        cap = DIFFICULTY.POWER_SCORE_CAP
        return _clamp(int(power_difference * DIFFICULTY.POWER_SCORE_SCALE), -cap, cap)

    @staticmethod
    def _history_adjustment(total_kill_count: int) -> int:
        adjustment = int(min(DIFFICULTY.HISTORY_SCORE_CAP, total_kill_count * DIFFICULTY.HISTORY_SCORE_PER_KILL))
        return max(0, adjustment)

    @staticmethod
    def _time_adjustment(recent_kill_count: int) -> int:
        return _clamp(recent_kill_count * DIFFICULTY.RECENT_KILL_SCORE, 0, DIFFICULTY.RECENT_KILL_SCORE_CAP)

    # =========================================================================
    # 배율
    # =========================================================================

    @staticmethod
    def participant_modifier(participant_count: int) -> float:
        multiplier = 1.0 + (DIFFICULTY.PARTICIPANT_BASE - participant_count) * DIFFICULTY.PARTICIPANT_MULTIPLIER_PER_PERSON
        return max(DIFFICULTY.PARTICIPANT_MULTIPLIER_MIN, min(DIFFICULTY.PARTICIPANT_MULTIPLIER_MAX, multiplier))

    @staticmethod
    def power_modifier(player_average_power: float, boss_recommended_power: float) -> float:
        return calculate_player_power_modifier(player_average_power, boss_recommended_power)

    @staticmethod
    def history_modifier(total_kill_count: int) -> float:
        multiplier = 1.0 + max(0, total_kill_count) * DIFFICULTY.HISTORY_MULTIPLIER_PER_KILL
        return min(DIFFICULTY.HISTORY_MULTIPLIER_MAX, multiplier)

    @staticmethod
    def time_modifier(recent_kill_count: int) -> float:
        multiplier = 1.0 + max(0, recent_kill_count) * DIFFICULTY.RECENT_KILL_MULTIPLIER_PER_KILL
        return min(DIFFICULTY.RECENT_KILL_MULTIPLIER_MAX, multiplier)

    def calculate_difficulty_multiplier(
        self,
        participant_count: int,
        player_average_power: float,
        boss_recommended_power: float,
        total_kill_count: int,
        recent_kill_count: int,
    ) -> float:
        """
        보상용 종합 난이도 배율

        인원 × 전투력 × (1 + (누적 - 1) × 0.5) × (1 + (최근 - 1) × 0.3)
        """
        history = self.history_modifier(total_kill_count)
        recent = self.time_modifier(recent_kill_count)
        return (
            self.participant_modifier(participant_count)
            * self.power_modifier(player_average_power, boss_recommended_power)
            * (1.0 + (history - 1.0) * DIFFICULTY.HISTORY_MULTIPLIER_WEIGHT)
            * (1.0 + (recent - 1.0) * DIFFICULTY.RECENT_KILL_MULTIPLIER_WEIGHT)
        )

    # =========================================================================
    # 최근 처치 기록
    # =========================================================================

    def record_kill_time(self, timestamp: int) -> None:
        self.kill_window.record(timestamp)

    def recent_kill_count(self) -> int:
        """최근 1시간 처치 수"""
        return self.kill_window.count()

    # =========================================================================
    # 상태
    # =========================================================================

    def difficulty_info(self) -> str:
        info = DIFFICULTY_LEVEL_TABLE[self.current_level]
        return f"난이도: {info.name} ({self.current_score}/100)"

    def _should_update(self) -> bool:
        if self._last_update_time is None:
            return True
        return (self._clock() - self._last_update_time) >= self.update_interval_ms

    def force_update(self) -> None:
        self._last_update_time = None

    def reset(self) -> None:
        """점수 상태만 초기화 (공유 처치 구간은 소유자가 관리)"""
        self.current_score = DIFFICULTY.BASE_SCORE
        self.current_level = DifficultyLevel.from_score(self.current_score)
        self._last_update_time = None
