"""
보스 인카운터 서비스

보스 1마리의 등장부터 처치/소멸까지를 관리합니다.

흐름:
    spawn_boss → record_damage (전투 중 반복) → finish_encounter
    finish_encounter: 품질 평가 → 난이도 배율 → 보상 풀 → 기여도 분배
    처치 기록은 다음에 등장하는 같은 종류 보스의 스케일링에 반영됩니다.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from config import DIFFICULTY, SCALING, BossTier
from exceptions import EncounterAlreadyExistsError, EncounterNotFoundError
from models.repos import boss_history_repo
from models.repos.kill_count_cache import KillCountCache
from service.boss.damage_ledger import DamageLedger, DamageRankEntry
from service.boss.damage_statistics import DamageStatistics
from service.boss.difficulty_calculator import DifficultyCalculator, RecentKillWindow
from service.boss.difficulty_scaler import DifficultyScaler
from service.boss.quality_scorer import QualityScore, QualityScorer
from service.boss.reward_allocator import RewardAllocation, RewardAllocator
from service.event.event_bus import BossEvent, BossEventType, EventBus
from utils.time_utils import Clock, current_millis

logger = logging.getLogger(__name__)


@dataclass
class EncounterState:
    """진행 중인 보스 전투 상태"""

    boss_id: UUID
    boss_type: str
    tier: BossTier
    spawn_time: int
    ledger: DamageLedger
    scaler: DifficultyScaler
    difficulty: DifficultyCalculator
    quality: QualityScorer
    rewards: RewardAllocator

    participant_count: int = 0
    player_average_power: float = 0.0
    boss_recommended_power: float = 0.0
    difficulty_score: int = DIFFICULTY.BASE_SCORE


@dataclass(frozen=True)
class EncounterResult:
    """종료된 보스 전투 요약"""

    boss_id: UUID
    boss_type: str
    tier: BossTier
    killer_id: Optional[UUID]
    duration_ms: int
    death_count: int
    was_farm_kill: bool
    quality: QualityScore
    difficulty_score: int
    difficulty_multiplier: float
    drop_multiplier: float
    allocation: RewardAllocation
    total_damage: float = 0.0
    damage_snapshot: dict[UUID, float] = field(default_factory=dict)
    ranking: list[DamageRankEntry] = field(default_factory=list)

    @property
    def total_experience(self) -> float:
        return self.allocation.total_experience

    @property
    def total_spirits(self) -> float:
        return self.allocation.total_spirits


class EncounterService:
    """
    보스 인카운터 관리자

    필요한 협력 객체(데미지 통계, 처치 수 캐시, 이벤트 버스, 시계)는 모두 생성자로 받습니다.
    persist_history가 True이면 등장/처치 기록을 DB에 저장합니다 (Tortoise 초기화 필요).
    """

    def __init__(
        self,
        damage_statistics: Optional[DamageStatistics] = None,
        kill_counts: Optional[KillCountCache] = None,
        event_bus: Optional[EventBus] = None,
        clock: Clock = current_millis,
        persist_history: bool = False,
        cache_expire_ms: int = SCALING.CACHE_EXPIRE_MS,
        farm_kill_threshold: int = DIFFICULTY.FARM_KILL_THRESHOLD,
        ranking_limit: int = 10,
    ):
        self._clock = clock
        self.damage_statistics = damage_statistics or DamageStatistics(clock)
        self.kill_counts = kill_counts or KillCountCache()
        self.event_bus = event_bus or EventBus()
        self.persist_history = persist_history
        self.cache_expire_ms = cache_expire_ms
        self.farm_kill_threshold = farm_kill_threshold
        self.ranking_limit = ranking_limit

        self._encounters: dict[UUID, EncounterState] = {}
        self._kill_windows: dict[str, RecentKillWindow] = {}

    # =========================================================================
    # 등장
    # =========================================================================

    async def spawn_boss(
        self,
        boss_id: UUID,
        boss_type: str,
        tier: BossTier,
        player_average_power: float = 0.0,
        boss_recommended_power: float = 0.0,
        participant_count: int = 0,
    ) -> EncounterState:
        """
        보스 전투 시작

        Raises:
            EncounterAlreadyExistsError: 이미 진행 중인 보스 ID
        """
        if boss_id in self._encounters:
            raise EncounterAlreadyExistsError(boss_id)

        spawn_time = self._clock()
        ledger = self.damage_statistics.open_ledger(boss_id, boss_type, tier)

        scaler = DifficultyScaler(
            boss_id, boss_type, tier,
            kill_history=self.kill_counts.kill_count,
            clock=self._clock,
            cache_expire_ms=self.cache_expire_ms,
        )
        scaler.calculate_progression(player_average_power, boss_recommended_power, participant_count)

        difficulty = DifficultyCalculator(
            boss_id, clock=self._clock, kill_window=self._kill_window(boss_type)
        )
        difficulty_score = difficulty.calculate_difficulty_score(
            participant_count,
            player_average_power,
            boss_recommended_power,
            self.kill_counts.kill_count(boss_type),
            difficulty.recent_kill_count(),
        )

        state = EncounterState(
            boss_id=boss_id,
            boss_type=boss_type,
            tier=tier,
            spawn_time=spawn_time,
            ledger=ledger,
            scaler=scaler,
            difficulty=difficulty,
            quality=QualityScorer(boss_id),
            rewards=RewardAllocator(tier),
            participant_count=participant_count,
            player_average_power=player_average_power,
            boss_recommended_power=boss_recommended_power,
            difficulty_score=difficulty_score,
        )
        self._encounters[boss_id] = state

        logger.info(
            f"Boss spawned: id={boss_id}, type={boss_type}, tier={tier.level}, "
            f"difficulty={difficulty_score}, {scaler.attribute_info()}"
        )

        if self.persist_history:
            await boss_history_repo.record_spawn(boss_id, boss_type, tier, spawn_time)

        await self.event_bus.publish(BossEvent(
            type=BossEventType.BOSS_SPAWNED,
            boss_id=boss_id,
            data={
                "boss_type": boss_type,
                "tier": tier.level,
                "difficulty_score": difficulty_score,
                "multipliers": scaler.multipliers(),
            }
        ))
        return state

    def _kill_window(self, boss_type: str) -> RecentKillWindow:
        window = self._kill_windows.get(boss_type)
        if window is None:
            window = self._kill_windows.setdefault(boss_type, RecentKillWindow(self._clock))
        return window

    # =========================================================================
    # 전투 중
    # =========================================================================

    def record_damage(
        self,
        boss_id: UUID,
        participant_id: Optional[UUID],
        damage: float,
        timestamp: Optional[int] = None,
    ) -> None:
        """전투 중 데미지 기록 (진행 중이 아닌 보스는 무시)"""
        if boss_id not in self._encounters or not self.damage_statistics.record_if_open(
            boss_id, participant_id, damage, timestamp
        ):
            logger.debug(f"Damage ignored for inactive boss {boss_id}")

    def update_difficulty(
        self,
        boss_id: UUID,
        participant_count: int,
        player_average_power: float,
        boss_recommended_power: float,
    ) -> bool:
        """
        전투 중 난이도/배율 갱신

        Returns:
            갱신 여부 (진행 중이 아닌 보스면 False)
        """
        state = self._encounters.get(boss_id)
        if state is None:
            return False

        state.participant_count = participant_count
        state.player_average_power = player_average_power
        state.boss_recommended_power = boss_recommended_power

        state.difficulty_score = state.difficulty.calculate_difficulty_score(
            participant_count,
            player_average_power,
            boss_recommended_power,
            self.kill_counts.kill_count(state.boss_type),
            state.difficulty.recent_kill_count(),
        )
        return state.scaler.calculate_progression(player_average_power, boss_recommended_power, participant_count)

    # =========================================================================
    # 종료
    # =========================================================================

    async def finish_encounter(
        self,
        boss_id: UUID,
        killer_id: Optional[UUID],
        death_count: int = 0,
        boss_was_weakened: bool = False,
        was_farm_kill: Optional[bool] = None,
        now: Optional[int] = None,
    ) -> EncounterResult:
        """
        보스 처치 처리 및 보상 분배

        Args:
            boss_id: 보스 인스턴스 ID
            killer_id: 막타 참가자
            death_count: 전투 중 사망 횟수
            boss_was_weakened: 시간 초과로 보스가 약화되었는지
            was_farm_kill: 반복 사냥 여부 (None이면 최근 1시간 처치 수로 판정)
            now: 처치 시각 (ms, 생략 시 현재 시각)

        Raises:
            EncounterNotFoundError: 진행 중이 아닌 보스 ID
        """
        state = self._encounters.pop(boss_id, None)
        if state is None:
            raise EncounterNotFoundError(boss_id)

        kill_time = now if now is not None else self._clock()
        duration_ms = max(0, kill_time - state.spawn_time)

        recent_kills = state.difficulty.recent_kill_count()
        if was_farm_kill is None:
            was_farm_kill = recent_kills >= self.farm_kill_threshold

        damages = state.ledger.snapshot()
        participant_count = len(damages) or state.participant_count

        # 1. 품질 평가
        state.quality.calculate_quality(
            participant_count,
            state.tier.level,
            state.difficulty_score,
            duration_ms,
            death_count,
            boss_was_weakened,
            was_farm_kill,
        )
        quality = state.quality.last_result

        # 2. 보상 풀
        difficulty_multiplier = state.difficulty.calculate_difficulty_multiplier(
            participant_count,
            state.player_average_power,
            state.boss_recommended_power,
            self.kill_counts.kill_count(state.boss_type),
            recent_kills,
        )
        total_experience = state.rewards.calculate_experience(quality.experience_multiplier, difficulty_multiplier)
        total_spirits = state.rewards.calculate_spirits(quality.experience_multiplier, difficulty_multiplier)

        # 3. 기여도 분배
        allocation = state.rewards.allocate(total_experience, total_spirits, damages, killer_id)

        result = EncounterResult(
            boss_id=boss_id,
            boss_type=state.boss_type,
            tier=state.tier,
            killer_id=killer_id,
            duration_ms=duration_ms,
            death_count=death_count,
            was_farm_kill=was_farm_kill,
            quality=quality,
            difficulty_score=state.difficulty_score,
            difficulty_multiplier=difficulty_multiplier,
            drop_multiplier=quality.drop_multiplier,
            allocation=allocation,
            total_damage=state.ledger.total_damage,
            damage_snapshot=damages,
            ranking=state.ledger.ranking(self.ranking_limit),
        )

        # 4. 처치 기록 (다음 등장 보스 스케일링에 반영)
        self.kill_counts.record_kill(state.boss_type)
        state.difficulty.record_kill_time(kill_time)
        self.damage_statistics.clear(boss_id)

        logger.info(
            f"Boss killed: id={boss_id}, type={state.boss_type}, duration={duration_ms}ms, "
            f"quality={quality.level.value}({quality.score}), recipients={len(allocation)}"
        )

        if self.persist_history:
            await boss_history_repo.mark_killed(
                boss_id,
                kill_time=kill_time,
                killer_id=killer_id,
                participant_count=len(allocation),
                total_damage=result.total_damage,
                quality_score=quality.score,
                quality_level=quality.level.value,
            )

        await self.event_bus.publish(BossEvent(
            type=BossEventType.BOSS_KILLED,
            boss_id=boss_id,
            data={
                "boss_type": state.boss_type,
                "tier": state.tier.level,
                "killer_id": killer_id,
                "duration_ms": duration_ms,
                "quality_score": quality.score,
                "quality_level": quality.level.value,
            }
        ))
        await self.event_bus.publish(BossEvent(
            type=BossEventType.REWARDS_DISTRIBUTED,
            boss_id=boss_id,
            data={"result": result}
        ))
        return result

    async def despawn(self, boss_id: UUID) -> bool:
        """
        보상 없이 보스 전투 종료

        Returns:
            종료 여부 (진행 중이 아니면 False)
        """
        state = self._encounters.pop(boss_id, None)
        if state is None:
            return False

        self.damage_statistics.clear(boss_id)
        logger.info(f"Boss despawned: id={boss_id}, type={state.boss_type}")

        if self.persist_history:
            await boss_history_repo.mark_despawned(boss_id)

        await self.event_bus.publish(BossEvent(
            type=BossEventType.BOSS_DESPAWNED,
            boss_id=boss_id,
            data={"boss_type": state.boss_type, "tier": state.tier.level}
        ))
        return True

    # =========================================================================
    # 조회
    # =========================================================================

    def get_encounter(self, boss_id: UUID) -> Optional[EncounterState]:
        return self._encounters.get(boss_id)

    def active_encounters(self) -> list[EncounterState]:
        return list(self._encounters.values())

    def recent_kill_count(self, boss_type: str) -> int:
        return self._kill_window(boss_type).count()

    def clear_recent_kills(self, boss_type: str) -> None:
        """보스 종류의 최근 처치 기록 초기화 (반복 사냥 판정 리셋)"""
        window = self._kill_windows.get(boss_type)
        if window is not None:
            window.clear()
            logger.info(f"Recent kills cleared: type={boss_type}")

    def attribute_info(self, boss_id: UUID) -> str:
        state = self._encounters.get(boss_id)
        if state is None:
            return "없음"
        return state.scaler.attribute_info()

    def difficulty_info(self, boss_id: UUID) -> str:
        state = self._encounters.get(boss_id)
        if state is None:
            return "없음"
        return state.difficulty.difficulty_info()
