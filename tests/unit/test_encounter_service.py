"""
보스 인카운터 서비스 유닛 테스트
"""
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from config import BossTier, QualityLevel
from exceptions import EncounterAlreadyExistsError, EncounterNotFoundError
from models.repos.kill_count_cache import KillCountCache
from service.boss.encounter_service import EncounterService
from service.boss.reward_allocator import RewardAllocator
from service.event.event_bus import BossEventType, EventBus
from tests.fixtures.bosses import DAMAGE_SPLIT, PLAYER_A, PLAYER_B, PLAYER_C

FIVE_MINUTES = 5 * 60 * 1000


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def published(event_bus):
    """발행된 이벤트 수집"""
    events = []

    async def collect(event):
        events.append(event)

    for event_type in BossEventType:
        event_bus.subscribe(event_type, collect)
    return events


@pytest.fixture
def service(clock, event_bus):
    return EncounterService(event_bus=event_bus, clock=clock)


async def fight(service, clock, boss_id, boss_type="SkeletonKing", tier=BossTier.NORMAL, killer_id=PLAYER_C):
    await service.spawn_boss(boss_id, boss_type, tier, 100, 100, 3)
    for participant_id, damage in DAMAGE_SPLIT.items():
        service.record_damage(boss_id, participant_id, damage)
    clock.advance(FIVE_MINUTES)
    return await service.finish_encounter(boss_id, killer_id, death_count=0)


class TestSpawn:
    """보스 등장 테스트"""

    @pytest.mark.asyncio
    async def test_spawn_creates_encounter(self, service, boss_id, published):
        state = await service.spawn_boss(boss_id, "SkeletonKing", BossTier.ELITE, 100, 100, 3)

        assert state.difficulty_score == 50
        assert state.ledger is service.damage_statistics.ledger_for(boss_id)
        assert service.active_encounters() == [state]
        assert published[0].type == BossEventType.BOSS_SPAWNED
        assert published[0].data["tier"] == 2

    @pytest.mark.asyncio
    async def test_duplicate_spawn_raises(self, service, boss_id):
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL)

        with pytest.raises(EncounterAlreadyExistsError):
            await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL)

    @pytest.mark.asyncio
    async def test_info_queries(self, service, boss_id):
        assert service.attribute_info(boss_id) == "없음"
        assert service.difficulty_info(boss_id) == "없음"

        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)

        assert "Health: 5.00x" in service.attribute_info(boss_id)
        assert service.difficulty_info(boss_id) == "난이도: 어려움 (50/100)"


class TestCombat:
    """전투 중 처리 테스트"""

    def test_damage_for_inactive_boss_is_ignored(self, service, boss_id):
        service.record_damage(boss_id, PLAYER_A, 100.0)
        assert service.damage_statistics.ledger_for(boss_id) is None

    @pytest.mark.asyncio
    async def test_update_difficulty(self, service, clock, boss_id):
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)

        clock.advance(1000)
        assert service.update_difficulty(boss_id, 1, 100, 100) is True

        state = service.get_encounter(boss_id)
        assert state.difficulty_score == 70
        assert state.participant_count == 1

    def test_update_unknown_boss(self, service, boss_id):
        assert service.update_difficulty(boss_id, 3, 100, 100) is False

    @pytest.mark.asyncio
    async def test_damage_after_ledger_closed_does_not_reopen(self, service, clock, boss_id):
        """활성 확인 직후 장부가 폐기되어도 장부를 다시 만들지 않음"""
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)
        service.damage_statistics.clear(boss_id)

        service.record_damage(boss_id, PLAYER_A, 50.0, timestamp=1)

        assert service.damage_statistics.active_boss_ids() == []

    @pytest.mark.asyncio
    async def test_damage_after_finish_leaves_no_ledger(self, service, clock, boss_id):
        await fight(service, clock, boss_id)

        service.record_damage(boss_id, PLAYER_A, 50.0, timestamp=1)

        assert service.active_encounters() == []
        assert service.damage_statistics.active_boss_ids() == []


class TestFinishEncounter:
    """보스 처치 테스트"""

    @pytest.mark.asyncio
    async def test_end_to_end_rewards(self, service, clock, boss_id, published):
        """처치 → 품질 S → 경험치 200 / 정기 20 → 기여도 분배 + 막타 보너스"""
        result = await fight(service, clock, boss_id)

        assert result.duration_ms == FIVE_MINUTES
        assert result.was_farm_kill is False
        assert result.quality.score == 100
        assert result.quality.level == QualityLevel.S
        assert result.difficulty_multiplier == pytest.approx(1.0)
        assert result.total_experience == pytest.approx(200)
        assert result.total_spirits == pytest.approx(20)
        assert result.drop_multiplier == 3.0

        expected = RewardAllocator.distribute(200, DAMAGE_SPLIT, killer_id=PLAYER_C)
        assert result.allocation.experience_map() == pytest.approx(expected)
        assert result.allocation[PLAYER_A].experience == pytest.approx(30)
        assert result.allocation[PLAYER_B].experience == pytest.approx(70)
        assert result.allocation[PLAYER_C].experience == pytest.approx(120)
        assert result.allocation[PLAYER_C].spirits == pytest.approx(12)

        assert result.total_damage == 1000.0
        assert [entry.participant_id for entry in result.ranking] == [PLAYER_C, PLAYER_B, PLAYER_A]

        event_types = [event.type for event in published]
        assert event_types == [
            BossEventType.BOSS_SPAWNED,
            BossEventType.BOSS_KILLED,
            BossEventType.REWARDS_DISTRIBUTED,
        ]
        assert published[-1].data["result"] is result

    @pytest.mark.asyncio
    async def test_finish_cleans_up_and_records_kill(self, service, clock, boss_id):
        await fight(service, clock, boss_id)

        assert service.active_encounters() == []
        assert service.damage_statistics.ledger_for(boss_id) is None
        assert service.kill_counts.kill_count("SkeletonKing") == 1
        assert service.recent_kill_count("SkeletonKing") == 1

    @pytest.mark.asyncio
    async def test_finish_unknown_raises(self, service, boss_id):
        with pytest.raises(EncounterNotFoundError):
            await service.finish_encounter(boss_id, PLAYER_A)

    @pytest.mark.asyncio
    async def test_kill_without_damage(self, service, clock, boss_id):
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)

        result = await service.finish_encounter(boss_id, None)

        assert len(result.allocation) == 0
        assert result.ranking == []

    @pytest.mark.asyncio
    async def test_repeated_kills_become_farm_kills(self, service, clock):
        """최근 1시간 같은 종류 3회 처치 후에는 반복 사냥"""
        results = [await fight(service, clock, uuid4()) for _ in range(4)]

        assert [r.was_farm_kill for r in results] == [False, False, False, True]

    @pytest.mark.asyncio
    async def test_farm_kills_are_per_boss_type(self, service, clock):
        for _ in range(3):
            await fight(service, clock, uuid4(), boss_type="SkeletonKing")

        result = await fight(service, clock, uuid4(), boss_type="DragonLord")

        assert result.was_farm_kill is False

    @pytest.mark.asyncio
    async def test_kill_history_feeds_next_spawn(self, clock, event_bus):
        """누적 처치 수가 다음 보스 속도 배율에 반영"""
        service = EncounterService(kill_counts=KillCountCache({"SkeletonKing": 10}), event_bus=event_bus, clock=clock)

        state = await service.spawn_boss(uuid4(), "SkeletonKing", BossTier.NORMAL, 100, 100, 3)

        assert state.scaler.state.speed_multiplier == pytest.approx(1.25)

    @pytest.mark.asyncio
    async def test_explicit_farm_flag_and_time(self, service, clock, boss_id):
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)
        service.record_damage(boss_id, PLAYER_A, 100.0)

        result = await service.finish_encounter(
            boss_id, PLAYER_A, was_farm_kill=True, now=clock.now + 60_000
        )

        assert result.was_farm_kill is True
        assert result.duration_ms == 60_000


    @pytest.mark.asyncio
    async def test_resetting_one_boss_keeps_farm_history(self, service, clock):
        """같은 종류 보스 하나를 초기화해도 다른 보스의 반복 사냥 판정은 유지"""
        for _ in range(3):
            await fight(service, clock, uuid4())

        boss_a, boss_b = uuid4(), uuid4()
        state_a = await service.spawn_boss(boss_a, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)
        await service.spawn_boss(boss_b, "SkeletonKing", BossTier.NORMAL, 100, 100, 3)

        state_a.difficulty.reset()

        assert service.recent_kill_count("SkeletonKing") == 3
        service.record_damage(boss_b, PLAYER_A, 100.0)
        result = await service.finish_encounter(boss_b, PLAYER_A)
        assert result.was_farm_kill is True

    @pytest.mark.asyncio
    async def test_clear_recent_kills(self, service, clock):
        for _ in range(3):
            await fight(service, clock, uuid4())

        service.clear_recent_kills("SkeletonKing")
        service.clear_recent_kills("DragonLord")

        assert service.recent_kill_count("SkeletonKing") == 0
        result = await fight(service, clock, uuid4())
        assert result.was_farm_kill is False


class TestDespawn:
    """보상 없는 종료 테스트"""

    @pytest.mark.asyncio
    async def test_despawn(self, service, boss_id, published):
        await service.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL)
        service.record_damage(boss_id, PLAYER_A, 100.0)

        assert await service.despawn(boss_id) is True
        assert await service.despawn(boss_id) is False

        assert service.damage_statistics.ledger_for(boss_id) is None
        assert service.kill_counts.kill_count("SkeletonKing") == 0
        assert published[-1].type == BossEventType.BOSS_DESPAWNED


class TestPersistence:
    """처치 기록 저장 테스트"""

    @pytest.mark.asyncio
    async def test_history_repo_calls(self, clock, event_bus, boss_id, monkeypatch):
        record_spawn = AsyncMock(return_value=None)
        mark_killed = AsyncMock(return_value=True)
        monkeypatch.setattr("models.repos.boss_history_repo.record_spawn", record_spawn)
        monkeypatch.setattr("models.repos.boss_history_repo.mark_killed", mark_killed)

        service = EncounterService(event_bus=event_bus, clock=clock, persist_history=True)
        spawn_time = clock.now
        await fight(service, clock, boss_id)

        record_spawn.assert_awaited_once_with(boss_id, "SkeletonKing", BossTier.NORMAL, spawn_time)
        mark_killed.assert_awaited_once()
        kwargs = mark_killed.await_args.kwargs
        assert kwargs["killer_id"] == PLAYER_C
        assert kwargs["participant_count"] == 3
        assert kwargs["quality_level"] == "S"
        assert kwargs["total_damage"] == 1000.0

    @pytest.mark.asyncio
    async def test_history_not_persisted_by_default(self, service, clock, boss_id, monkeypatch):
        mark_killed = AsyncMock(return_value=True)
        monkeypatch.setattr("models.repos.boss_history_repo.mark_killed", mark_killed)

        await fight(service, clock, boss_id)

        mark_killed.assert_not_awaited()
