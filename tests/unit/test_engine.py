"""
엔진 조립 테스트
"""
from unittest.mock import AsyncMock

import pytest

from config import BossTier
from engine import BossEngine
from tests.fixtures.bosses import PLAYER_A


class TestBossEngine:
    """서비스 조립 테스트"""

    def test_services_share_collaborators(self):
        engine = BossEngine(db_url=None)

        assert engine.encounters.damage_statistics is engine.damage_statistics
        assert engine.encounters.kill_counts is engine.kill_counts
        assert engine.encounters.event_bus is engine.event_bus
        assert engine.encounters.persist_history is False

    @pytest.mark.asyncio
    async def test_start_without_database(self, boss_id):
        engine = BossEngine(db_url=None)
        await engine.start()

        await engine.encounters.spawn_boss(boss_id, "SkeletonKing", BossTier.NORMAL)
        engine.encounters.record_damage(boss_id, PLAYER_A, 10.0)
        result = await engine.encounters.finish_encounter(boss_id, PLAYER_A)

        assert PLAYER_A in result.allocation
        assert engine.kill_counts.kill_count("SkeletonKing") == 1
        await engine.close()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_start_loads_kill_counts(self, monkeypatch):
        init_db = AsyncMock()
        monkeypatch.setattr("engine.init_db", init_db)
        monkeypatch.setattr(
            "models.repos.boss_history_repo.load_kill_counts",
            AsyncMock(return_value={"SkeletonKing": 4}),
        )
        monkeypatch.setattr("engine.Tortoise.close_connections", AsyncMock())

        engine = BossEngine(db_url="sqlite://:memory:")
        await engine.start()

        init_db.assert_awaited_once_with("sqlite://:memory:")
        assert engine.kill_counts.kill_count("SkeletonKing") == 4
        await engine.close()
