"""
Boss history repository

보스 등장/처치 기록 CRUD를 담당합니다.
DB 오류는 로그만 남기고 전투 흐름을 막지 않습니다.
"""
import logging
from collections import Counter
from typing import Optional
from uuid import UUID

from tortoise.exceptions import BaseORMException

from config import BossTier
from models import BossKillHistory, BossHistoryStatus

logger = logging.getLogger(__name__)


async def record_spawn(boss_id: UUID, boss_type: str, tier: BossTier, spawn_time: int) -> Optional[BossKillHistory]:
    """보스 등장 기록"""
    try:
        return await BossKillHistory.create(
            boss_id=boss_id,
            boss_type=boss_type,
            tier=tier.level,
            status=BossHistoryStatus.SPAWNED,
            spawn_time=spawn_time,
        )
    except BaseORMException as e:
        logger.error(f"Failed to record boss spawn {boss_id}: {e}", exc_info=True)
        return None


async def mark_killed(
    boss_id: UUID,
    kill_time: int,
    killer_id: Optional[UUID],
    participant_count: int,
    total_damage: float,
    quality_score: int,
    quality_level: str,
) -> bool:
    """
    처치 기록

    Returns:
        갱신 성공 여부 (등장 기록이 없으면 False)
    """
    try:
        updated = await BossKillHistory.filter(boss_id=boss_id).update(
            status=BossHistoryStatus.KILLED,
            kill_time=kill_time,
            killer_id=killer_id,
            participant_count=participant_count,
            total_damage=total_damage,
            quality_score=quality_score,
            quality_level=quality_level,
        )
        return updated > 0
    except BaseORMException as e:
        logger.error(f"Failed to mark boss killed {boss_id}: {e}", exc_info=True)
        return False


async def mark_despawned(boss_id: UUID) -> bool:
    try:
        updated = await BossKillHistory.filter(boss_id=boss_id).update(status=BossHistoryStatus.DESPAWNED)
        return updated > 0
    except BaseORMException as e:
        logger.error(f"Failed to mark boss despawned {boss_id}: {e}", exc_info=True)
        return False


async def count_kills(boss_type: str) -> int:
    """보스 종류별 누적 처치 수"""
    try:
        return await BossKillHistory.filter(boss_type=boss_type, status=BossHistoryStatus.KILLED).count()
    except BaseORMException as e:
        logger.error(f"Failed to count kills for {boss_type}: {e}", exc_info=True)
        return 0


async def load_kill_counts() -> dict[str, int]:
    """전체 보스 종류별 누적 처치 수 (캐시 초기화용)"""
    try:
        boss_types = await BossKillHistory.filter(
            status=BossHistoryStatus.KILLED
        ).values_list("boss_type", flat=True)
    except BaseORMException as e:
        logger.error(f"Failed to load kill counts: {e}", exc_info=True)
        return {}
    return dict(Counter(boss_types))


async def recent_history(boss_type: str, limit: int = 10) -> list[BossKillHistory]:
    """보스 종류별 최근 기록 (최신순)"""
    try:
        return await BossKillHistory.filter(boss_type=boss_type).order_by("-spawn_time").limit(limit)
    except BaseORMException as e:
        logger.error(f"Failed to query boss history for {boss_type}: {e}", exc_info=True)
        return []
