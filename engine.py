# engine.py
import asyncio
import os
from typing import Optional

from dotenv import load_dotenv
from tortoise import Tortoise

import logging

from config import DIFFICULTY, SCALING
from models.repos import boss_history_repo
from models.repos.kill_count_cache import KillCountCache
from service.boss.damage_statistics import DamageStatistics
from service.boss.encounter_service import EncounterService
from service.event.event_bus import EventBus

load_dotenv()

DATABASE_URL = os.getenv('BOSS_DATABASE_URL', "sqlite://boss_engine.sqlite3")
CACHE_EXPIRE_MS = int(os.getenv('BOSS_CACHE_EXPIRE_MS') or SCALING.CACHE_EXPIRE_MS)
FARM_KILL_THRESHOLD = int(os.getenv('BOSS_FARM_KILL_THRESHOLD') or DIFFICULTY.FARM_KILL_THRESHOLD)
LOG_LEVEL = os.getenv('LOG_LEVEL', "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    # 로그 기본 설정
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),  # DEBUG, INFO, WARNING, ERROR, CRITICAL
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


async def init_db(db_url: str = DATABASE_URL) -> None:
    await Tortoise.init(
        db_url=db_url,
        modules={"models": ["models"]}
    )
    await Tortoise.generate_schemas()


class BossEngine:
    """
    보스 엔진 조립

    데미지 통계, 처치 수 캐시, 이벤트 버스를 만들어 인카운터 서비스에 전달합니다.
    """

    def __init__(
        self,
        db_url: Optional[str] = DATABASE_URL,
        cache_expire_ms: int = CACHE_EXPIRE_MS,
        farm_kill_threshold: int = FARM_KILL_THRESHOLD,
    ):
        self.db_url = db_url
        self.event_bus = EventBus()
        self.kill_counts = KillCountCache()
        self.damage_statistics = DamageStatistics()
        self.encounters = EncounterService(
            damage_statistics=self.damage_statistics,
            kill_counts=self.kill_counts,
            event_bus=self.event_bus,
            persist_history=db_url is not None,
            cache_expire_ms=cache_expire_ms,
            farm_kill_threshold=farm_kill_threshold,
        )

    async def start(self) -> None:
        if self.db_url is None:
            logging.info("데이터 베이스 없이 시작 (처치 기록 비저장)")
            return

        logging.info("데이터 베이스 연결 시작")
        await init_db(self.db_url)
        logging.info("데이터 베이스 연결")

        self.kill_counts.load(await boss_history_repo.load_kill_counts())

    async def close(self) -> None:
        if self.db_url is not None:
            await Tortoise.close_connections()
        logging.info("보스 엔진 종료")


async def main() -> None:
    engine = BossEngine()
    await engine.start()
    logging.info(f"보스 엔진 준비 완료: kill cache={engine.kill_counts.snapshot()}")
    await engine.close()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
