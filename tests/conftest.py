"""
pytest 설정 및 공통 픽스처 정의
"""
import sys
from pathlib import Path
from typing import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# pytest 설정
# =============================================================================


def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# =============================================================================
# 데이터베이스 픽스처
# =============================================================================


@pytest_asyncio.fixture
async def test_db() -> AsyncGenerator[None, None]:
    """
    테스트용 인메모리 SQLite 데이터베이스
    각 테스트 함수마다 새로운 DB 생성
    """
    from tortoise import Tortoise

    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["models"]}
    )
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


# =============================================================================
# 시계 픽스처
# =============================================================================


class FakeClock:
    """수동으로 진행시키는 테스트용 시계 (ms)"""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# 식별자 픽스처
# =============================================================================


@pytest.fixture
def boss_id() -> UUID:
    from tests.fixtures.bosses import BOSS_ID
    return BOSS_ID


@pytest.fixture
def participants() -> tuple[UUID, UUID, UUID]:
    """기여도 테스트용 참가자 3명"""
    from tests.fixtures.bosses import PLAYER_A, PLAYER_B, PLAYER_C
    return PLAYER_A, PLAYER_B, PLAYER_C


# =============================================================================
# 유틸리티 함수
# =============================================================================


def assert_approx_equal(actual: float, expected: float, tolerance: float = 0.1):
    """근사값 비교"""
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected} ± {tolerance}, got {actual}"
    )
