"""
테스트용 보스 전투 픽스처 데이터
"""
from typing import Any
from uuid import UUID

BOSS_ID = UUID("00000000-0000-0000-0000-00000000b055")

PLAYER_A = UUID("00000000-0000-0000-0000-00000000000a")
PLAYER_B = UUID("00000000-0000-0000-0000-00000000000b")
PLAYER_C = UUID("00000000-0000-0000-0000-00000000000c")

# 기여도 15% / 35% / 50% (총 1000)
DAMAGE_SPLIT: dict[UUID, float] = {
    PLAYER_A: 150.0,
    PLAYER_B: 350.0,
    PLAYER_C: 500.0,
}

# 최고 품질 전투: 3인, 전설 등급, 난이도 90, 5분, 무사망
PERFECT_ENCOUNTER: dict[str, Any] = {
    "participant_count": 3,
    "boss_level": 4,
    "difficulty_score": 90,
    "duration_ms": 5 * 60 * 1000,
    "death_count": 0,
    "boss_was_weakened": False,
    "was_farm_kill": False,
}

# 최저 품질 전투: 1인, 일반 등급, 난이도 0, 50분, 사망 10회, 약화, 반복 사냥
WORST_ENCOUNTER: dict[str, Any] = {
    "participant_count": 1,
    "boss_level": 1,
    "difficulty_score": 0,
    "duration_ms": 50 * 60 * 1000,
    "death_count": 10,
    "boss_was_weakened": True,
    "was_farm_kill": True,
}
