"""보스 처치 기록 모델"""
from enum import Enum

from tortoise import fields
from tortoise.models import Model


class BossHistoryStatus(str, Enum):
    """보스 기록 상태"""
    SPAWNED = "SPAWNED"
    KILLED = "KILLED"
    DESPAWNED = "DESPAWNED"


class BossKillHistory(Model):
    """
    보스 등장/처치 기록

    보스 종류별 누적 처치 수는 난이도 스케일링의 입력으로 사용됩니다.
    """

    id = fields.IntField(pk=True)

    boss_id = fields.UUIDField(unique=True)
    """보스 인스턴스 ID"""

    boss_type = fields.CharField(max_length=100, index=True)
    """보스 종류 (예: SkeletonKing)"""

    tier = fields.IntField(default=1)
    """보스 등급 (1~4)"""

    status = fields.CharEnumField(BossHistoryStatus, default=BossHistoryStatus.SPAWNED)
    """SPAWNED, KILLED, DESPAWNED"""

    spawn_time = fields.BigIntField()
    """등장 시각 (ms)"""

    kill_time = fields.BigIntField(null=True)
    """처치 시각 (ms)"""

    killer_id = fields.UUIDField(null=True)
    """막타 참가자"""

    participant_count = fields.IntField(default=0)
    """보상 대상 참가 인원"""

    total_damage = fields.FloatField(default=0.0)
    """총 데미지"""

    quality_score = fields.IntField(null=True)
    """품질 점수 (0~100)"""

    quality_level = fields.CharField(max_length=1, null=True)
    """품질 등급 (S/A/B/C/D)"""

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "boss_kill_history"
        indexes = [
            ("boss_type", "status"),  # 종류별 처치 수 집계
        ]

    def __str__(self):
        return f"BossKillHistory({self.boss_type} tier {self.tier} [{self.status}])"
