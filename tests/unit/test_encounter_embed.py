"""
인카운터 결과 임베드 테스트
"""
import discord

from config import BossTier
from service.boss.damage_ledger import DamageRankEntry
from service.boss.quality_scorer import QualityScore
from service.boss.reward_allocator import RewardAllocator
from service.boss.encounter_service import EncounterResult
from utils.encounter_embed import EncounterEmbed
from tests.fixtures.bosses import DAMAGE_SPLIT, PLAYER_A, PLAYER_B, PLAYER_C


def make_result(boss_id, was_farm_kill=False):
    allocation = RewardAllocator(BossTier.LEGENDARY).allocate(800, 80, DAMAGE_SPLIT, killer_id=PLAYER_C)
    ranking = [
        DamageRankEntry(1, PLAYER_C, 500.0, 0.5),
        DamageRankEntry(2, PLAYER_B, 350.0, 0.35),
        DamageRankEntry(3, PLAYER_A, 150.0, 0.15),
    ]
    return EncounterResult(
        boss_id=boss_id,
        boss_type="SkeletonKing",
        tier=BossTier.LEGENDARY,
        killer_id=PLAYER_C,
        duration_ms=(4 * 60 + 5) * 1000,
        death_count=0,
        was_farm_kill=was_farm_kill,
        quality=QualityScore.from_score(95),
        difficulty_score=72,
        difficulty_multiplier=1.25,
        drop_multiplier=3.0,
        allocation=allocation,
        total_damage=1000.0,
        damage_snapshot=dict(DAMAGE_SPLIT),
        ranking=ranking,
    )


class TestEncounterEmbed:
    """임베드 생성 테스트"""

    def test_build(self, boss_id):
        embed = EncounterEmbed(make_result(boss_id)).build()

        assert isinstance(embed, discord.Embed)
        assert "SkeletonKing" in embed.title
        assert "**S**" in embed.description

        fields = {field.name: field.value for field in embed.fields}
        assert fields["⏱️ 전투 시간"] == "4분 5초"
        assert fields["🔥 난이도"] == "지옥 (72) · x1.25"
        assert "(50.0%) 🗡️" in fields["⚔️ 데미지 순위"]
        assert fields["🎁 보상 풀"] == "800 EXP / 80 정기"
        assert "480 EXP" in fields["📦 분배"]

    def test_name_resolver_and_limit(self, boss_id):
        names = {PLAYER_A: "철수", PLAYER_B: "영희", PLAYER_C: "민수"}

        embed = EncounterEmbed(make_result(boss_id), name_of=names.get, limit=1).build()

        fields = {field.name: field.value for field in embed.fields}
        assert fields["⚔️ 데미지 순위"].startswith("1. 민수")
        assert "영희" not in fields["⚔️ 데미지 순위"]

    def test_farm_kill_footer(self, boss_id):
        embed = EncounterEmbed(make_result(boss_id, was_farm_kill=True)).build()
        assert embed.footer.text == "반복 사냥 처치 (품질 감점)"
