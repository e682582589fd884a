import discord
from typing import Callable, Optional
from uuid import UUID

from config import QUALITY_TABLE, get_tier_info, DIFFICULTY_LEVEL_TABLE, DifficultyLevel
from service.boss.encounter_service import EncounterResult

QUALITY_COLOR = {
    "S": 0xF1C40F,
    "A": 0x9B59B6,
    "B": 0x3498DB,
    "C": 0x2ECC71,
    "D": 0x95A5A6,
}

NameResolver = Callable[[UUID], str]


def _short_name(participant_id: UUID) -> str:
    return str(participant_id)[:8]


class EncounterEmbed:
    def __init__(self, result: EncounterResult, name_of: Optional[NameResolver] = None, limit: int = 5):
        self.result = result
        self.name_of = name_of or _short_name
        self.limit = limit
        self.embed = self._create_base_embed()

    # 기본 임베드 생성
    def _create_base_embed(self) -> discord.Embed:
        tier_info = get_tier_info(self.result.tier)
        quality = self.result.quality
        quality_info = QUALITY_TABLE[quality.level]

        embed = discord.Embed(
            title=f"{tier_info.color_emoji} {self.result.boss_type} 처치!",
            description=f"{tier_info.name} 보스 · 품질 {quality_info.color_emoji} **{quality.level.value}** ({quality.score}/100)",
            color=QUALITY_COLOR.get(quality.level.value, 0x00ff00)
        )
        if self.result.was_farm_kill:
            embed.set_footer(text="반복 사냥 처치 (품질 감점)")
        return embed

    def build(self) -> discord.Embed:
        self._add_battle_info()
        self._add_ranking()
        self._add_rewards()
        return self.embed

    def _add_battle_info(self) -> None:
        seconds = self.result.duration_ms // 1000
        level = DifficultyLevel.from_score(self.result.difficulty_score)

        self._add_field("⏱️ 전투 시간", f"{seconds // 60}분 {seconds % 60}초")
        self._add_field("💀 사망", f"{self.result.death_count}회")
        self._add_field(
            "🔥 난이도",
            f"{DIFFICULTY_LEVEL_TABLE[level].name} ({self.result.difficulty_score}) · x{self.result.difficulty_multiplier:.2f}"
        )

    def _add_ranking(self) -> None:
        if not self.result.ranking:
            return

        lines = []
        for entry in self.result.ranking[:self.limit]:
            marker = " 🗡️" if entry.participant_id == self.result.killer_id else ""
            lines.append(
                f"{entry.rank}. {self.name_of(entry.participant_id)} "
                f"{entry.damage:,.0f} ({entry.percentage * 100:.1f}%){marker}"
            )
        self._add_field("⚔️ 데미지 순위", "\n".join(lines), inline=False)

    def _add_rewards(self) -> None:
        allocation = self.result.allocation
        self._add_field(
            "🎁 보상 풀",
            f"{allocation.total_experience:,.0f} EXP / {allocation.total_spirits:,.0f} 정기",
            inline=False
        )
        if not allocation.shares:
            return

        ranked = sorted(allocation.shares.items(), key=lambda item: -item[1].experience)[:self.limit]
        lines = [
            f"{self.name_of(pid)}: {share.experience:,.0f} EXP / {share.spirits:,.0f} 정기"
            for pid, share in ranked
        ]
        self._add_field("📦 분배", "\n".join(lines), inline=False)

    def _add_field(self, name: str, value: str, inline: bool = True) -> None:
        self.embed.add_field(name=name, value=value, inline=inline)
