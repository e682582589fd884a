"""
보스 전투 분석/보상 서비스 모듈

데미지 기록, 난이도 스케일링, 품질 평가, 보상 분배를 담당합니다.
"""
from service.boss.damage_ledger import DamageLedger, DamageRankEntry
from service.boss.damage_statistics import DamageStatistics
from service.boss.difficulty_scaler import AttributeProgressionState, DifficultyScaler
from service.boss.difficulty_calculator import DifficultyCalculator, RecentKillWindow
from service.boss.quality_scorer import QualityScore, QualityScorer
from service.boss.reward_allocator import RewardAllocation, RewardAllocator, RewardShare
from service.boss.encounter_service import EncounterResult, EncounterService, EncounterState

__all__ = [
    "DamageLedger", "DamageRankEntry", "DamageStatistics",
    "AttributeProgressionState", "DifficultyScaler",
    "DifficultyCalculator", "RecentKillWindow",
    "QualityScore", "QualityScorer",
    "RewardAllocation", "RewardAllocator", "RewardShare",
    "EncounterResult", "EncounterService", "EncounterState",
]
