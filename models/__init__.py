from models.boss_kill_history import BossKillHistory, BossHistoryStatus

__all__ = ["BossKillHistory", "BossHistoryStatus"]
