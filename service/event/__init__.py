"""
보스 이벤트 모듈
"""
from service.event.event_bus import BossEvent, BossEventType, EventBus

__all__ = ["BossEvent", "BossEventType", "EventBus"]
