"""
이벤트 버스 (Event Bus)

옵저버 패턴을 사용하여 보스 전투 이벤트를 발행하고 구독합니다.
보스 엔진은 이벤트를 발행하기만 하고, 공지/보상 지급/리포트 등 외부 구독자가 처리합니다.
"""

import logging
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Any
from uuid import UUID

logger = logging.getLogger(__name__)


class BossEventType(Enum):
    """보스 이벤트 타입"""

    BOSS_SPAWNED = "boss_spawned"                   # 보스 등장
    BOSS_KILLED = "boss_killed"                     # 보스 처치
    BOSS_DESPAWNED = "boss_despawned"               # 보스 소멸 (보상 없음)
    REWARDS_DISTRIBUTED = "rewards_distributed"     # 보상 분배 완료


@dataclass
class BossEvent:
    """보스 이벤트"""

    type: BossEventType
    boss_id: UUID
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)

    def __repr__(self) -> str:
        return f"BossEvent(type={self.type.value}, boss_id={self.boss_id}, data={self.data})"


class EventBus:
    """
    이벤트 버스

    발행자(Publisher)는 이벤트를 발행하고, 구독자(Subscriber)는 이벤트를 수신합니다.
    전역 인스턴스 없이 필요한 서비스에 생성자로 전달해 사용합니다.

    Example:
        >>> event_bus = EventBus()
        >>>
        >>> async def on_boss_killed(event: BossEvent):
        ...     print(f"Boss killed: {event.data['boss_type']}")
        >>>
        >>> event_bus.subscribe(BossEventType.BOSS_KILLED, on_boss_killed)
        >>> await event_bus.publish(BossEvent(
        ...     type=BossEventType.BOSS_KILLED,
        ...     boss_id=boss_id,
        ...     data={"boss_type": "SkeletonKing"}
        ... ))
    """

    def __init__(self):
        self._subscribers: Dict[BossEventType, List[Callable]] = {}

    def subscribe(self, event_type: BossEventType, callback: Callable) -> None:
        """
        이벤트 구독

        Args:
            event_type: 구독할 이벤트 타입
            callback: 이벤트 발생 시 호출할 콜백 함수 (async function)
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)
            logger.debug(f"Subscribed to {event_type.value}: {callback.__name__}")

    def unsubscribe(self, event_type: BossEventType, callback: Callable) -> None:
        """구독 취소"""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
                logger.debug(f"Unsubscribed from {event_type.value}: {callback.__name__}")
            except ValueError:
                pass

    async def publish(self, event: BossEvent) -> None:
        """
        이벤트 발행

        각 구독자의 콜백이 순차적으로 호출되며, 에러가 발생해도 다른 구독자에게 영향을 주지 않습니다.

        Args:
            event: 발행할 이벤트
        """
        if event.type not in self._subscribers:
            logger.debug(f"No subscribers for event: {event.type.value}")
            return

        logger.debug(f"Publishing event: {event}")

        for callback in self._subscribers[event.type]:
            try:
                await callback(event)
            except Exception as e:
                logger.error(
                    f"Error in event callback {callback.__name__} for {event.type.value}: {e}",
                    exc_info=True
                )

    def get_subscriber_count(self, event_type: BossEventType) -> int:
        return len(self._subscribers.get(event_type, []))

    def clear_all_subscribers(self) -> None:
        """모든 구독자 제거 (테스트용)"""
        self._subscribers.clear()
        logger.info("All subscribers cleared")
