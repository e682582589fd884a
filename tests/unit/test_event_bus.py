"""
이벤트 버스 유닛 테스트
"""
import pytest

from service.event.event_bus import BossEvent, BossEventType, EventBus


def make_event(boss_id, event_type=BossEventType.BOSS_KILLED):
    return BossEvent(type=event_type, boss_id=boss_id, data={"boss_type": "SkeletonKing"})


class TestEventBus:
    """구독/발행 테스트"""

    @pytest.mark.asyncio
    async def test_publish_to_subscribers(self, boss_id):
        bus = EventBus()
        received = []

        async def on_killed(event):
            received.append(event)

        bus.subscribe(BossEventType.BOSS_KILLED, on_killed)
        bus.subscribe(BossEventType.BOSS_KILLED, on_killed)
        await bus.publish(make_event(boss_id))
        await bus.publish(make_event(boss_id, BossEventType.BOSS_SPAWNED))

        assert bus.get_subscriber_count(BossEventType.BOSS_KILLED) == 1
        assert len(received) == 1
        assert received[0].data["boss_type"] == "SkeletonKing"

    @pytest.mark.asyncio
    async def test_failing_subscriber_is_isolated(self, boss_id):
        """구독자 오류는 다른 구독자에게 영향을 주지 않음"""
        bus = EventBus()
        received = []

        async def broken(event):
            raise RuntimeError("announce failed")

        async def on_killed(event):
            received.append(event)

        bus.subscribe(BossEventType.BOSS_KILLED, broken)
        bus.subscribe(BossEventType.BOSS_KILLED, on_killed)
        await bus.publish(make_event(boss_id))

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, boss_id):
        bus = EventBus()
        received = []

        async def on_killed(event):
            received.append(event)

        bus.subscribe(BossEventType.BOSS_KILLED, on_killed)
        bus.unsubscribe(BossEventType.BOSS_KILLED, on_killed)
        bus.unsubscribe(BossEventType.BOSS_DESPAWNED, on_killed)
        await bus.publish(make_event(boss_id))

        assert received == []

    def test_clear_all_subscribers(self):
        bus = EventBus()

        async def handler(event):
            pass

        bus.subscribe(BossEventType.BOSS_SPAWNED, handler)
        bus.clear_all_subscribers()

        assert bus.get_subscriber_count(BossEventType.BOSS_SPAWNED) == 0
