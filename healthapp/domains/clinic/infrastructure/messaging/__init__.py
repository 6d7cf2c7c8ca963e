from .redis_event_bus import LoggingEventBus, RedisEventBus

__all__ = ["LoggingEventBus", "RedisEventBus"]
