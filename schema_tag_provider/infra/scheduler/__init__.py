"""스레드 기반 스케줄러 인프라 (Scheduler 구현)."""

from schema_tag_provider.infra.scheduler.thread_scheduler import (
    ThreadScheduler,
)

__all__ = ["ThreadScheduler"]
