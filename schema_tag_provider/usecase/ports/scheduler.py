"""주기 작업 스케줄러 포트 인터페이스."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class ScheduledTask(ABC):
    """예약된 작업 핸들."""

    @abstractmethod
    def cancel(self) -> None:
        """이후 실행을 취소한다. 실행 중인 작업은 끝까지 수행된다."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """취소 여부."""


class Scheduler(ABC):
    """주기 작업 스케줄러 인터페이스."""

    @abstractmethod
    def schedule_with_fixed_delay(
        self,
        task: Callable[[], None],
        initial_delay_sec: float,
        delay_sec: float,
    ) -> ScheduledTask:
        """작업 종료 후 일정 간격으로 반복 실행되도록 예약한다.

        Args:
            task: 실행할 작업.
            initial_delay_sec: 첫 실행까지 대기 시간 (초).
            delay_sec: 실행 종료 후 다음 실행까지 대기 시간 (초).

        Returns:
            취소 가능한 작업 핸들.
        """

    @abstractmethod
    def shutdown(self) -> None:
        """예약된 모든 작업을 취소한다."""
