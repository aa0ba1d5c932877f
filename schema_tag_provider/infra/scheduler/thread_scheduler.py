"""데몬 스레드 기반 고정 지연 스케줄러."""

from __future__ import annotations

from collections.abc import Callable
import logging
import threading

from schema_tag_provider.usecase.ports.scheduler import (
    ScheduledTask,
    Scheduler,
)

logger = logging.getLogger(__name__)


class _ThreadTask(ScheduledTask):
    """전용 데몬 스레드에서 반복 실행되는 작업."""

    def __init__(
        self,
        task: Callable[[], None],
        initial_delay_sec: float,
        delay_sec: float,
        name: str,
    ) -> None:
        self._task = task
        self._initial_delay = initial_delay_sec
        self._delay = delay_sec
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, daemon=True, name=name,
        )

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stop_event.set()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        # Event.wait 가 True 면 취소됨
        if self._stop_event.wait(self._initial_delay):
            return
        while True:
            try:
                self._task()
            except Exception:
                logger.exception(
                    'Scheduled task failed: %s', self._thread.name
                )
            if self._stop_event.wait(self._delay):
                return


class ThreadScheduler(Scheduler):
    """Scheduler의 스레드 구현체.

    예약마다 데몬 스레드 하나를 사용한다.
    작업의 예외는 로깅되며 다음 실행은 계속된다.
    """

    def __init__(self, name_prefix: str = 'scheduler') -> None:
        self._name_prefix = name_prefix
        self._lock = threading.Lock()
        self._tasks: list[_ThreadTask] = []
        self._counter = 0

    def schedule_with_fixed_delay(
        self,
        task: Callable[[], None],
        initial_delay_sec: float,
        delay_sec: float,
    ) -> ScheduledTask:
        if delay_sec <= 0:
            raise ValueError(f'delay_sec must be positive: {delay_sec}')

        with self._lock:
            self._counter += 1
            scheduled = _ThreadTask(
                task,
                initial_delay_sec,
                delay_sec,
                name=f'{self._name_prefix}-{self._counter}',
            )
            self._tasks.append(scheduled)
        scheduled.start()
        return scheduled

    def shutdown(self, timeout_sec: float = 5.0) -> None:
        with self._lock:
            tasks = list(self._tasks)
            self._tasks.clear()
        for scheduled in tasks:
            scheduled.cancel()
        for scheduled in tasks:
            scheduled.join(timeout=timeout_sec)
