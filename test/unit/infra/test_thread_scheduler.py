"""ThreadScheduler 유닛 테스트."""

import threading

import pytest

from schema_tag_provider.infra.scheduler import ThreadScheduler


@pytest.fixture
def scheduler():
    scheduler = ThreadScheduler(name_prefix="test")
    yield scheduler
    scheduler.shutdown(timeout_sec=2.0)


class TestThreadScheduler:

    def test_runs_repeatedly(self, scheduler):
        done = threading.Event()
        calls = []

        def task():
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        scheduler.schedule_with_fixed_delay(task, 0, 0.01)

        assert done.wait(timeout=5.0)

    def test_exception_does_not_stop_task(self, scheduler):
        done = threading.Event()
        calls = []

        def task():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            done.set()

        scheduler.schedule_with_fixed_delay(task, 0, 0.01)

        assert done.wait(timeout=5.0)

    def test_cancel_before_initial_delay(self, scheduler):
        called = threading.Event()
        scheduled = scheduler.schedule_with_fixed_delay(
            called.set, 10.0, 10.0
        )
        scheduled.cancel()

        assert scheduled.cancelled
        assert not called.wait(timeout=0.1)

    def test_shutdown_cancels_tasks(self):
        scheduler = ThreadScheduler()
        scheduled = scheduler.schedule_with_fixed_delay(
            lambda: None, 10.0, 10.0
        )
        scheduler.shutdown(timeout_sec=2.0)
        assert scheduled.cancelled

    @pytest.mark.parametrize("delay", [0, -1])
    def test_rejects_non_positive_delay(self, scheduler, delay):
        with pytest.raises(ValueError):
            scheduler.schedule_with_fixed_delay(lambda: None, 0, delay)
