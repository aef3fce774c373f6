import pytest

from neonshot.scheduler import ManualScheduler


def test_repeating_job_fires_each_interval():
    clock = ManualScheduler()
    calls = []
    clock.schedule(calls.append, 0.5)

    assert clock.advance(1.6) == 3
    assert calls == pytest.approx([0.5, 0.5, 0.5])
    assert clock.time() == pytest.approx(1.6)


def test_once_fires_a_single_time():
    clock = ManualScheduler()
    calls = []
    clock.schedule_once(calls.append, 1.0)
    clock.advance(0.999)
    assert calls == []
    clock.advance(5.0)
    assert calls == pytest.approx([1.0])
    assert clock.pending == 0


def test_unschedule_stops_job():
    clock = ManualScheduler()
    calls = []
    clock.schedule(calls.append, 0.1)
    clock.advance(0.25)
    clock.unschedule(calls.append)
    clock.advance(1.0)
    assert len(calls) == 2
    assert not clock.is_scheduled(calls.append)


def test_unschedule_unknown_is_harmless():
    ManualScheduler().unschedule(print)


def test_jobs_fire_in_time_order():
    clock = ManualScheduler()
    order = []
    clock.schedule(lambda dt: order.append("fast"), 0.3)
    clock.schedule_once(lambda dt: order.append("once"), 0.5)
    clock.advance(1.0)
    assert order == ["fast", "once", "fast", "fast"]


def test_callback_can_cancel_another():
    clock = ManualScheduler()
    calls = []

    def victim(dt):
        calls.append("victim")

    def killer(dt):
        calls.append("killer")
        clock.unschedule(victim)

    clock.schedule(killer, 0.1)
    clock.schedule(victim, 0.2)
    clock.advance(1.0)
    assert "victim" not in calls
