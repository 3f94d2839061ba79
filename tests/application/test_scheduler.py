from update_checker.application.scheduler import CheckScheduler
from update_checker.core.config import Configuration


def test_apply_starts_recurring_timer_with_interval(qapp) -> None:
    scheduler = CheckScheduler()

    scheduler.apply(Configuration(auto_check_interval_minutes=30))

    assert scheduler.is_auto_check_active()
    assert scheduler.auto_timer.interval() == 30 * 60 * 1000
    scheduler.stop()


def test_reapplying_restarts_the_same_timer(qapp) -> None:
    scheduler = CheckScheduler()
    scheduler.apply(Configuration(auto_check_interval_minutes=60))
    timer = scheduler.auto_timer

    scheduler.apply(Configuration(auto_check_interval_minutes=15))

    assert scheduler.auto_timer is timer
    assert timer.isActive()
    assert timer.interval() == 15 * 60 * 1000
    scheduler.stop()


def test_disabling_stops_the_timer(qapp) -> None:
    scheduler = CheckScheduler()
    scheduler.apply(Configuration())

    scheduler.apply(Configuration(auto_check_enabled=False))

    assert not scheduler.is_auto_check_active()


def test_start_applies_configuration_even_when_disabled(qapp) -> None:
    scheduler = CheckScheduler()

    scheduler.start(Configuration(auto_check_enabled=False))

    assert not scheduler.is_auto_check_active()


def test_each_firing_requests_one_check(qapp) -> None:
    scheduler = CheckScheduler()
    requests: list[bool] = []
    scheduler.check_requested.connect(lambda: requests.append(True))

    scheduler._on_auto_timeout()
    scheduler._on_first_launch()

    assert requests == [True, True]
