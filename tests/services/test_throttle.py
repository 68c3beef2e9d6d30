from wordguard.config.models import ThrottlingConfig
from wordguard.services.throttle import MessageThrottle


def test_duplicate_inside_interval_is_dropped(clock):
    throttle = MessageThrottle(ThrottlingConfig(duplicate_interval_ms=500), clock=clock)

    assert throttle.allow(-100, 5) is True
    clock.advance(0.2)
    assert throttle.allow(-100, 5) is False
    assert throttle.allow(-100, 6) is True
    clock.advance(0.5)
    assert throttle.allow(-100, 5) is True


def test_sweep_drops_only_stale_entries(clock):
    throttle = MessageThrottle(ThrottlingConfig(duplicate_interval_ms=500), clock=clock)

    throttle.allow(-100, 5)
    clock.advance(1)
    throttle.allow(-100, 6)

    assert throttle.sweep() == 1
    assert throttle.allow(-100, 5) is True
    assert throttle.allow(-100, 6) is False
