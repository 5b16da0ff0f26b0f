from backend.timer import CountdownTimer, format_seconds


def test_start_counts_down_and_stops_at_zero(timer, fake_clock):
    expired = []
    timer.bind(on_expire=lambda *_: expired.append(True))
    timer.start(3)
    assert timer.running
    fake_clock.advance()
    assert timer.seconds_left == 2
    fake_clock.advance(2)
    assert timer.seconds_left == 0
    assert not timer.running
    assert expired == [True]
    assert fake_clock.events == []


def test_start_is_idempotent(timer, fake_clock):
    timer.start(10)
    timer.start(99)
    assert len(fake_clock.events) == 1
    assert timer.seconds_left == 10


def test_pause_keeps_remaining(timer, fake_clock):
    timer.start(10)
    fake_clock.advance(4)
    timer.pause()
    fake_clock.advance(4)
    assert timer.seconds_left == 6
    assert not timer.running
    timer.start()
    fake_clock.advance()
    assert timer.seconds_left == 5


def test_reset_stops_and_sets_value(timer, fake_clock):
    timer.start(10)
    timer.reset(0)
    assert timer.seconds_left == 0
    assert not timer.running
    assert fake_clock.events == []
    timer.reset(90)
    assert timer.seconds_left == 90
    assert not timer.running


def test_seconds_left_is_observable(fake_clock):
    timer = CountdownTimer(clock=fake_clock)
    seen = []
    timer.bind(seconds_left=lambda _, value: seen.append(value))
    timer.start(2)
    fake_clock.advance(2)
    assert seen == [2, 1, 0]


def test_format_seconds():
    assert format_seconds(0) == "00:00"
    assert format_seconds(90) == "01:30"
    assert format_seconds(605) == "10:05"
