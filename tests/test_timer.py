"""Tests for the microbench time source."""

import time

import pytest

from microbench.core import NS_PER_SEC, TimeSource, Timestamp, hr_to_seconds
from microbench.utils.errors import ClockUnavailableError


def test_hr_to_seconds():
    assert hr_to_seconds(Timestamp(2, 500_000_000)) == pytest.approx(2.5)


def test_now_splits_seconds_and_nanoseconds(fake_clock, fake_time_source):
    fake_clock.now_ns = 3 * NS_PER_SEC + 250
    assert fake_time_source.now() == Timestamp(3, 250)


def test_elapsed_since(fake_clock, fake_time_source):
    start = fake_time_source.mark()
    fake_clock.advance(1.25)
    assert fake_time_source.delta(start) == Timestamp(1, 250_000_000)
    assert fake_time_source.elapsed_since(start) == pytest.approx(1.25)


def test_elapsed_never_negative(fake_clock, fake_time_source):
    start = fake_time_source.mark()
    fake_clock.now_ns -= 10
    assert fake_time_source.elapsed_since(start) == 0.0


def test_platform_clock_is_monotonic():
    source = TimeSource()
    start = source.mark()
    time.sleep(0.01)
    first = source.elapsed_since(start)
    second = source.elapsed_since(start)
    assert first >= 0.005
    assert second >= first
    assert source.resolution > 0


def test_non_monotonic_platform_clock_is_fatal(mocker):
    info = mocker.Mock(monotonic=False, implementation="fake()", resolution=1e-9)
    mocker.patch("microbench.core.timer.time.get_clock_info", return_value=info)
    with pytest.raises(ClockUnavailableError):
        TimeSource()


def test_missing_platform_clock_is_fatal(mocker):
    mocker.patch("microbench.core.timer.time.get_clock_info", side_effect=ValueError("unknown clock"))
    with pytest.raises(ClockUnavailableError):
        TimeSource()
