################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from typing import cast

import pytest

from pose_spline.timing.spline_time import DURATION_MAX
from pose_spline.timing.spline_time import DURATION_MIN
from pose_spline.timing.spline_time import TIME_MAX
from pose_spline.timing.spline_time import TIME_MIN
from pose_spline.timing.spline_time import SplineDuration
from pose_spline.timing.spline_time import SplineTime
from pose_spline.timing.spline_time import nanoseconds_to_seconds
from pose_spline.timing.spline_time import seconds_to_nanoseconds
from pose_spline.timing.spline_time import to_nanoseconds
from pose_spline.timing.spline_time import to_seconds


def test_spline_time_normalizes_nanoseconds() -> None:
    timestamp: SplineTime = SplineTime(sec=1, nanosec=1_500_000_000)

    assert timestamp.sec == 2
    assert timestamp.nanosec == 500_000_000


def test_spline_time_round_trip_seconds() -> None:
    original_ns: int = 123_456_789
    timestamp: SplineTime = SplineTime.from_nsec(original_ns)
    seconds: float = timestamp.to_sec()
    round_trip: SplineTime = SplineTime.from_sec(seconds)

    assert round_trip.to_nsec() == original_ns


def test_spline_time_from_seconds_rollover() -> None:
    timestamp: SplineTime = SplineTime.from_sec(1.999_999_999_6)

    assert timestamp.sec == 2
    assert timestamp.nanosec == 0


def test_spline_time_rejects_invalid() -> None:
    with pytest.raises(ValueError, match="time must be non-negative"):
        SplineTime(sec=-1, nanosec=0)
    with pytest.raises(ValueError, match="time must be non-negative"):
        SplineTime(sec=0, nanosec=-1)
    with pytest.raises(ValueError, match="sec must be int"):
        SplineTime(sec=cast(int, 1.0), nanosec=0)
    with pytest.raises(ValueError, match="seconds must be finite"):
        SplineTime.from_sec(float("nan"))


def test_spline_time_ordering_and_zero() -> None:
    early: SplineTime = SplineTime(sec=1, nanosec=999_999_999)
    late: SplineTime = SplineTime(sec=2, nanosec=0)

    assert early < late
    assert late >= early
    assert early != late
    assert SplineTime(sec=0, nanosec=0).is_zero()
    assert not late.is_zero()


def test_time_arithmetic() -> None:
    start: SplineTime = SplineTime(sec=5, nanosec=750_000_000)
    end: SplineTime = SplineTime(sec=7, nanosec=250_000_000)

    span: SplineDuration = end - start
    assert span == SplineDuration(sec=1, nanosec=500_000_000)
    assert start + span == end
    assert end - span == start
    assert (start - end).to_sec() == -1.5


def test_duration_normalizes_negative_values() -> None:
    duration: SplineDuration = SplineDuration.from_sec(-0.5)

    assert duration.sec == -1
    assert duration.nanosec == 500_000_000
    assert duration.to_sec() == -0.5
    assert (-duration).to_sec() == 0.5
    assert (duration + SplineDuration(sec=0, nanosec=500_000_000)).is_zero()
    assert (duration - duration).is_zero()


def test_to_seconds_accepts_floats_and_times() -> None:
    assert to_seconds(1.25) == 1.25
    assert to_seconds(3) == 3.0
    assert to_seconds(SplineTime(sec=2, nanosec=500_000_000)) == 2.5
    with pytest.raises(ValueError, match="timestamp must be"):
        to_seconds(cast(float, "1.0"))
    with pytest.raises(ValueError, match="timestamp must be"):
        to_seconds(True)


def test_to_nanoseconds_is_exact_for_times() -> None:
    stamp: SplineTime = SplineTime(sec=1_790_000_000, nanosec=123_456_789)

    assert to_nanoseconds(stamp) == 1_790_000_000_123_456_789
    assert to_nanoseconds(0.7) == 700_000_000
    assert to_nanoseconds(-0.05) == -50_000_000
    assert to_nanoseconds(1_790_000_000.25) == 1_790_000_000_250_000_000
    with pytest.raises(ValueError, match="seconds must be finite"):
        to_nanoseconds(float("inf"))


def test_seconds_conversion_at_epoch_magnitude() -> None:
    ns: int = seconds_to_nanoseconds(1_790_000_000.5)

    assert ns == 1_790_000_000_500_000_000
    assert nanoseconds_to_seconds(ns) == 1_790_000_000.5
    assert nanoseconds_to_seconds(-300_000_000) == pytest.approx(-0.3)


def test_time_and_duration_formatting() -> None:
    assert str(SplineTime(sec=12, nanosec=5)) == "12.000000005"
    assert str(SplineTime(sec=0, nanosec=0)) == "0.000000000"
    assert str(SplineDuration.from_sec(-0.5)) == "-0.500000000"
    assert str(SplineDuration(sec=3, nanosec=250_000_000)) == "3.250000000"


def test_time_limits() -> None:
    assert TIME_MIN == SplineTime(sec=0, nanosec=1)
    assert TIME_MAX == SplineTime(sec=4_294_967_295, nanosec=999_999_999)
    assert TIME_MIN < SplineTime(sec=1, nanosec=0) < TIME_MAX
    assert DURATION_MIN.to_nsec() == -(2**31) * 1_000_000_000
    assert DURATION_MAX.sec == 2**31 - 1
    assert DURATION_MIN < SplineDuration.from_sec(0.0) < DURATION_MAX
