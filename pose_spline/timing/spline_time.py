################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Timestamp and duration types used at the spline boundary
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Union
from typing import overload


# Nanoseconds per second for time conversions
_NS_PER_S: int = 1_000_000_000


@dataclass(frozen=True, order=True)
class SplineDuration:
    """
    Signed time span stored as seconds and nanoseconds

    Fields:
        sec: Whole seconds, may be negative
        nanosec: Sub-second remainder in nanoseconds [0, 1e9)

    The pair is normalized on construction, so -0.5 s is stored as
    sec=-1, nanosec=500_000_000.
    """

    sec: int
    nanosec: int

    def __post_init__(self) -> None:
        sec, nanosec = _normalize(self.sec, self.nanosec)
        object.__setattr__(self, "sec", sec)
        object.__setattr__(self, "nanosec", nanosec)

    @classmethod
    def from_sec(cls, seconds: float) -> SplineDuration:
        return cls.from_nsec(seconds_to_nanoseconds(seconds))

    @classmethod
    def from_nsec(cls, ns: int) -> SplineDuration:
        sec, nanosec = divmod(int(ns), _NS_PER_S)
        return cls(sec=sec, nanosec=nanosec)

    def to_sec(self) -> float:
        return float(self.sec) + float(self.nanosec) / _NS_PER_S

    def to_nsec(self) -> int:
        return self.sec * _NS_PER_S + self.nanosec

    def is_zero(self) -> bool:
        return self.sec == 0 and self.nanosec == 0

    def __add__(self, other: SplineDuration) -> SplineDuration:
        if not isinstance(other, SplineDuration):
            return NotImplemented
        return SplineDuration.from_nsec(self.to_nsec() + other.to_nsec())

    def __sub__(self, other: SplineDuration) -> SplineDuration:
        if not isinstance(other, SplineDuration):
            return NotImplemented
        return SplineDuration.from_nsec(self.to_nsec() - other.to_nsec())

    def __neg__(self) -> SplineDuration:
        return SplineDuration.from_nsec(-self.to_nsec())

    def __str__(self) -> str:
        return _format_ns(self.to_nsec())


@dataclass(frozen=True, order=True)
class SplineTime:
    """
    Non-negative timestamp stored as seconds and nanoseconds

    Fields:
        sec: Whole seconds since the time reference
        nanosec: Sub-second remainder in nanoseconds [0, 1e9)

    Ordering compares (sec, nanosec) lexicographically, which is exact
    because the pair is always normalized.
    """

    sec: int
    nanosec: int

    def __post_init__(self) -> None:
        sec, nanosec = _normalize(self.sec, self.nanosec)
        if sec < 0:
            raise ValueError("time must be non-negative")
        object.__setattr__(self, "sec", sec)
        object.__setattr__(self, "nanosec", nanosec)

    @classmethod
    def from_sec(cls, seconds: float) -> SplineTime:
        return cls.from_nsec(seconds_to_nanoseconds(seconds))

    @classmethod
    def from_nsec(cls, ns: int) -> SplineTime:
        sec, nanosec = divmod(int(ns), _NS_PER_S)
        return cls(sec=sec, nanosec=nanosec)

    def to_sec(self) -> float:
        return float(self.sec) + float(self.nanosec) / _NS_PER_S

    def to_nsec(self) -> int:
        return self.sec * _NS_PER_S + self.nanosec

    def is_zero(self) -> bool:
        return self.sec == 0 and self.nanosec == 0

    def __add__(self, other: SplineDuration) -> SplineTime:
        if not isinstance(other, SplineDuration):
            return NotImplemented
        return SplineTime.from_nsec(self.to_nsec() + other.to_nsec())

    @overload
    def __sub__(self, other: SplineTime) -> SplineDuration: ...

    @overload
    def __sub__(self, other: SplineDuration) -> SplineTime: ...

    def __sub__(
        self, other: Union[SplineTime, SplineDuration]
    ) -> Union[SplineTime, SplineDuration]:
        if isinstance(other, SplineTime):
            return SplineDuration.from_nsec(self.to_nsec() - other.to_nsec())
        if isinstance(other, SplineDuration):
            return SplineTime.from_nsec(self.to_nsec() - other.to_nsec())
        return NotImplemented

    def __str__(self) -> str:
        return _format_ns(self.to_nsec())


def _normalize(sec: int, nanosec: int) -> tuple[int, int]:
    if isinstance(sec, bool) or not isinstance(sec, int):
        raise ValueError("sec must be int")
    if isinstance(nanosec, bool) or not isinstance(nanosec, int):
        raise ValueError("nanosec must be int")
    carry, nanosec = divmod(nanosec, _NS_PER_S)
    return sec + carry, nanosec


# Representable range, matching unsigned 32-bit seconds for times and signed
# 32-bit seconds for durations
TIME_MIN: SplineTime = SplineTime(sec=0, nanosec=1)
TIME_MAX: SplineTime = SplineTime(sec=2**32 - 1, nanosec=999_999_999)
DURATION_MIN: SplineDuration = SplineDuration(sec=-(2**31), nanosec=0)
DURATION_MAX: SplineDuration = SplineDuration(sec=2**31 - 1, nanosec=999_999_999)

TimeLike = Union[float, int, SplineTime]


def to_seconds(t: TimeLike) -> float:
    """
    Convert a float or SplineTime timestamp to float seconds
    """

    if isinstance(t, SplineTime):
        return t.to_sec()
    if isinstance(t, bool) or not isinstance(t, numbers.Real):
        raise ValueError("timestamp must be float seconds or SplineTime")
    return float(t)


def to_nanoseconds(t: TimeLike) -> int:
    """
    Convert a float or SplineTime timestamp to integer nanoseconds

    SplineTime converts exactly. Float seconds round to the nearest
    nanosecond.
    """

    if isinstance(t, SplineTime):
        return t.to_nsec()
    return seconds_to_nanoseconds(to_seconds(t))


def seconds_to_nanoseconds(seconds: float) -> int:
    if not math.isfinite(seconds):
        raise ValueError("seconds must be finite")

    # Split off whole seconds first so the fraction keeps full precision at
    # epoch magnitudes
    whole: int = math.floor(seconds)
    return whole * _NS_PER_S + int(round((seconds - whole) * _NS_PER_S))


def nanoseconds_to_seconds(ns: int) -> float:
    sec, nanosec = divmod(int(ns), _NS_PER_S)
    return float(sec) + float(nanosec) / _NS_PER_S


def _format_ns(ns: int) -> str:
    sign: str = "-" if ns < 0 else ""
    sec, nanosec = divmod(abs(ns), _NS_PER_S)
    return f"{sign}{sec}.{nanosec:09d}"
