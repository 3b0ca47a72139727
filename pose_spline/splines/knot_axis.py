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
Uniform knot axis mapping trajectory time to knot indices
"""

from __future__ import annotations

import math
from typing import Optional

from pose_spline.timing.spline_time import nanoseconds_to_seconds
from pose_spline.timing.spline_time import seconds_to_nanoseconds


class KnotAxis:
    """
    Uniformly spaced knots t_i = t0 + i * interval

    Knot times and the interval are held as integer nanoseconds, so index
    lookups are exact for any timestamp magnitude, including epoch times.
    Callers pass times in nanoseconds; only knot_time() and
    get_time_interval() report float seconds.

    The interval may be changed freely until the axis is anchored with a first
    knot time. After that it is locked, because every stored control point is
    associated with a knot time derived from it.
    """

    def __init__(self, time_interval: Optional[float] = None) -> None:
        self._interval_ns: Optional[int] = None
        self._t0_ns: Optional[int] = None
        if time_interval is not None:
            self.set_time_interval(time_interval)

    def set_time_interval(self, time_interval: float) -> None:
        interval_ns: int = _as_positive_ns("time_interval", time_interval)
        if self._t0_ns is not None and interval_ns != self._interval_ns:
            raise ValueError(
                "time_interval cannot change after control points exist"
            )
        self._interval_ns = interval_ns

    def get_time_interval(self) -> Optional[float]:
        if self._interval_ns is None:
            return None
        return nanoseconds_to_seconds(self._interval_ns)

    @property
    def interval_ns(self) -> int:
        return self._require_interval_ns()

    @property
    def is_anchored(self) -> bool:
        return self._t0_ns is not None

    @property
    def t0_ns(self) -> int:
        """Time of knot 0 in nanoseconds."""

        if self._t0_ns is None:
            raise ValueError("knot axis is not anchored")
        return self._t0_ns

    def anchor(self, t0_ns: int) -> None:
        """Fix the time of knot 0."""

        self._require_interval_ns()
        if self._t0_ns is not None:
            raise ValueError("knot axis is already anchored")
        self._t0_ns = int(t0_ns)

    def knot_time_ns(self, index: int) -> int:
        return self.t0_ns + index * self._require_interval_ns()

    def knot_time(self, index: int) -> float:
        return nanoseconds_to_seconds(self.knot_time_ns(index))

    def knot_index(self, t_ns: int) -> int:
        """Index of the last knot at or before t_ns."""

        return (t_ns - self.t0_ns) // self._require_interval_ns()

    def knot_fraction(self, t_ns: int, index: int) -> float:
        """Position of t_ns past knot index, in intervals."""

        return (t_ns - self.knot_time_ns(index)) / self._require_interval_ns()

    def floor_align(self, t_ns: int) -> int:
        """Largest multiple of the interval that is not after t_ns."""

        interval_ns: int = self._require_interval_ns()
        return (t_ns // interval_ns) * interval_ns

    def _require_interval_ns(self) -> int:
        if self._interval_ns is None:
            raise ValueError("time_interval is not set")
        return self._interval_ns


def _as_positive_ns(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a float")
    seconds: float = float(value)
    if not math.isfinite(seconds) or seconds <= 0.0:
        raise ValueError(f"{name} must be > 0")
    result: int = seconds_to_nanoseconds(seconds)
    if result <= 0:
        raise ValueError(f"{name} must be at least 1 ns")
    return result
