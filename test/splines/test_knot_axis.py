################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the uniform knot axis."""

from __future__ import annotations

import math

import pytest

from pose_spline.splines.knot_axis import KnotAxis


_NS_PER_S: int = 1_000_000_000


def test_knot_time_and_index() -> None:
    axis: KnotAxis = KnotAxis(0.1)
    axis.anchor(0)

    assert axis.interval_ns == 100_000_000
    assert axis.knot_time_ns(7) == 700_000_000
    assert math.isclose(axis.knot_time(7), 0.7)
    assert axis.knot_index(1_000_000_000) == 10
    assert axis.knot_index(300_000_000) == 3
    assert axis.knot_index(350_000_000) == 3
    assert axis.knot_index(-50_000_000) == -1
    assert axis.knot_fraction(350_000_000, 3) == 0.5
    assert axis.knot_fraction(300_000_000, 3) == 0.0


def test_floor_align() -> None:
    axis: KnotAxis = KnotAxis(0.1)

    assert axis.floor_align(230_000_000) == 200_000_000
    assert axis.floor_align(300_000_000) == 300_000_000
    assert axis.floor_align(-50_000_000) == -100_000_000


def test_index_is_exact_at_epoch_times() -> None:
    axis: KnotAxis = KnotAxis(0.1)
    start_ns: int = 1_790_000_000 * _NS_PER_S + 300_000_000

    axis.anchor(axis.floor_align(start_ns) - 3 * axis.interval_ns)

    assert axis.knot_index(start_ns) == 3
    assert axis.knot_fraction(start_ns, 3) == 0.0
    assert axis.knot_index(start_ns - 1) == 2
    assert axis.knot_index(start_ns + 100_000_000) == 4


def test_set_time_interval_validates() -> None:
    axis: KnotAxis = KnotAxis()

    assert axis.get_time_interval() is None
    for bad in (0.0, -1.0, float("nan"), float("inf")):
        with pytest.raises(ValueError, match="time_interval must be > 0"):
            axis.set_time_interval(bad)
    with pytest.raises(ValueError, match="time_interval must be a float"):
        axis.set_time_interval(True)
    with pytest.raises(ValueError, match="at least 1 ns"):
        axis.set_time_interval(1e-12)


def test_interval_locked_after_anchor() -> None:
    axis: KnotAxis = KnotAxis(0.1)
    axis.set_time_interval(0.2)
    axis.anchor(1_000_000_000)

    axis.set_time_interval(0.2)
    with pytest.raises(ValueError, match="cannot change"):
        axis.set_time_interval(0.1)
    assert axis.get_time_interval() == 0.2


def test_anchor_requirements() -> None:
    axis: KnotAxis = KnotAxis()

    with pytest.raises(ValueError, match="time_interval is not set"):
        axis.anchor(0)

    axis.set_time_interval(0.1)
    assert not axis.is_anchored
    with pytest.raises(ValueError, match="not anchored"):
        axis.knot_time(0)

    axis.anchor(500_000_000)
    assert axis.is_anchored
    assert axis.t0_ns == 500_000_000
    with pytest.raises(ValueError, match="already anchored"):
        axis.anchor(0)
