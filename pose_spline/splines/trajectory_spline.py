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

import abc
import bisect
import logging
import math
from typing import Iterable
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray

from pose_spline.splines.control_point_store import ControlPointHandle
from pose_spline.splines.control_point_store import ControlPointStore
from pose_spline.splines.knot_axis import KnotAxis
from pose_spline.splines.uniform_bspline import UniformBSplineBasis
from pose_spline.timing.spline_time import TimeLike
from pose_spline.timing.spline_time import nanoseconds_to_seconds
from pose_spline.timing.spline_time import to_nanoseconds
from pose_spline.timing.spline_time import to_seconds
from pose_spline.timing.time_source import TimeSource


_FLOAT_ARRAY = NDArray[np.float64]

_LOG: logging.Logger = logging.getLogger(__name__)


class TrajectorySpline(abc.ABC):
    """Time-indexed uniform B-spline with an online control point lifecycle.

    Purpose:
        Represent a time-stamped measurement stream as a smooth function of
        time that can be built in one batch or extended sample by sample.

    Responsibility:
        Own the knot axis, the control point store and the sample evidence,
        decide which times are evaluable, and grow the control points as
        later samples arrive. Subclasses decide the value space: how a new
        control point is seeded and how bracketing control points blend.

    Public API:
        - set_time_interval(interval) / get_time_interval()
        - is_ts_evaluable(t)
        - add_sample(t, value) / add_sample_now(value)
        - initial_spline(samples) / initial_spline_knot(t)
        - evaluate(t) / evaluate_derivative(t, derivative_order)
        - get_control_point_num() / get_control_point(i)
        - control_point_handle(i) / control_point_time(i)
        - print_knots()

    Data contract:
        - Knot i is at t0 + i * interval. Control point i has support on
          knots [i, i + k], so its influence peaks at t0 + (i + k / 2) *
          interval.
        - With n >= k control points the evaluable range is the closed
          interval [t0 + (k - 1) * interval, t0 + n * interval].
        - A value at t blends the k control points m - k + 1 .. m where m is
          the segment holding t.
        - Timestamps are resolved to integer nanoseconds before any knot
          lookup. SplineTime converts exactly and float seconds round to the
          nearest nanosecond.

    Determinism and edge cases:
        - Times outside the evaluable range are never clamped; evaluate()
          returns None and is_ts_evaluable() returns False.
        - Samples before the evaluable start, duplicate timestamps and
          non-finite samples are rejected and counted in diagnostics.
        - Control points created before the samples span one interval are
          provisional and are re-seeded as evidence arrives, unless they were
          written externally in the meantime. No other control point is
          rewritten by the spline.
        - initial_spline() validates the whole batch before touching any
          state, then replays it through add_sample(), so batch and streaming
          construction give identical control points. A batch that cannot be
          fully ingested leaves the spline empty.
    """

    def __init__(
        self,
        spline_order: int,
        value_shape: tuple[int, ...],
        time_interval: Optional[float] = None,
        time_source: Optional[TimeSource] = None,
    ) -> None:
        self._basis: UniformBSplineBasis = UniformBSplineBasis(spline_order)
        self._knots: KnotAxis = KnotAxis(time_interval)
        self._control_points: ControlPointStore = ControlPointStore(value_shape)
        self._time_source: Optional[TimeSource] = time_source

        # Sample evidence keyed by timestamp in nanoseconds, times kept sorted
        self._sample_times: list[int] = []
        self._sample_values: dict[int, _FLOAT_ARRAY] = {}

        # Provisional control points and the seed last written to each
        self._provisional: dict[int, _FLOAT_ARRAY] = {}

        self.diagnostics: dict[str, int] = {
            "reject_non_finite": 0,
            "reject_too_old": 0,
            "duplicate_sample": 0,
            "control_points_added": 0,
        }

    @property
    def spline_order(self) -> int:
        return self._basis.spline_order

    @property
    def basis(self) -> UniformBSplineBasis:
        return self._basis

    def set_time_interval(self, time_interval: float) -> None:
        self._knots.set_time_interval(time_interval)

    def get_time_interval(self) -> Optional[float]:
        return self._knots.get_time_interval()

    def get_control_point_num(self) -> int:
        return self._control_points.size()

    def get_control_point(self, index: int) -> _FLOAT_ARRAY:
        """Return the mutable parameter array of control point index.

        Writes through the returned array are seen by later evaluations. A
        provisional control point that has been written this way is no
        longer re-seeded by the spline.

        Raises:
            IndexError: If index is out of range
        """
        return self._control_points.get(index)

    def control_point_handle(self, index: int) -> ControlPointHandle:
        return self._control_points.handle(index)

    def control_point_matrix(self) -> _FLOAT_ARRAY:
        return self._control_points.as_matrix()

    def control_point_time(self, index: int) -> float:
        """Time in seconds at which control point index has most influence."""
        return self._knots.knot_time(index) + 0.5 * self.spline_order * (
            self._require_interval()
        )

    def knot_time(self, index: int) -> float:
        return self._knots.knot_time(index)

    def t_min(self) -> Optional[float]:
        if self._control_points.size() < self.spline_order:
            return None
        return self._knots.knot_time(self.spline_order - 1)

    def t_max(self) -> Optional[float]:
        if self._control_points.size() < self.spline_order:
            return None
        return self._knots.knot_time(self._control_points.size())

    def is_ts_evaluable(self, t: TimeLike) -> bool:
        return self._locate_time(t) is not None

    def sample_count(self) -> int:
        return len(self._sample_times)

    def samples(self) -> list[tuple[float, _FLOAT_ARRAY]]:
        """Return the recorded samples in time order."""
        return [
            (nanoseconds_to_seconds(t_ns), self._sample_values[t_ns].copy())
            for t_ns in self._sample_times
        ]

    def evaluate(self, t: TimeLike) -> Optional[_FLOAT_ARRAY]:
        """Return the spline value at t, or None if t is not evaluable."""
        return self.evaluate_derivative(t, 0)

    def evaluate_derivative(
        self, t: TimeLike, derivative_order: int
    ) -> Optional[_FLOAT_ARRAY]:
        """Return a time derivative of the spline at t, or None if t is not
        evaluable."""
        if not 0 <= derivative_order < self.spline_order:
            raise ValueError(
                f"derivative_order must be in [0, {self.spline_order - 1}]"
            )

        location: Optional[tuple[int, float]] = self._locate_time(t)
        if location is None:
            return None

        first_index, u = location
        weights: _FLOAT_ARRAY = self._basis.weights(
            u, derivative_order, self._require_interval()
        )
        window: _FLOAT_ARRAY = self._control_points.window(
            first_index, self.spline_order
        )
        return self._blend(window, weights, derivative_order)

    def add_sample(self, t: TimeLike, value: ArrayLike) -> bool:
        """Record a sample, extending the control points when t is beyond
        the evaluable range.

        Returns:
            True if the sample was recorded
        """
        t_sec: float = to_seconds(t)
        sample: _FLOAT_ARRAY = self._validate_value(value)

        if not math.isfinite(t_sec) or not np.all(np.isfinite(sample)):
            self.diagnostics["reject_non_finite"] += 1
            _LOG.warning("Rejecting non-finite sample at t=%s", t_sec)
            return False

        t_ns: int = to_nanoseconds(t)

        if self._control_points.size() == 0:
            self._require_interval()
            self._bootstrap(self._knots.floor_align(t_ns))

        if self._knots.knot_index(t_ns) < self.spline_order - 1:
            self.diagnostics["reject_too_old"] += 1
            _LOG.warning(
                "Rejecting sample at t=%.9f before spline start %.9f",
                t_sec,
                self.t_min(),
            )
            return False

        if t_ns in self._sample_values:
            self.diagnostics["duplicate_sample"] += 1
            _LOG.warning("Rejecting duplicate sample at t=%.9f", t_sec)
            return False

        bisect.insort(self._sample_times, t_ns)
        self._sample_values[t_ns] = sample.copy()

        self._extend_to(t_ns)
        self._reseed_provisional()

        return True

    def add_sample_now(
        self, value: ArrayLike, time_source: Optional[TimeSource] = None
    ) -> bool:
        """Record a sample stamped with the current time of a time source."""
        source: Optional[TimeSource] = (
            time_source if time_source is not None else self._time_source
        )
        if source is None:
            raise ValueError("no time source available")
        return self.add_sample(source.now(), value)

    def initial_spline(self, samples: Iterable[tuple[TimeLike, ArrayLike]]) -> None:
        """Build the spline from a complete, time-ordered sample batch.

        Raises:
            ValueError: If the spline already has control points, the time
                interval is unset, the batch is empty, unsorted or contains
                non-finite or wrongly shaped values, or a sample could not
                be ingested. The spline is left empty on failure.
        """
        self._require_empty()
        self._require_interval()

        batch: list[tuple[int, TimeLike, _FLOAT_ARRAY]] = []
        for t, value in samples:
            t_sec: float = to_seconds(t)
            sample: _FLOAT_ARRAY = self._validate_value(value)
            if not math.isfinite(t_sec) or not np.all(np.isfinite(sample)):
                raise ValueError("samples must be finite")
            t_ns: int = to_nanoseconds(t)
            if batch and t_ns <= batch[-1][0]:
                raise ValueError("sample times must be strictly increasing")
            batch.append((t_ns, t, sample))

        if not batch:
            raise ValueError("samples must be non-empty")

        self._bootstrap(self._knots.floor_align(batch[0][0]))
        for t_ns, t, sample in batch:
            if not self.add_sample(t, sample):
                self._reset()
                raise ValueError(
                    f"sample at t={nanoseconds_to_seconds(t_ns):.9f} could not "
                    "be ingested"
                )

        _LOG.info(
            "Initialized spline from %d samples over [%.9f, %.9f] with %d control "
            "points",
            len(batch),
            nanoseconds_to_seconds(batch[0][0]),
            nanoseconds_to_seconds(batch[-1][0]),
            self._control_points.size(),
        )

    def initial_spline_knot(self, t: TimeLike) -> None:
        """Bootstrap an empty spline so that it is evaluable on
        [t, t + interval]."""
        self._require_empty()
        self._require_interval()
        if not math.isfinite(to_seconds(t)):
            raise ValueError("t must be finite")

        self._bootstrap(to_nanoseconds(t))

    def format_knots(self) -> str:
        count: int = self._control_points.size()
        if count == 0:
            return "spline has no control points"

        lines: list[str] = [
            f"control points: {count}",
            f"time interval: {self._require_interval():.9f}",
            f"evaluable range: [{self.t_min():.9f}, {self.t_max():.9f}]",
        ]
        for index in range(count + self.spline_order):
            lines.append(f"knot {index}: {self._knots.knot_time(index):.9f}")
        return "\n".join(lines)

    def print_knots(self) -> str:
        """Log the knot times and control point count."""
        text: str = self.format_knots()
        _LOG.info("%s", text)
        return text

    @abc.abstractmethod
    def _validate_value(self, value: ArrayLike) -> _FLOAT_ARRAY:
        """Coerce a sample value, raising ValueError on a wrong shape."""

    @abc.abstractmethod
    def _synthesize_new_control_point(self, index: int) -> _FLOAT_ARRAY:
        """Seed value for the control point about to be stored at index."""

    @abc.abstractmethod
    def _blend(
        self,
        control_points: _FLOAT_ARRAY,
        weights: _FLOAT_ARRAY,
        derivative_order: int,
    ) -> _FLOAT_ARRAY:
        """Combine the k bracketing control points with basis weights."""

    def _seed_evidence(self, index: int) -> list[tuple[float, _FLOAT_ARRAY]]:
        """Samples to seed control point index from.

        Returns up to two (offset, value) pairs in time order, where offset is
        the sample time in seconds relative to the control point's
        peak-influence time. The last pair is the latest sample. It is
        preceded by the latest sample at least one interval older, if any.
        """
        if not self._sample_times:
            return []

        chosen: list[int] = [self._sample_times[-1]]
        baseline_ns: Optional[int] = self._baseline_time_ns()
        if baseline_ns is not None:
            chosen.insert(0, baseline_ns)

        knot_ns: int = self._knots.knot_time_ns(index)
        half_support: float = 0.5 * self.spline_order * self._require_interval()
        return [
            (
                nanoseconds_to_seconds(t_ns - knot_ns) - half_support,
                self._sample_values[t_ns],
            )
            for t_ns in chosen
        ]

    def _baseline_time_ns(self) -> Optional[int]:
        if not self._sample_times:
            return None
        cutoff_ns: int = self._sample_times[-1] - self._knots.interval_ns
        position: int = bisect.bisect_right(self._sample_times, cutoff_ns)
        if position == 0:
            return None
        return self._sample_times[position - 1]

    def _locate_time(self, t: TimeLike) -> Optional[tuple[int, float]]:
        if not math.isfinite(to_seconds(t)):
            return None
        return self._locate(to_nanoseconds(t))

    def _locate(self, t_ns: int) -> Optional[tuple[int, float]]:
        count: int = self._control_points.size()
        order: int = self.spline_order
        if count < order:
            return None

        segment: int = self._knots.knot_index(t_ns)
        u: float = self._knots.knot_fraction(t_ns, segment)
        if segment < order - 1 or segment > count:
            return None
        if segment == count:
            # The closed upper bound belongs to the last segment
            if u > 0.0:
                return None
            segment, u = count - 1, 1.0

        return segment - order + 1, u

    def _bootstrap(self, t_ns: int) -> None:
        self._knots.anchor(t_ns - (self.spline_order - 1) * self._knots.interval_ns)
        for _ in range(self.spline_order):
            self._append_control_point()

        _LOG.info(
            "Initialized spline knots at t=%.9f with %d control points",
            nanoseconds_to_seconds(t_ns),
            self._control_points.size(),
        )

    def _extend_to(self, t_ns: int) -> None:
        target: int = self._knots.knot_index(t_ns)
        if self._knots.knot_time_ns(target) < t_ns:
            target += 1

        added: int = 0
        while self._control_points.size() < target:
            self._append_control_point()
            added += 1

        if added:
            self.diagnostics["control_points_added"] += added
            _LOG.debug(
                "Extended spline by %d control points to t_max=%.9f",
                added,
                self.t_max(),
            )

    def _append_control_point(self) -> None:
        index: int = self._control_points.size()
        seed: _FLOAT_ARRAY = self._synthesize_new_control_point(index)
        self._control_points.append(seed)
        if self._baseline_time_ns() is None:
            self._provisional[index] = seed.copy()

    def _reseed_provisional(self) -> None:
        for index, last_seed in sorted(self._provisional.items()):
            if not np.array_equal(self._control_points.get(index), last_seed):
                _LOG.debug("Keeping externally written control point %d", index)
                del self._provisional[index]
                continue
            seed: _FLOAT_ARRAY = self._synthesize_new_control_point(index)
            self._control_points.set(index, seed)
            self._provisional[index] = seed.copy()

        if self._baseline_time_ns() is not None:
            self._provisional.clear()

    def _reset(self) -> None:
        self._knots = KnotAxis(self._knots.get_time_interval())
        self._control_points = ControlPointStore(self._control_points.shape)
        self._sample_times = []
        self._sample_values = {}
        self._provisional = {}

    def _require_interval(self) -> float:
        interval: Optional[float] = self._knots.get_time_interval()
        if interval is None:
            raise ValueError("time_interval is not set")
        return interval

    def _require_empty(self) -> None:
        if self._control_points.size() > 0:
            raise ValueError("spline is already initialized")
