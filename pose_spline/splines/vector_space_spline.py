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
B-spline trajectory over a real vector space, e.g. positions or biases
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray

from pose_spline.config.spline_params import SplineParams
from pose_spline.splines.trajectory_spline import TrajectorySpline
from pose_spline.timing.time_source import TimeSource


_FLOAT_ARRAY = NDArray[np.float64]


class VectorSpaceSpline(TrajectorySpline):
    """
    Trajectory spline whose control points are plain vectors

    Values blend as a direct weighted sum of the bracketing control points.

    New control points are seeded at their peak-influence time from the
    recorded samples:
        - no samples: zero vector
        - samples spanning less than one interval: the latest value
        - otherwise: linear extrapolation from the latest sample, with the
          slope taken against the latest sample at least one interval older

    The slope baseline is never shorter than one interval, so closely spaced
    samples do not steepen it.

    Because a uniform B-spline has linear precision at these times, a
    linear signal is reproduced exactly across the evaluable range.
    """

    def __init__(
        self,
        spline_order: int,
        time_interval: Optional[float] = None,
        dimension: int = 3,
        time_source: Optional[TimeSource] = None,
    ) -> None:
        if isinstance(dimension, bool) or not isinstance(dimension, int):
            raise ValueError("dimension must be an int")
        if dimension <= 0:
            raise ValueError("dimension must be > 0")

        super().__init__(
            spline_order,
            (dimension,),
            time_interval=time_interval,
            time_source=time_source,
        )

        self._dimension: int = dimension

    @classmethod
    def from_params(
        cls, params: SplineParams, time_source: Optional[TimeSource] = None
    ) -> VectorSpaceSpline:
        params.validate()
        return cls(
            params.spline_order,
            time_interval=params.time_interval_sec,
            dimension=params.dimension,
            time_source=time_source,
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    def _validate_value(self, value: ArrayLike) -> _FLOAT_ARRAY:
        vector: _FLOAT_ARRAY = np.asarray(value, dtype=np.float64)
        if vector.shape != (self._dimension,):
            raise ValueError(
                f"sample must have shape ({self._dimension},), got {vector.shape}"
            )
        return vector

    def _synthesize_new_control_point(self, index: int) -> _FLOAT_ARRAY:
        evidence: list[tuple[float, _FLOAT_ARRAY]] = self._seed_evidence(index)
        if not evidence:
            return np.zeros(self._dimension, dtype=np.float64)
        if len(evidence) == 1:
            return evidence[0][1].copy()

        # Offsets are relative to the seed time, so the seed is at offset 0
        (dt_a, v_a), (dt_b, v_b) = evidence
        slope: _FLOAT_ARRAY = (v_b - v_a) / (dt_b - dt_a)
        return v_b - slope * dt_b

    def _blend(
        self,
        control_points: _FLOAT_ARRAY,
        weights: _FLOAT_ARRAY,
        derivative_order: int,
    ) -> _FLOAT_ARRAY:
        return weights @ control_points
