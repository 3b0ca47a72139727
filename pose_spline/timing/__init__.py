################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from pose_spline.timing.spline_time import DURATION_MAX
from pose_spline.timing.spline_time import DURATION_MIN
from pose_spline.timing.spline_time import TIME_MAX
from pose_spline.timing.spline_time import TIME_MIN
from pose_spline.timing.spline_time import SplineDuration
from pose_spline.timing.spline_time import SplineTime
from pose_spline.timing.time_source import SimulatedTimeSource
from pose_spline.timing.time_source import SystemTimeSource
from pose_spline.timing.time_source import TimeSource


__all__ = [
    "DURATION_MAX",
    "DURATION_MIN",
    "TIME_MAX",
    "TIME_MIN",
    "SimulatedTimeSource",
    "SplineDuration",
    "SplineTime",
    "SystemTimeSource",
    "TimeSource",
]
