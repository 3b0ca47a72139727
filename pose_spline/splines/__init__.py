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
Uniform B-spline trajectory representations
"""

from __future__ import annotations

from pose_spline.splines.control_point_store import ControlPointHandle
from pose_spline.splines.control_point_store import ControlPointStore
from pose_spline.splines.knot_axis import KnotAxis
from pose_spline.splines.trajectory_spline import TrajectorySpline
from pose_spline.splines.uniform_bspline import UniformBSplineBasis
from pose_spline.splines.vector_space_spline import VectorSpaceSpline


__all__ = [
    "ControlPointHandle",
    "ControlPointStore",
    "KnotAxis",
    "TrajectorySpline",
    "UniformBSplineBasis",
    "VectorSpaceSpline",
]
