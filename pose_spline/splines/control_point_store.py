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
Ordered storage of spline control points
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray


_FLOAT_ARRAY = NDArray[np.float64]


class ControlPointStore:
    """
    Control points in knot order, one float64 array per point

    Each point owns its own array, so the arrays returned by get() stay valid
    and writable while the store grows. An optimizer may update them in place.
    """

    def __init__(self, shape: tuple[int, ...]) -> None:
        self._shape: tuple[int, ...] = shape
        self._points: list[_FLOAT_ARRAY] = []

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of a single control point."""

        return self._shape

    def __len__(self) -> int:
        return len(self._points)

    def size(self) -> int:
        return len(self._points)

    def append(self, value: ArrayLike) -> int:
        """Append a copy of value and return its index."""

        point: _FLOAT_ARRAY = np.array(value, dtype=np.float64)
        if point.shape != self._shape:
            raise ValueError(
                f"control point must have shape {self._shape}, got {point.shape}"
            )
        self._points.append(point)
        return len(self._points) - 1

    def get(self, index: int) -> _FLOAT_ARRAY:
        """Return the mutable parameter array of a control point."""

        self._check_index(index)
        return self._points[index]

    def set(self, index: int, value: ArrayLike) -> None:
        point: _FLOAT_ARRAY = self.get(index)
        new_value: _FLOAT_ARRAY = np.asarray(value, dtype=np.float64)
        if new_value.shape != self._shape:
            raise ValueError(
                f"control point must have shape {self._shape}, "
                f"got {new_value.shape}"
            )
        point[...] = new_value

    def handle(self, index: int) -> ControlPointHandle:
        self._check_index(index)
        return ControlPointHandle(store=self, index=index)

    def window(self, first: int, count: int) -> _FLOAT_ARRAY:
        """Stack count consecutive control points starting at first."""

        self._check_index(first)
        self._check_index(first + count - 1)
        return np.stack(self._points[first : first + count])

    def as_matrix(self) -> _FLOAT_ARRAY:
        """Return a stacked copy of all control points."""

        if not self._points:
            return np.zeros((0,) + self._shape, dtype=np.float64)
        return np.stack(self._points)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexError("control point index must be an int")
        if not 0 <= index < len(self._points):
            raise IndexError(
                f"control point index {index} out of range "
                f"[0, {len(self._points)})"
            )


@dataclass(frozen=True)
class ControlPointHandle:
    """
    Capability to read and write one control point of its owning store

    Fields:
        store: The store that owns the control point
        index: Position of the control point in knot order
    """

    store: ControlPointStore
    index: int

    @property
    def value(self) -> _FLOAT_ARRAY:
        return self.store.get(self.index)

    def set(self, value: ArrayLike) -> None:
        self.store.set(self.index, value)
