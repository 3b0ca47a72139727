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

import math

import numpy as np
from numpy.typing import NDArray


class UniformBSplineBasis:
    """Basis functions of a uniform B-spline of a fixed order.

    Purpose:
        Provide the blending weights used by every trajectory spline,
        independent of the value space of the control points.

    Responsibility:
        Build the uniform blending matrix for order k once and evaluate the
        k basis weights (or their time derivatives) at a local segment
        parameter.

    Inputs/outputs:
        - Inputs: local parameter u in [0, 1], derivative order r, and the
          knot spacing in seconds.
        - Outputs: weight vector of shape (k,), one weight per bracketing
          control point in increasing index order.

    Data contract:
        - Order k >= 2, degree k - 1.
        - basis_matrix[i, j] is the coefficient of u^i in the weight of the
          j-th bracketing control point.

    Equations:
        Blending matrix (uniform knots):
            M[i, j] = C(k-1, i) / (k-1)!
                      * sum_{s=j}^{k-1} (-1)^(s-j) C(k, s-j) (k-1-s)^(k-1-i)

        Weights and derivatives:
            w(u) = [1, u, ..., u^(k-1)] M
            d^r w / dt^r = [d^r u^i / du^r] M / dt^r

    Determinism and edge cases:
        - Derivative orders above k - 1 are rejected; they are identically
          zero and almost always indicate a caller bug.
        - u outside [0, 1] is rejected rather than clamped.

    Numerical stability notes:
        - The weights of a value query sum to 1 up to round-off (partition of
          unity); derivative weights sum to 0.
    """

    def __init__(self, spline_order: int) -> None:
        if isinstance(spline_order, bool) or not isinstance(spline_order, int):
            raise ValueError("spline_order must be an int")
        if spline_order < 2:
            raise ValueError("spline_order must be >= 2")
        self._order: int = spline_order
        self._basis_matrix: NDArray[np.float64] = self._build_basis_matrix(
            spline_order
        )

    @property
    def spline_order(self) -> int:
        return self._order

    @property
    def degree(self) -> int:
        return self._order - 1

    @property
    def basis_matrix(self) -> NDArray[np.float64]:
        """Return a copy of the k x k blending matrix."""
        return self._basis_matrix.copy()

    def weights(
        self,
        u: float,
        derivative_order: int = 0,
        time_interval: float = 1.0,
    ) -> NDArray[np.float64]:
        """Return the basis weights at local parameter u.

        Args:
            u: Position inside the segment, 0 at its first knot and 1 at its
                last
            derivative_order: Time derivative order r in [0, k - 1]
            time_interval: Knot spacing in seconds used to scale derivatives
        """
        if not 0 <= derivative_order < self._order:
            raise ValueError(
                f"derivative_order must be in [0, {self._order - 1}]"
            )
        if not (0.0 <= u <= 1.0):
            raise ValueError("u must be in [0, 1]")
        if time_interval <= 0.0:
            raise ValueError("time_interval must be > 0")

        powers: NDArray[np.float64] = np.zeros(self._order, dtype=np.float64)
        for i in range(derivative_order, self._order):
            falling: float = float(math.perm(i, derivative_order))
            powers[i] = falling * u ** (i - derivative_order)

        weights: NDArray[np.float64] = powers @ self._basis_matrix
        if derivative_order > 0:
            weights = weights / time_interval**derivative_order
        return weights

    @staticmethod
    def _build_basis_matrix(order: int) -> NDArray[np.float64]:
        degree: int = order - 1
        matrix: NDArray[np.float64] = np.zeros((order, order), dtype=np.float64)
        scale: float = 1.0 / math.factorial(degree)
        for i in range(order):
            for j in range(order):
                total: int = 0
                for s in range(j, order):
                    sign: int = -1 if (s - j) % 2 else 1
                    total += sign * math.comb(order, s - j) * (degree - s) ** (
                        degree - i
                    )
                matrix[i, j] = scale * math.comb(degree, i) * total
        return matrix
