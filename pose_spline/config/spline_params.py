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
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
from typing import Union

import yaml


@dataclass(frozen=True, slots=True)
class SplineParams:
    """Configuration parameters for a trajectory spline.

    Data contract:
        - spline_order: B-spline order k (degree k - 1), k >= 2.
        - time_interval_sec: uniform knot spacing in seconds, > 0.
        - dimension: size of each control point vector, > 0.

    Determinism and edge cases:
        - from_dict() rejects unknown keys and wrongly typed values; missing
          keys take their defaults.
        - The time interval is fixed for the lifetime of a spline, so it is
          configured here rather than adjusted at runtime.
    """

    spline_order: int
    time_interval_sec: float
    dimension: int

    @staticmethod
    def defaults() -> SplineParams:
        """Return a stable default parameter set."""
        params: SplineParams = SplineParams(
            spline_order=4,
            time_interval_sec=0.1,
            dimension=3,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> SplineParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: SplineParams = cls.defaults()
        result: SplineParams = cls(
            spline_order=cls._as_int(
                "spline_order", params.get("spline_order", defaults.spline_order)
            ),
            time_interval_sec=cls._as_float(
                "time_interval_sec",
                params.get("time_interval_sec", defaults.time_interval_sec),
            ),
            dimension=cls._as_int(
                "dimension", params.get("dimension", defaults.dimension)
            ),
        )
        result.validate()
        return result

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SplineParams:
        """Load parameters from a YAML file holding a flat mapping."""
        with open(path, "r", encoding="utf-8") as stream:
            document: object = yaml.safe_load(stream)
        if document is None:
            document = {}
        if not isinstance(document, Mapping):
            raise ValueError("spline params YAML must contain a mapping")
        return cls.from_dict(document)

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        if self.spline_order < 2:
            raise ValueError("spline_order must be >= 2")
        if not math.isfinite(self.time_interval_sec) or self.time_interval_sec <= 0.0:
            raise ValueError("time_interval_sec must be > 0")
        if self.dimension <= 0:
            raise ValueError("dimension must be > 0")

    def as_dict(self) -> dict[str, object]:
        """Return a YAML-serializable dict representation."""
        return {
            "spline_order": self.spline_order,
            "time_interval_sec": self.time_interval_sec,
            "dimension": self.dimension,
        }

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a float")
        return float(value)

    @staticmethod
    def _as_int(name: str, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an int")
        return int(value)

    @staticmethod
    def _field_order() -> list[str]:
        return [
            "spline_order",
            "time_interval_sec",
            "dimension",
        ]
