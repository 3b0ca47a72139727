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

from pathlib import Path

import pytest

from pose_spline.config.spline_params import SplineParams


def test_defaults_validate() -> None:
    params: SplineParams = SplineParams.defaults()

    params.validate()
    assert params.spline_order == 4
    assert params.time_interval_sec == 0.1
    assert params.dimension == 3


def test_from_dict_rejects_unknown_key() -> None:
    with pytest.raises(ValueError) as context:
        SplineParams.from_dict({"spline_order": 3, "knots": 5})

    assert str(context.value) == "unknown parameter: knots"


def test_from_dict_rejects_wrong_types() -> None:
    with pytest.raises(ValueError, match="spline_order must be an int"):
        SplineParams.from_dict({"spline_order": 4.0})
    with pytest.raises(ValueError, match="time_interval_sec must be a float"):
        SplineParams.from_dict({"time_interval_sec": "0.1"})
    with pytest.raises(ValueError, match="dimension must be an int"):
        SplineParams.from_dict({"dimension": True})


def test_from_dict_validates_ranges() -> None:
    with pytest.raises(ValueError, match="spline_order must be >= 2"):
        SplineParams.from_dict({"spline_order": 1})
    with pytest.raises(ValueError, match="time_interval_sec must be > 0"):
        SplineParams.from_dict({"time_interval_sec": 0})
    with pytest.raises(ValueError, match="dimension must be > 0"):
        SplineParams.from_dict({"dimension": 0})


def test_as_dict_round_trip() -> None:
    params: SplineParams = SplineParams.from_dict(
        {"spline_order": 5, "time_interval_sec": 0.05, "dimension": 6}
    )

    assert SplineParams.from_dict(params.as_dict()) == params


def test_from_yaml(tmp_path: Path) -> None:
    path: Path = tmp_path / "spline.yaml"
    path.write_text("spline_order: 3\ntime_interval_sec: 0.25\n", encoding="utf-8")

    params: SplineParams = SplineParams.from_yaml(path)

    assert params.spline_order == 3
    assert params.time_interval_sec == 0.25
    assert params.dimension == 3


def test_from_yaml_empty_file_uses_defaults(tmp_path: Path) -> None:
    path: Path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert SplineParams.from_yaml(path) == SplineParams.defaults()


def test_from_yaml_rejects_non_mapping(tmp_path: Path) -> None:
    path: Path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must contain a mapping"):
        SplineParams.from_yaml(path)
