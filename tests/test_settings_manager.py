from __future__ import annotations

import json
import math
from pathlib import Path

from box_transform.constraints import Constraints
from box_transform.enums import Flip, HandlePosition, ResizeMode
from box_transform.geometry import Box, Vector2
from box_transform.settings_manager import SettingsManager
from box_transform.transformer import resize


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))

    assert sm.allow_flip is True
    assert sm.resize_mode is ResizeMode.FREEFORM
    assert sm.limit_tolerance == 1e-9
    assert sm.clamping_box.is_largest
    assert sm.constraints.is_unconstrained
    assert not sm.has("resize_mode")


def test_set_persists_and_reloads(tmp_path: Path) -> None:
    settings_path = tmp_path / "nested" / "settings.json"
    sm = SettingsManager(str(settings_path))

    sm.set("resize_mode", "symmetricScale")
    sm.set("allow_flip", False)
    sm.set("clamp_to", [0, 0, 640, 480])
    sm.set("max_width", 300)

    reloaded = SettingsManager(str(settings_path))
    assert reloaded.resize_mode is ResizeMode.SYMMETRIC_SCALE
    assert reloaded.allow_flip is False
    assert reloaded.clamping_box == Box(0, 0, 640, 480)
    assert reloaded.constraints == Constraints(max_width=300)
    assert json.loads(settings_path.read_text(encoding="utf-8"))["max_width"] == 300


def test_clamp_to_is_normalized(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    sm.set("clamp_to", [100, 50, 0, 0])

    assert sm.clamping_box == Box(0, 0, 100, 50)


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    sm.set("resize_mode", "stretch")
    sm.set("limit_tolerance", -1)
    sm.set("clamp_to", [1, 2])
    sm.set("min_width", 50)
    sm.set("max_width", 10)

    assert sm.resize_mode is ResizeMode.FREEFORM
    assert sm.limit_tolerance == 1e-9
    assert sm.clamping_box.is_largest
    assert sm.constraints == Constraints.unconstrained()


def test_corrupt_file_loads_empty(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    sm = SettingsManager(str(settings_path))

    assert sm.data == {}
    assert sm.resize_mode is ResizeMode.FREEFORM


def test_non_dict_json_is_ignored(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert SettingsManager(str(settings_path)).data == {}


def test_get_prefers_stored_then_explicit_default(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))

    assert sm.get("max_width") is None
    assert sm.get("max_width", 5) == 5
    sm.set("max_width", 7)
    assert sm.get("max_width", 5) == 7


def test_resize_options_feed_resize(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    sm.set("clamp_to", [0, 0, 120, 120])
    sm.set("min_width", 10)
    sm.set("min_height", 10)

    options = sm.resize_options()
    assert options["constraints"] == Constraints(min_width=10, min_height=10, max_width=math.inf, max_height=math.inf)

    result = resize(
        initial_box=Box(0, 0, 100, 100),
        initial_local_position=Vector2(100, 100),
        local_position=Vector2(150, 150),
        handle=HandlePosition.BOTTOM_RIGHT,
        initial_flip=Flip.NONE,
        **options,
    )

    assert result.rect == Box(0, 0, 120, 120)
    assert result.max_width_reached and result.max_height_reached
