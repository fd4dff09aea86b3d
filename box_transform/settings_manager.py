from __future__ import annotations

import json
import math
import os
from typing import Any

from .constraints import Constraints
from .enums import ResizeMode
from .geometry import Box
from .logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    """JSON-backed defaults for resize sessions.

    Missing or unreadable files fall back to ``DEFAULTS``; bad individual
    values are logged and replaced by their default.
    """

    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "allow_flip": True,
        "resize_mode": "freeform",
        "limit_tolerance": 1e-9,
        "clamp_to": None,
        "min_width": 0.0,
        "min_height": 0.0,
        "max_width": None,
        "max_height": None,
    }

    def load(self) -> None:
        """Read the saved resize defaults; a missing or corrupt file leaves them empty."""
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except Exception as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        """Write the current resize settings, creating the parent folder if needed."""
        try:
            os.makedirs(os.path.dirname(self.settings_path) or ".", exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except Exception as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value, else ``default``, else the built-in default for ``key``.

        Typed callers should prefer the properties below, which validate
        ``resize_mode``, ``clamp_to`` and the size limits.
        """
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        # Persisted on every change.
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def allow_flip(self) -> bool:
        return bool(self.get("allow_flip"))

    @property
    def resize_mode(self) -> ResizeMode:
        name = self.get("resize_mode")
        try:
            return ResizeMode.from_name(str(name))
        except ValueError as e:
            _logger.warning("saved resize_mode invalid: %s", e)
        return ResizeMode.from_name(self.DEFAULTS["resize_mode"])

    @property
    def limit_tolerance(self) -> float:
        try:
            value = float(self.get("limit_tolerance"))
            if value >= 0:
                return value
            _logger.warning("saved limit_tolerance negative: %s", value)
        except (TypeError, ValueError) as e:
            _logger.warning("failed to parse limit_tolerance: %s", e)
        return float(self.DEFAULTS["limit_tolerance"])

    @property
    def clamping_box(self) -> Box:
        """Saved ``clamp_to`` as [left, top, right, bottom]; unbounded when unset."""
        raw = self.get("clamp_to")
        if raw is None:
            return Box.LARGEST
        try:
            left, top, right, bottom = (float(v) for v in raw)
            return Box.from_ltrb(left, top, right, bottom).normalized()
        except (TypeError, ValueError) as e:
            _logger.warning("saved clamp_to invalid: %s", e)
        return Box.LARGEST

    @property
    def constraints(self) -> Constraints:
        def _limit(key: str, fallback: float) -> float:
            value = self.get(key)
            return fallback if value is None else float(value)

        try:
            return Constraints(
                min_width=_limit("min_width", 0.0),
                min_height=_limit("min_height", 0.0),
                max_width=_limit("max_width", math.inf),
                max_height=_limit("max_height", math.inf),
            ).validate()
        except (TypeError, ValueError) as e:
            _logger.warning("saved constraints invalid: %s", e)
        return Constraints.unconstrained()

    def resize_options(self) -> dict[str, Any]:
        """Keyword arguments for :func:`box_transform.transformer.resize`."""
        return {
            "resize_mode": self.resize_mode,
            "clamping_rect": self.clamping_box,
            "constraints": self.constraints,
            "allow_flip": self.allow_flip,
            "tolerance": self.limit_tolerance,
        }
