"""Pytest configuration.

Shared boxes for the transformer tests. The core package is pure Python; only
the Qt adapter tests need PySide6 and they skip themselves when it is missing.
"""

from __future__ import annotations

import pytest

from box_transform.geometry import Box


@pytest.fixture
def square() -> Box:
    return Box.from_ltwh(0, 0, 100, 100)


@pytest.fixture
def landscape() -> Box:
    """A 2:1 box."""
    return Box.from_ltwh(0, 0, 200, 100)
