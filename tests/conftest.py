from __future__ import annotations

from datetime import datetime

import pytest

from fakes import FIXED_NOW, World


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def world() -> World:
    return World()
