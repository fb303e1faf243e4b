from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import pytest

from pysatl_probeval.config import reset_engine_settings

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_engine_settings() -> Generator[None, Any, None]:
    reset_engine_settings()
    yield
    reset_engine_settings()
