from __future__ import annotations

import itertools
from typing import Callable

import pytest

from eyec.models import Report


@pytest.fixture
def report() -> Report:
    return Report()


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic identifiers so two classifications can be compared."""
    counter = itertools.count(1)
    return lambda: f"{next(counter):016x}"
