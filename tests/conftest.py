from __future__ import annotations

from datetime import datetime

import pytest

from src.dtr_system.dtr_system.container import build_container
from src.dtr_system.dtr_system.storage.seed import seed_demo_data
from src.dtr_system.dtr_system.storage.state import AppState


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def container(state):
    c = build_container(backend="file", state=state, it_password="password")
    seed_demo_data(c.departments_repo, c.employees_repo, c.projects_repo)
    return c


@pytest.fixture
def monday():
    """A regular working day used by the scan scenarios."""
    return datetime(2023, 11, 6)
