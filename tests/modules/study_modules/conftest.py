"""
Pytest fixtures for study module tests.
"""

import pytest

from modules.study_modules.service import ModuleService

from .fakes import InMemoryModuleRepository, TickingClock


@pytest.fixture
def fake_repo() -> InMemoryModuleRepository:
    return InMemoryModuleRepository()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def service(fake_repo, clock) -> ModuleService:
    return ModuleService(repository=fake_repo, clock=clock)
