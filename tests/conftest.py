"""Shared fixtures for database tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest
import pytest_asyncio

from burncloud_db.db.connection import Database


@dataclass
class FakeEnvironment:
    """Stand-in for the host environment used by path resolution."""

    os_name: str = "posix"
    variables: dict[str, str] = field(default_factory=dict)
    home: Path | None = None

    def get(self, name: str) -> str | None:
        return self.variables.get(name)

    def home_dir(self) -> Path | None:
        return self.home


@pytest.fixture
def posix_env(tmp_path) -> FakeEnvironment:
    """POSIX-like environment whose home directory is a temp dir."""
    return FakeEnvironment(os_name="posix", home=tmp_path / "home")


@pytest_asyncio.fixture
async def memory_db():
    """Initialized in-memory database, closed after the test."""
    db = Database.new_in_memory()
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def file_db(tmp_path):
    """Initialized file-backed database under a not-yet-existing directory."""
    db = Database.new(tmp_path / "nested" / "test.db")
    await db.initialize()
    yield db
    await db.close()


@pytest.fixture
def make_env():
    """Factory for fake environments: ``make_env(os_name=..., variables=..., home=...)``."""
    return FakeEnvironment
