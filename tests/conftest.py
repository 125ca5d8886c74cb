"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from clip_manager.app import app
from clip_manager.config import Settings
from clip_manager.models.content import AdapterOutcome


class FakeStrategy:
    """Strategy double returning a canned outcome and recording its inputs."""

    def __init__(self, name: str, outcome: AdapterOutcome, min_length: int = 1) -> None:
        self.name = name
        self.outcome = outcome
        self.min_length = min_length
        self.calls: list[str] = []

    async def attempt(self, source: str) -> AdapterOutcome:
        self.calls.append(source)
        return self.outcome


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_strategy():
    """Factory for FakeStrategy instances."""
    return FakeStrategy
