"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample tree and animal log entries
- Sample projects and weather
- Mock document store and weather clients
- FastAPI test client
"""
import os

# Settings are read at import time: no retry back-off and no rate limit in tests
os.environ.setdefault("RETRY_MIN_WAIT", "0")
os.environ.setdefault("RETRY_MAX_WAIT", "0")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "100000")
os.environ.setdefault("WEATHER_API_KEY", "test-key")

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from agritag.main import app
from agritag.domain.models import (
    AnimalDocument,
    AnimalLogEntry,
    GeoPoint,
    Project,
    TreeDocument,
    TreeLogEntry,
    WeatherSnapshot,
)
from agritag.infrastructure.document_store_client import DocumentStoreClient
from agritag.infrastructure.weather_client import WeatherClient
from agritag.services.domain.animal_health import AnimalHealthAdvisor, HealthConfig
from agritag.services.domain.harvest_advisor import AdvisoryConfig, HarvestAdvisor


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def mature_tree() -> TreeLogEntry:
    """A five-year-old avocado fertilized on 2024-01-15."""
    return TreeLogEntry(
        id="ST1AP0001",
        type="Hass",
        age=5,
        fertilization_date="2024-01-15",
        watering_date="2024-03-01",
        location=GeoPoint(latitude=-8.659, longitude=115.242),
        updated_at="2024-03-01T08:00:00.000Z",
    )


@pytest.fixture
def young_tree() -> TreeLogEntry:
    """A tree too young to forecast."""
    return TreeLogEntry(
        id="ST1AP0002",
        age=2,
        fertilization_date="2024-01-15",
        updated_at="2024-01-15T08:00:00.000Z",
    )


@pytest.fixture
def healthy_animal() -> AnimalLogEntry:
    """A cow with a recent vaccination."""
    return AnimalLogEntry(
        id="SF1SA0001",
        type="Sapi",
        health_status="Healthy",
        gender="Betina",
        birth_date="2021-05-01",
        weight=350.0,
        vaccination_date="2024-04-01",
        production=12.0,
        updated_at="2024-05-01T08:00:00.000Z",
    )


@pytest.fixture
def sample_project() -> Project:
    """Create a sample project in Denpasar."""
    return Project(
        id="proj-1",
        name="Kebun Alpukat",
        geolocation=GeoPoint(latitude=-8.659, longitude=115.242),
        user_id="user-1",
        created_at="2024-01-01T00:00:00.000Z",
        start_date="2024-01-01",
        end_date="2024-12-31",
    )


@pytest.fixture
def clear_weather() -> WeatherSnapshot:
    """Warm, dry weather that triggers no harvest delay."""
    return WeatherSnapshot(
        temperature=25.0,
        humidity=50.0,
        description="clear sky",
        location_name="Denpasar",
    )


@pytest.fixture
def tree_documents(mature_tree) -> list[TreeDocument]:
    """Two trees, the first with two log entries."""
    older = mature_tree.model_copy(update={
        "age": 4,
        "updated_at": "2024-02-01T08:00:00.000Z",
    })
    other = TreeLogEntry(
        id="ST1DU0002",
        type="Monthong",
        age=1,
        location=GeoPoint(latitude=-8.659, longitude=115.242),
        updated_at="2024-02-20T08:00:00.000Z",
    )
    return [
        TreeDocument(id=mature_tree.id, logs=[older, mature_tree]),
        TreeDocument(id=other.id, logs=[other]),
    ]


@pytest.fixture
def animal_documents(healthy_animal) -> list[AnimalDocument]:
    """One cow with a single log entry."""
    return [AnimalDocument(id=healthy_animal.id, logs=[healthy_animal])]


# ============================================================
# Domain Service Fixtures
# ============================================================

@pytest.fixture
def harvest_advisor() -> HarvestAdvisor:
    """Harvest advisor with default configuration."""
    return HarvestAdvisor(AdvisoryConfig())


@pytest.fixture
def health_advisor() -> AnimalHealthAdvisor:
    """Animal health advisor with default thresholds."""
    return AnimalHealthAdvisor(HealthConfig())


# ============================================================
# Mock Client Fixtures
# ============================================================

@pytest.fixture
def mock_store(sample_project, tree_documents, animal_documents):
    """Create a mock document store client."""
    store = AsyncMock(spec=DocumentStoreClient)
    store.get_project.return_value = sample_project
    store.list_projects.return_value = [sample_project]
    store.get_subject.return_value = None

    async def list_subjects(project_id, namespace):
        return tree_documents if namespace.value == "tree" else animal_documents

    store.list_subjects.side_effect = list_subjects
    return store


@pytest.fixture
def mock_weather_client(clear_weather):
    """Create a mock weather client returning clear weather."""
    client = AsyncMock(spec=WeatherClient)
    client.get_current_weather.return_value = clear_weather
    return client


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
