"""
Pytest fixtures for the campaign tracker tests.
"""
import pytest
from fastapi.testclient import TestClient

from campaign_tracker.database import CampaignStore, get_store
from campaign_tracker.main import app


@pytest.fixture
def store(tmp_path) -> CampaignStore:
    """Store backed by a file in a temporary data directory."""
    return CampaignStore(tmp_path / "data" / "campaigns.json")


@pytest.fixture
def client(store):
    """Test client whose routes use the temporary store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def launch_payload() -> dict:
    return {
        "campaignName": "Launch",
        "clientName": "Acme",
        "startDate": "2024-01-01",
    }
