import pytest
from fastapi.testclient import TestClient

from tprm_wizard.main import app
from tprm_wizard.services.wizard_store import WizardStore


@pytest.fixture
def store() -> WizardStore:
    return WizardStore(seed_initial_scenario=False)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/api/v1/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]
