"""Shared fixtures: a throwaway JSON store and a TestClient wired to it."""
import pytest
from fastapi.testclient import TestClient

from surveydesk.core.security import create_access_token
from surveydesk.core.storage import JsonFileStore, get_store
from surveydesk.main import app
from surveydesk.schemas.survey import SurveyCreate
from surveydesk.schemas.user import Principal, UserCreate
from surveydesk.services.repository import SurveyRepository, UserRepository


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(str(tmp_path / "data.json"))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def headers_for(user) -> dict:
    principal = Principal(id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {create_access_token(principal)}"}


@pytest.fixture
def admin_user(store):
    return UserRepository(store).register(
        UserCreate(email="admin@surveydesk.io", password="admin12345", name="Admin"),
        role="admin",
    )


@pytest.fixture
def regular_user(store):
    return UserRepository(store).register(
        UserCreate(email="editor@surveydesk.io", password="editor12345", name="Editor")
    )


@pytest.fixture
def admin_headers(admin_user):
    return headers_for(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return headers_for(regular_user)


@pytest.fixture
def survey_payload():
    return {
        "title": "Checkout feedback",
        "description": "Post-purchase questions",
        "active": True,
        "questions": [
            {
                "id": "q1",
                "text": "Would you buy again?",
                "type": "radio",
                "required": True,
                "options": [
                    {"value": "yes", "label": "Yes"},
                    {"value": "no", "label": "No"},
                ],
            },
            {
                "id": "q2",
                "text": "What did you like?",
                "type": "checkbox",
                "required": False,
                "options": [
                    {"value": "price", "label": "Price"},
                    {"value": "speed", "label": "Delivery speed"},
                    {"value": "support", "label": "Support"},
                ],
            },
            {
                "id": "q3",
                "text": "Any other comments?",
                "type": "text",
                "required": False,
            },
        ],
    }


@pytest.fixture
def survey(store, survey_payload):
    return SurveyRepository(store).create(SurveyCreate.model_validate(survey_payload))
