from fastapi import Depends

from surveydesk.core.config import settings
from surveydesk.core.storage import DocumentStore, get_store
from surveydesk.services.repository import (
    ResponseRepository,
    SurveyRepository,
    UserRepository,
)


def get_survey_repository(store: DocumentStore = Depends(get_store)) -> SurveyRepository:
    return SurveyRepository(store, cascade_responses=settings.CASCADE_DELETE_RESPONSES)


def get_response_repository(store: DocumentStore = Depends(get_store)) -> ResponseRepository:
    return ResponseRepository(store)


def get_user_repository(store: DocumentStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store)
