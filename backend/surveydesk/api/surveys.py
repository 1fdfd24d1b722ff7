"""Surveys API: dashboard CRUD and the per-survey response list."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from surveydesk.api.deps import get_response_repository, get_survey_repository
from surveydesk.core.policy import Operation, require
from surveydesk.schemas.response import SurveyResponse
from surveydesk.schemas.survey import Survey, SurveyCreate, SurveyUpdate
from surveydesk.schemas.user import Principal
from surveydesk.services.repository import ResponseRepository, SurveyRepository

router = APIRouter(prefix="/api/surveys", tags=["surveys"])


@router.get("", response_model=List[Survey], response_model_exclude_none=True)
def list_surveys(
    _: Principal = Depends(require(Operation.LIST_SURVEYS)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    return surveys.list_all()


@router.get("/{survey_id}", response_model=Survey, response_model_exclude_none=True)
def get_survey(
    survey_id: str,
    _: Principal = Depends(require(Operation.GET_SURVEY)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    return surveys.get(survey_id)


@router.post("", response_model=Survey, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def create_survey(
    data: SurveyCreate,
    _: Principal = Depends(require(Operation.CREATE_SURVEY)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    return surveys.create(data)


@router.put("/{survey_id}", response_model=Survey, response_model_exclude_none=True)
def update_survey(
    survey_id: str,
    patch: SurveyUpdate,
    _: Principal = Depends(require(Operation.UPDATE_SURVEY)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    """Merge the supplied fields onto the survey. The id never changes."""
    return surveys.update(survey_id, patch)


@router.delete("/{survey_id}")
def delete_survey(
    survey_id: str,
    _: Principal = Depends(require(Operation.DELETE_SURVEY)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    """Admin only. The role check runs before the survey lookup."""
    removed = surveys.delete(survey_id)
    return {"message": "Survey deleted successfully", "responsesRemoved": removed}


@router.get("/{survey_id}/responses", response_model=List[SurveyResponse],
            response_model_exclude_none=True)
def list_survey_responses(
    survey_id: str,
    q: Optional[str] = Query(None, description="Case-insensitive search over customer id and answers"),
    _: Principal = Depends(require(Operation.LIST_RESPONSES)),
    responses: ResponseRepository = Depends(get_response_repository),
):
    return responses.list_for_survey(survey_id, query=q)
