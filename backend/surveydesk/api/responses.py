"""Public API used by the customer-facing cart page (no auth)."""
from fastapi import APIRouter, Depends, status

from surveydesk.api.deps import get_response_repository, get_survey_repository
from surveydesk.core.policy import Operation, require
from surveydesk.schemas.response import ResponseCreate, SurveyResponse
from surveydesk.schemas.survey import Survey
from surveydesk.services.repository import ResponseRepository, SurveyRepository

router = APIRouter(prefix="/api", tags=["public"])


@router.post("/responses", response_model=SurveyResponse, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def submit_response(
    data: ResponseCreate,
    _: None = Depends(require(Operation.SUBMIT_RESPONSE)),
    responses: ResponseRepository = Depends(get_response_repository),
):
    return responses.submit(data)


@router.get("/active-survey", response_model=Survey, response_model_exclude_none=True)
def get_active_survey(
    _: None = Depends(require(Operation.GET_ACTIVE_SURVEY)),
    surveys: SurveyRepository = Depends(get_survey_repository),
):
    """The first survey marked active; 404 when none is."""
    return surveys.get_active()
