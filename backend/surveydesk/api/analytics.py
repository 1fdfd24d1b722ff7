"""Analytics API: per-question tallies for one survey."""
from fastapi import APIRouter, Depends

from surveydesk.api.deps import get_response_repository, get_survey_repository
from surveydesk.core.policy import Operation, require
from surveydesk.schemas.analytics import SurveyAnalytics
from surveydesk.schemas.user import Principal
from surveydesk.services.analytics import aggregate
from surveydesk.services.repository import ResponseRepository, SurveyRepository

router = APIRouter(prefix="/api/surveys", tags=["analytics"])


@router.get("/{survey_id}/analytics", response_model=SurveyAnalytics,
            response_model_exclude_none=True)
def get_survey_analytics(
    survey_id: str,
    _: Principal = Depends(require(Operation.GET_ANALYTICS)),
    surveys: SurveyRepository = Depends(get_survey_repository),
    responses: ResponseRepository = Depends(get_response_repository),
):
    """
    Recomputed on every call from the survey and all of its stored responses.
    Choice questions get optionCounts, text questions get the raw answers.
    """
    survey = surveys.get(survey_id)
    return aggregate(survey, responses.list_for_survey(survey_id))
