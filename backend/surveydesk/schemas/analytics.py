from typing import Dict, List, Optional
from surveydesk.schemas.base import CamelModel
from surveydesk.schemas.survey import QuestionType


class QuestionAnalytics(CamelModel):
    question_id: str
    question_text: str
    type: QuestionType
    total_responses: int
    # radio / checkbox only
    option_counts: Optional[Dict[str, int]] = None
    # text only
    responses: Optional[List[str]] = None


class SurveyAnalytics(CamelModel):
    survey_id: str
    survey_title: str
    total_responses: int
    analytics: List[QuestionAnalytics]
