from surveydesk.schemas.user import (
    UserCreate, LoginRequest, UserPublic, UserInDB, Principal, AuthResponse,
)
from surveydesk.schemas.survey import (
    Question, QuestionOption, SurveyCreate, SurveyUpdate, Survey,
)
from surveydesk.schemas.response import Answer, ResponseCreate, SurveyResponse
from surveydesk.schemas.analytics import QuestionAnalytics, SurveyAnalytics

__all__ = [
    "UserCreate",
    "LoginRequest",
    "UserPublic",
    "UserInDB",
    "Principal",
    "AuthResponse",
    "Question",
    "QuestionOption",
    "SurveyCreate",
    "SurveyUpdate",
    "Survey",
    "Answer",
    "ResponseCreate",
    "SurveyResponse",
    "QuestionAnalytics",
    "SurveyAnalytics",
]
