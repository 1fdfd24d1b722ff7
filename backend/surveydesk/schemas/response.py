from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from surveydesk.schemas.base import CamelModel


class Answer(CamelModel):
    """`value` for radio and text questions, `values` for checkbox questions."""
    question_id: str
    value: Optional[str] = None
    values: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_shape(self):
        if (self.value is None) == (self.values is None):
            raise ValueError("An answer carries exactly one of 'value' or 'values'")
        return self


class ResponseCreate(CamelModel):
    survey_id: str = Field(..., min_length=1)
    customer_id: Optional[str] = None
    answers: List[Answer] = Field(default_factory=list)


class SurveyResponse(CamelModel):
    id: str
    survey_id: str
    customer_id: str
    answers: List[Answer]
    submitted_at: datetime

    def answer_for(self, question_id: str) -> Optional[Answer]:
        for a in self.answers:
            if a.question_id == question_id:
                return a
        return None
