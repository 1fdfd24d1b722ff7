import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, model_validator

from surveydesk.schemas.base import CamelModel


QuestionType = Literal["radio", "checkbox", "text"]
CHOICE_TYPES = ("radio", "checkbox")


class QuestionOption(CamelModel):
    value: str = Field(..., min_length=1)
    label: str


class Question(CamelModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str = Field(..., min_length=1)
    type: QuestionType
    required: bool = False
    options: Optional[List[QuestionOption]] = None

    @model_validator(mode="after")
    def check_options(self):
        if self.type in CHOICE_TYPES:
            if not self.options or len(self.options) < 2:
                raise ValueError(f"{self.type} questions need at least 2 options")
        elif self.options:
            raise ValueError("text questions take no options")
        else:
            self.options = None
        return self

    @property
    def option_values(self) -> List[str]:
        return [o.value for o in self.options or []]


def _check_unique_question_ids(questions: Optional[List[Question]]):
    if not questions:
        return
    ids = [q.id for q in questions]
    if len(ids) != len(set(ids)):
        raise ValueError("Question ids must be unique within a survey")


class SurveyBase(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    active: bool = False
    questions: List[Question] = Field(default_factory=list)


class SurveyCreate(SurveyBase):
    @model_validator(mode="after")
    def check_question_ids(self):
        _check_unique_question_ids(self.questions)
        return self


class SurveyUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    active: Optional[bool] = None
    questions: Optional[List[Question]] = None

    @model_validator(mode="after")
    def check_question_ids(self):
        _check_unique_question_ids(self.questions)
        return self


class Survey(SurveyBase):
    id: str
    created_at: datetime

    def question(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None
