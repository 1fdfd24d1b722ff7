"""Repositories over the document store.

Every operation is a whole-document read-modify-write: load the document,
change the private copy that ``load()`` hands back, save it whole. There is
no locking, so concurrent writers race and the last save wins.
"""
import logging
import random
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from surveydesk.core.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from surveydesk.core.security import get_password_hash, verify_password
from surveydesk.core.storage import DocumentStore
from surveydesk.schemas.response import Answer, ResponseCreate, SurveyResponse
from surveydesk.schemas.survey import Survey, SurveyCreate, SurveyUpdate
from surveydesk.schemas.user import UserCreate, UserInDB

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _index_of(items: List[dict], item_id: str) -> int:
    for i, item in enumerate(items):
        if item.get("id") == item_id:
            return i
    return -1


class DocumentRepository:
    """Shared load/save plumbing over the document store."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def _load(self) -> dict:
        return self.store.load()

    def _save(self, document: dict) -> None:
        self.store.save(document)


class SurveyRepository(DocumentRepository):
    def __init__(self, store: DocumentStore, cascade_responses: bool = True):
        super().__init__(store)
        self.cascade_responses = cascade_responses

    def list_all(self) -> List[Survey]:
        return [Survey.model_validate(s) for s in self._load()["surveys"]]

    def get(self, survey_id: str) -> Survey:
        document = self._load()
        index = _index_of(document["surveys"], survey_id)
        if index == -1:
            raise NotFoundError("Survey not found")
        return Survey.model_validate(document["surveys"][index])

    def create(self, data: SurveyCreate) -> Survey:
        document = self._load()
        survey = Survey(id=new_id(), created_at=utcnow(), **data.model_dump())
        document["surveys"].append(survey.to_document())
        self._save(document)
        logger.info(f"Survey created: id={survey.id}, questions={len(survey.questions)}")
        return survey

    def update(self, survey_id: str, patch: SurveyUpdate) -> Survey:
        """Merge the supplied fields onto the stored survey; id and createdAt stay."""
        document = self._load()
        index = _index_of(document["surveys"], survey_id)
        if index == -1:
            raise NotFoundError("Survey not found")

        current = Survey.model_validate(document["surveys"][index])
        merged = current.model_dump()
        merged.update(patch.model_dump(exclude_unset=True, exclude_none=True))
        merged["id"] = current.id
        merged["created_at"] = current.created_at
        try:
            survey = Survey.model_validate(merged)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid survey: {e.errors()[0]['msg']}") from e

        document["surveys"][index] = survey.to_document()
        self._save(document)
        logger.info(f"Survey updated: id={survey_id}")
        return survey

    def delete(self, survey_id: str) -> int:
        """Remove the survey; returns how many of its responses were removed with it."""
        document = self._load()
        index = _index_of(document["surveys"], survey_id)
        if index == -1:
            raise NotFoundError("Survey not found")

        document["surveys"].pop(index)
        removed = 0
        if self.cascade_responses:
            kept = [r for r in document["responses"] if r.get("surveyId") != survey_id]
            removed = len(document["responses"]) - len(kept)
            document["responses"] = kept
        self._save(document)
        logger.info(f"Survey deleted: id={survey_id}, responses_removed={removed}")
        return removed

    def get_active(self) -> Survey:
        """First survey marked active, in stored order."""
        active = [s for s in self._load()["surveys"] if s.get("active")]
        if not active:
            raise NotFoundError("No active survey found")
        if len(active) > 1:
            logger.warning(
                f"{len(active)} surveys are active; serving the first ({active[0].get('id')})"
            )
        return Survey.model_validate(active[0])


def _is_blank(answer: Answer) -> bool:
    if answer.values is not None:
        return len(answer.values) == 0
    return not (answer.value or "").strip()


def format_answer(survey: Optional[Survey], answer: Answer) -> str:
    """Human-readable answer: option labels for choice questions, the raw text otherwise."""
    question = survey.question(answer.question_id) if survey else None
    labels = {o.value: o.label for o in question.options or []} if question else {}
    if answer.values is not None:
        return ", ".join(labels.get(v, v) for v in answer.values)
    return labels.get(answer.value, answer.value or "")


def validate_answers(survey: Survey, answers: List[Answer]) -> None:
    """Answers must match the survey's questions: known id, right shape, required ones non-empty.

    Option values are not checked against the declared options; analytics
    counts unknown values under their own key.
    """
    seen = set()
    answered = set()
    for answer in answers:
        question = survey.question(answer.question_id)
        if question is None:
            raise InvalidInputError(f"Unknown question: {answer.question_id}")
        if answer.question_id in seen:
            raise InvalidInputError(f"Question answered twice: {answer.question_id}")
        seen.add(answer.question_id)

        if question.type == "checkbox" and answer.values is None:
            raise InvalidInputError(f"Question {question.id} expects 'values'")
        if question.type in ("radio", "text") and answer.value is None:
            raise InvalidInputError(f"Question {question.id} expects 'value'")
        if not _is_blank(answer):
            answered.add(answer.question_id)

    missing = [q.id for q in survey.questions if q.required and q.id not in answered]
    if missing:
        raise InvalidInputError("Please answer all required questions: " + ", ".join(missing))


class ResponseRepository(DocumentRepository):
    def submit(self, data: ResponseCreate) -> SurveyResponse:
        document = self._load()
        index = _index_of(document["surveys"], data.survey_id)
        if index == -1:
            raise NotFoundError("Survey not found")
        survey = Survey.model_validate(document["surveys"][index])
        validate_answers(survey, data.answers)

        response = SurveyResponse(
            id=new_id(),
            survey_id=data.survey_id,
            customer_id=data.customer_id or f"cust{random.randint(0, 9999)}",
            answers=data.answers,
            submitted_at=utcnow(),
        )
        document["responses"].append(response.to_document())
        self._save(document)
        logger.info(f"Response submitted: survey_id={data.survey_id}, customer_id={response.customer_id}")
        return response

    def list_for_survey(self, survey_id: str, query: Optional[str] = None) -> List[SurveyResponse]:
        """Responses of one survey in submission order.

        ``query`` is a case-insensitive substring matched against the customer
        id and each formatted answer (option labels, or the text typed in).
        """
        document = self._load()
        responses = [
            SurveyResponse.model_validate(r)
            for r in document["responses"]
            if r.get("surveyId") == survey_id
        ]
        if not query:
            return responses

        index = _index_of(document["surveys"], survey_id)
        # Orphaned responses have no survey to take labels from
        survey = Survey.model_validate(document["surveys"][index]) if index != -1 else None
        needle = query.lower()
        return [
            r for r in responses
            if needle in r.customer_id.lower()
            or any(needle in format_answer(survey, a).lower() for a in r.answers)
        ]


class UserRepository(DocumentRepository):
    def _find_by_email(self, document: dict, email: str) -> Optional[dict]:
        email = email.lower()
        for u in document["users"]:
            if u.get("email", "").lower() == email:
                return u
        return None

    def register(self, data: UserCreate, role: str = "user") -> UserInDB:
        document = self._load()
        if self._find_by_email(document, data.email) is not None:
            raise ConflictError("User with this email already exists")

        user = UserInDB(
            id=new_id(),
            email=data.email,
            name=data.name,
            role=role,
            password_hash=get_password_hash(data.password),
            created_at=utcnow(),
        )
        document["users"].append(user.to_document())
        self._save(document)
        logger.info(f"User registered: id={user.id}, role={role}")
        return user

    def authenticate(self, email: str, password: str) -> UserInDB:
        found = self._find_by_email(self._load(), email)
        if found is None or not verify_password(password, found.get("passwordHash", "")):
            logger.warning(f"Failed login for {email}")
            raise UnauthenticatedError("Invalid email or password")
        return UserInDB.model_validate(found)

    def get(self, user_id: str) -> UserInDB:
        document = self._load()
        index = _index_of(document["users"], user_id)
        if index == -1:
            raise NotFoundError("User not found")
        return UserInDB.model_validate(document["users"][index])

    def get_by_email(self, email: str) -> Optional[UserInDB]:
        found = self._find_by_email(self._load(), email)
        return UserInDB.model_validate(found) if found else None


def ensure_admin(store: DocumentStore, email: str, password: str, name: str = "Administrator") -> UserInDB:
    """Create the admin account unless a user with that email already exists."""
    users = UserRepository(store)
    existing = users.get_by_email(email)
    if existing is not None:
        if existing.role != "admin":
            logger.warning(f"Existing account {email} has role '{existing.role}', not admin; left unchanged")
        return existing
    return users.register(UserCreate(email=email, password=password, name=name), role="admin")
