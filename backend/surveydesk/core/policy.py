"""Role-based access policy: (operation, principal) -> allow, or raise.

The policy is plain data plus one method so it can be checked without HTTP.
Routes plug it in through ``require(operation)``, which yields the principal
(or None for public operations).
"""
import enum
import logging
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials

from surveydesk.core.errors import ForbiddenError, UnauthenticatedError
from surveydesk.core.security import bearer_scheme, decode_access_token
from surveydesk.schemas.user import Principal

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    REGISTER = "register"
    LOGIN = "login"
    CURRENT_USER = "current_user"
    LIST_SURVEYS = "list_surveys"
    GET_SURVEY = "get_survey"
    CREATE_SURVEY = "create_survey"
    UPDATE_SURVEY = "update_survey"
    DELETE_SURVEY = "delete_survey"
    SUBMIT_RESPONSE = "submit_response"
    LIST_RESPONSES = "list_responses"
    GET_ANALYTICS = "get_analytics"
    GET_ACTIVE_SURVEY = "get_active_survey"


class Rule(str, enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


DEFAULT_RULES: Dict[Operation, Rule] = {
    Operation.REGISTER: Rule.PUBLIC,
    Operation.LOGIN: Rule.PUBLIC,
    Operation.SUBMIT_RESPONSE: Rule.PUBLIC,
    Operation.GET_ACTIVE_SURVEY: Rule.PUBLIC,
    Operation.CURRENT_USER: Rule.AUTHENTICATED,
    Operation.LIST_SURVEYS: Rule.AUTHENTICATED,
    Operation.GET_SURVEY: Rule.AUTHENTICATED,
    Operation.CREATE_SURVEY: Rule.AUTHENTICATED,
    Operation.UPDATE_SURVEY: Rule.AUTHENTICATED,
    Operation.LIST_RESPONSES: Rule.AUTHENTICATED,
    Operation.GET_ANALYTICS: Rule.AUTHENTICATED,
    Operation.DELETE_SURVEY: Rule.ADMIN,
}


class AccessPolicy:
    def __init__(self, rules: Optional[Dict[Operation, Rule]] = None):
        self.rules = dict(DEFAULT_RULES if rules is None else rules)

    def rule_for(self, operation: Operation) -> Rule:
        # Operations nobody registered are admin-only
        return self.rules.get(operation, Rule.ADMIN)

    def authorize(self, operation: Operation, principal: Optional[Principal]) -> None:
        rule = self.rule_for(operation)
        if rule == Rule.PUBLIC:
            return
        if principal is None:
            raise UnauthenticatedError("Access denied. No token provided.")
        if rule == Rule.ADMIN and not principal.is_admin:
            logger.warning(f"Denied {operation.value} for user {principal.id} (role={principal.role})")
            raise ForbiddenError("Access denied. Admin privileges required.")

    def allows(self, operation: Operation, principal: Optional[Principal]) -> bool:
        try:
            self.authorize(operation, principal)
        except (UnauthenticatedError, ForbiddenError):
            return False
        return True


policy = AccessPolicy()


def get_policy() -> AccessPolicy:
    return policy


def require(operation: Operation):
    """FastAPI dependency factory gating a route on ``operation``."""

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        access: AccessPolicy = Depends(get_policy),
    ) -> Optional[Principal]:
        # Public operations ignore whatever token the caller sends
        if access.rule_for(operation) == Rule.PUBLIC:
            return None
        principal = None
        if credentials is not None and credentials.credentials:
            principal = decode_access_token(credentials.credentials)
        access.authorize(operation, principal)
        return principal

    return dependency
