"""Error taxonomy shared by the repository, the access policy and the API.

Every error carries the HTTP status it maps to, so the exception handler in
``surveydesk.main`` can render any of them as ``{"detail": message}``.
"""


class SurveyDeskError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SurveyDeskError):
    """A survey, user or response with the given id does not exist."""

    status_code = 404


class UnauthenticatedError(SurveyDeskError):
    """No credential, or credentials that do not identify a user."""

    status_code = 401


class ForbiddenError(SurveyDeskError):
    """Authenticated, but the token is invalid or the role is insufficient."""

    status_code = 403


class InvalidInputError(SurveyDeskError):
    """Missing or malformed fields on a write."""

    status_code = 400


class ConflictError(SurveyDeskError):
    """Duplicate unique value, e.g. a second user with the same email."""

    status_code = 409


class StorageError(SurveyDeskError):
    """The document store could not be read or written."""

    status_code = 500
