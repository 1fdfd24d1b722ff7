from surveydesk.models.document import StoredDocument, DOCUMENT_ROW_ID

__all__ = [
    "StoredDocument",
    "DOCUMENT_ROW_ID",
]
