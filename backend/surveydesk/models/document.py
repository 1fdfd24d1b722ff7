"""Single-row table that holds the whole application document for the SQL store."""
from sqlalchemy import Column, Integer, JSON, DateTime
from sqlalchemy.sql import func
from surveydesk.core.database import Base


DOCUMENT_ROW_ID = 1


class StoredDocument(Base):
    """The users/surveys/responses document, serialized as JSON."""
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    data = Column(JSON, nullable=False)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
