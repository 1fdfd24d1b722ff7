"""
Document store: the whole application state as one JSON document.

    {"users": [...], "surveys": [...], "responses": [...]}

Callers only see ``load()`` and ``save(document)``. Set STORAGE_BACKEND to
'json' (flat file, the default) or 'sql' (one row in a database) to switch.
"""
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from surveydesk.core.config import settings
from surveydesk.core.database import Base, build_engine, build_session_factory
from surveydesk.core.errors import StorageError
from surveydesk.models.document import StoredDocument, DOCUMENT_ROW_ID

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "surveys", "responses")


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


def _with_collections(document: dict) -> dict:
    for name in COLLECTIONS:
        document.setdefault(name, [])
    return document


class DocumentStore:
    """Abstract document store interface"""

    def load(self) -> dict:
        """Return a private copy of the full document."""
        raise NotImplementedError

    def save(self, document: dict) -> None:
        """Replace the full document."""
        raise NotImplementedError


class JsonFileStore(DocumentStore):
    """Flat JSON file on the local filesystem"""

    def __init__(self, path: str):
        self.path = Path(path)
        if not self.path.exists():
            logger.info(f"Initializing data file at {self.path}")
            self.save(empty_document())

    def load(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Failed to read {self.path}: expected a JSON object")
        return _with_collections(document)

    def save(self, document: dict) -> None:
        # Write to a sibling temp file and rename over the target so readers
        # never see a partially written document.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {self.path}: {e}") from e


class SqlDocumentStore(DocumentStore):
    """The same document kept in a single database row, saved transactionally"""

    def __init__(self, database_url: str):
        self.engine = build_engine(database_url)
        db_file = self.engine.url.database
        if self.engine.url.get_backend_name() == "sqlite" and db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal = build_session_factory(self.engine)

    def load(self) -> dict:
        db = self.SessionLocal()
        try:
            row = db.get(StoredDocument, DOCUMENT_ROW_ID)
            if row is None:
                return empty_document()
            return _with_collections(copy.deepcopy(row.data))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read document: {e}") from e
        finally:
            db.close()

    def save(self, document: dict) -> None:
        db = self.SessionLocal()
        try:
            row = db.get(StoredDocument, DOCUMENT_ROW_ID)
            if row is None:
                db.add(StoredDocument(id=DOCUMENT_ROW_ID, data=document))
            else:
                row.data = document
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"Failed to write document: {e}") from e
        finally:
            db.close()


# Global store instance
_store: Optional[DocumentStore] = None


def create_store(backend: str) -> DocumentStore:
    if backend == "sql":
        logger.info("Storage: SQL document row")
        return SqlDocumentStore(settings.DATABASE_URL)
    if backend == "json":
        logger.info(f"Storage: JSON file {settings.DATA_FILE}")
        return JsonFileStore(settings.DATA_FILE)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


def get_store() -> DocumentStore:
    """Get document store singleton (FastAPI dependency)"""
    global _store
    if _store is None:
        _store = create_store(settings.STORAGE_BACKEND)
    return _store
