from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, event, select, delete, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from models.base_model import Base
from models.document import Document

logger = logging.getLogger(__name__)


@dataclass
class InsertOneResult:
    inserted_id: str
    acknowledged: bool = True


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None
    acknowledged: bool = True

    @property
    def upserted_count(self) -> int:
        return 1 if self.upserted_id else 0


@dataclass
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True


class DBStorage:
    """
    Owns the engine (connection pool) for the lifetime of the process.
    Requests get their own session from the scoped_session registry and
    release it through close() at app-context teardown.
    """
    __engine = None
    __session = None

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize engine from a SQLAlchemy database URL"""
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory SQLite lives inside one connection; share it
            self.__engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif database_url.startswith("sqlite"):
            self.__engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
            )
        else:
            self.__engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

        if self.__engine.url.get_backend_name() == "sqlite":
            # SQLite ignores FOR UPDATE; take the write lock when the
            # transaction starts so read-merge-write cannot interleave
            @event.listens_for(self.__engine, "connect")
            def _disable_pysqlite_begin(dbapi_connection, connection_record):
                dbapi_connection.isolation_level = None

            @event.listens_for(self.__engine, "begin")
            def _begin_immediate(conn):
                conn.exec_driver_sql("BEGIN IMMEDIATE")

    def reload(self):
        """Create tables and start session"""
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)

    def collection(self, name: str) -> "Collection":
        return Collection(self, name)

    def ping(self) -> None:
        """Round-trip to the database; raises SQLAlchemyError when unreachable."""
        with self.__engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def save(self):
        """Commit session"""
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise

    def close(self):
        """Remove session (for API teardown)"""
        if self.__session is not None:
            self.__session.remove()

    def dispose(self):
        """Close every pooled connection (process shutdown only)"""
        self.__engine.dispose()

    # thread-local session registry used by Collection
    def get_session(self):
        return self.__session


class Collection:
    """
    Schema-free view over the documents of one collection.
    Each method runs in a single transaction.
    """

    def __init__(self, storage: DBStorage, name: str):
        self.storage = storage
        self.name = name

    def _query(self, filters: Optional[Dict[str, Any]] = None):
        stmt = select(Document).where(Document.collection == self.name)
        for field, value in (filters or {}).items():
            stmt = stmt.where(Document.data[field].as_string() == value)
        return stmt.order_by(Document.created_at, Document.id)

    def find(self, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """All documents whose top-level string fields equal `filters`, in insertion order"""
        session = self.storage.get_session()
        rows = session.execute(self._query(filters)).scalars().all()
        return [row.as_document() for row in rows]

    def find_one(self, doc_id: uuid.UUID) -> Optional[dict]:
        session = self.storage.get_session()
        row = session.get(Document, {"id": str(doc_id), "collection": self.name})
        return row.as_document() if row else None

    def insert_one(self, fields: Dict[str, Any]) -> InsertOneResult:
        session = self.storage.get_session()
        row = Document(collection=self.name, data=dict(fields))
        session.add(row)
        self.storage.save()
        logger.debug("Inserted %s/%s", self.name, row.id)
        return InsertOneResult(inserted_id=row.id)

    def update_one(self, doc_id: uuid.UUID, fields: Dict[str, Any], upsert: bool = False) -> UpdateResult:
        """
        Shallow-merge `fields` into the document's top-level fields.
        With upsert, a missing document is created under `doc_id`.
        """
        try:
            return self._locked_update(doc_id, fields, upsert)
        except IntegrityError:
            # A concurrent upsert inserted the document first; merge into it
            logger.debug("Upsert of %s/%s lost the insert race, merging", self.name, doc_id)
            return self._locked_update(doc_id, fields, upsert)

    def _locked_update(self, doc_id: uuid.UUID, fields: Dict[str, Any], upsert: bool) -> UpdateResult:
        session = self.storage.get_session()
        stmt = (
            select(Document)
            .where(Document.collection == self.name, Document.id == str(doc_id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = session.execute(stmt).scalar_one_or_none()
        if row is None:
            if not upsert:
                self.storage.save()
                return UpdateResult(matched_count=0, modified_count=0)
            row = Document(id=str(doc_id), collection=self.name, data=dict(fields))
            session.add(row)
            self.storage.save()
            logger.debug("Upserted %s/%s", self.name, row.id)
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=row.id)

        merged = {**(row.data or {}), **fields}
        modified = merged != row.data
        if modified:
            # Assign a new dict so the JSON column is flagged dirty
            row.data = merged
        # Commit either way to release the row lock
        self.storage.save()
        return UpdateResult(matched_count=1, modified_count=1 if modified else 0)

    def delete_one(self, doc_id: uuid.UUID) -> DeleteResult:
        session = self.storage.get_session()
        result = session.execute(
            delete(Document).where(Document.collection == self.name, Document.id == str(doc_id))
        )
        self.storage.save()
        return DeleteResult(deleted_count=result.rowcount or 0)
