"""Entity repository: uniform create/read/update/delete access per entity kind.

Every method runs on the Flask-SQLAlchemy session of the current application
context. Store failures are rolled back and surface as ``StoreError``.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from .errors import RecordNotFoundError, StoreError
from .models import EntityKind

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Typed accessors for authors, books, genres and book copies."""

    def __init__(self, db):
        self._db = db

    @property
    def session(self):
        return self._db.session

    @contextmanager
    def _store(self, operation: str, kind: EntityKind):
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Store failure during %s on %s", operation, kind.value)
            raise StoreError(f"Database error during {operation}", {"kind": kind.value}) from exc

    @staticmethod
    def _loaders(model, populate):
        return [selectinload(getattr(model, name)) for name in populate]

    # ---- reads ----

    def find_all(self, kind: EntityKind, sort=None, populate=()) -> list:
        """All records of a kind, ascending by ``sort`` or in insertion order."""
        model = kind.model
        with self._store("find_all", kind):
            query = model.query.options(*self._loaders(model, populate))
            query = query.order_by(getattr(model, sort) if sort else model.id)
            return query.all()

    def find_by_id(self, kind: EntityKind, record_id, populate=()):
        model = kind.model
        with self._store("find_by_id", kind):
            entity = (
                model.query.options(*self._loaders(model, populate))
                .filter(model.id == record_id)
                .one_or_none()
            )
        if entity is None:
            raise RecordNotFoundError(kind, record_id)
        return entity

    def find_many(self, kind: EntityKind, ids) -> list:
        """Records whose id is in ``ids``; unknown ids are skipped."""
        ids = list(ids or [])
        if not ids:
            return []
        model = kind.model
        with self._store("find_many", kind):
            return model.query.filter(model.id.in_(ids)).order_by(model.id).all()

    def find_first(self, kind: EntityKind, **criteria):
        model = kind.model
        with self._store("find_first", kind):
            return model.query.filter_by(**criteria).order_by(model.id).first()

    def find_by_relation(self, kind: EntityKind, relation_field: str, related_id) -> list:
        """Records of ``kind`` whose ``relation_field`` points at ``related_id``.

        Works for single references (Book.author, BookInstance.book) and for
        membership in a reference set (Book.genre).
        """
        model = kind.model
        relation = inspect(model).relationships[relation_field]
        target = relation.mapper.class_
        attr = getattr(model, relation_field)
        if relation.uselist:
            clause = attr.any(target.id == related_id)
        else:
            clause = attr.has(target.id == related_id)
        with self._store("find_by_relation", kind):
            return model.query.filter(clause).order_by(model.id).all()

    def count(self, kind: EntityKind, **criteria) -> int:
        with self._store("count", kind):
            return kind.model.query.filter_by(**criteria).count()

    # ---- writes ----

    def save(self, entity):
        """Insert a new record; the id is assigned on commit."""
        kind = EntityKind.of(entity)
        with self._store("save", kind):
            self.session.add(entity)
            self.session.commit()
        logger.info("Created %s %s", kind.value, entity.id)
        return entity

    def update(self, kind: EntityKind, record_id, fields: dict):
        """Replace every editable field of a record.

        Fields missing from ``fields`` are reset, not kept: this is a full
        record update, not a patch.
        """
        entity = self.find_by_id(kind, record_id)
        relationships = inspect(kind.model).relationships
        with self._store("update", kind):
            for name in kind.model.FIELDS:
                if name in relationships and relationships[name].uselist:
                    setattr(entity, name, list(fields.get(name) or []))
                else:
                    setattr(entity, name, fields.get(name))
            self.session.commit()
        logger.info("Updated %s %s", kind.value, record_id)
        return entity

    def delete_by_id(self, kind: EntityKind, record_id) -> None:
        """Remove one record. Callers go through RelationIntegrity.delete."""
        entity = self.find_by_id(kind, record_id)
        with self._store("delete", kind):
            self.session.delete(entity)
            self.session.commit()
        logger.info("Deleted %s %s", kind.value, record_id)

    def close(self) -> None:
        """Release the session and the connection pool."""
        self._db.session.remove()
        self._db.engine.dispose()
        logger.info("Catalog repository closed")
