"""
Idea persistence.

An idea is either absent or present with a status from IDEA_STATUSES; every
mutation is a single statement. Lookups that find nothing return ``None``
(or ``False`` for delete) so the caller decides how to report it; driver
failures surface as ``StorageError`` with the driver's message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import Text, delete, func, literal, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.db.errors import StorageError
from src.db.models import Idea
from src.log import get_logger
from src.utils.validation import DEFAULT_IDEA_STATUS, DEFAULT_LIMIT

logger = get_logger(__name__)

# SQLite INTEGER is signed 64-bit; ids outside it cannot match a row
_ID_MIN, _ID_MAX = -(2 ** 63), 2 ** 63 - 1


def _storable_id(idea_id: int) -> bool:
    return _ID_MIN <= idea_id <= _ID_MAX


# wire field name -> column
_SORT_COLUMNS = {
    "title": Idea.title,
    "createdAt": Idea.created_at,
    "status": Idea.status,
}


def _coalesce(value: Optional[str], column):
    """``COALESCE(:value, column)``: a ``None`` value keeps what is stored."""
    return func.coalesce(literal(value, Text), column)


class IdeaStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    def create(
        self,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        idea = Idea(
            title=title,
            description=description,
            status=status or DEFAULT_IDEA_STATUS,
            user_id=user_id,
        )
        try:
            with Session(self.engine) as session:
                session.add(idea)
                session.commit()
                session.refresh(idea)
                return idea.to_dict()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get_all(
        self,
        limit: Optional[int] = None,
        page: Optional[int] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Without arguments: every idea in storage order. ``sort``/``order`` and
        ``limit``/``page`` come pre-sanitised from ``sanitize_query_params``.
        """
        stmt = select(Idea)
        if sort or order:
            column = _SORT_COLUMNS.get(sort or "createdAt", Idea.created_at)
            if order == "DESC":
                stmt = stmt.order_by(column.desc(), Idea.id.desc())
            else:
                stmt = stmt.order_by(column.asc(), Idea.id.asc())
        if limit or page:
            size = limit or DEFAULT_LIMIT
            stmt = stmt.limit(size).offset(((page or 1) - 1) * size)
        try:
            with Session(self.engine) as session:
                return [idea.to_dict() for idea in session.exec(stmt).all()]
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get_by_id(self, idea_id: int) -> Optional[Dict[str, Any]]:
        if not _storable_id(idea_id):
            return None
        try:
            with Session(self.engine) as session:
                idea = session.get(Idea, idea_id)
                return idea.to_dict() if idea is not None else None
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def update(
        self,
        idea_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Replace title/description/status. Fields passed as ``None`` keep their
        stored value. Returns the updated record, or ``None`` if no such idea.
        """
        if not title:
            raise ValueError("Title is required")
        if not _storable_id(idea_id):
            return None

        stmt = (
            update(Idea)
            .where(Idea.id == idea_id)
            .values(
                title=_coalesce(title, Idea.title),
                description=_coalesce(description, Idea.description),
                status=_coalesce(status, Idea.status),
            )
        )
        try:
            with self.engine.begin() as conn:
                affected = conn.execute(stmt).rowcount
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

        if not affected:
            return None
        logger.info("updated idea id=%s", idea_id)
        return self.get_by_id(idea_id)

    def delete(self, idea_id: int) -> bool:
        """Remove the idea permanently. ``False`` when nothing was deleted."""
        if not _storable_id(idea_id):
            return False
        try:
            with self.engine.begin() as conn:
                affected = conn.execute(delete(Idea).where(Idea.id == idea_id)).rowcount
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        if affected:
            logger.info("deleted idea id=%s", idea_id)
        return bool(affected)

    def count(self) -> int:
        try:
            with Session(self.engine) as session:
                return session.exec(select(func.count()).select_from(Idea)).one()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
