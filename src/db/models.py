"""
SQLModel table definitions for the users and ideas tables.

Design rules for SQLModel compatibility:
  - primary_key=True and foreign_key="..." must be set in Field() only,
    never combined with sa_column (SQLModel raises RuntimeError otherwise).
  - timestamps are ISO-8601 TEXT so SQLite and PostgreSQL behave the same.
  - the wire representation (camelCase keys) is produced by ``to_dict``;
    the password hash never leaves the ``User`` row.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, SQLModel

from src.utils.validation import DEFAULT_IDEA_STATUS


def _now_iso() -> str:
    return datetime.now().isoformat()


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(sa_column=Column(Text, nullable=False, unique=True))
    # bcrypt hash only
    password: str = Field(sa_column=Column(Text, nullable=False))
    created_at: str = Field(default_factory=_now_iso, sa_column=Column(Text, nullable=False))

    def to_public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username}


class Idea(SQLModel, table=True):
    __tablename__ = "ideas"
    __table_args__ = (
        Index("idx_ideas_user_id", "user_id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(sa_column=Column(Text, nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: str = Field(
        default=DEFAULT_IDEA_STATUS,
        sa_column=Column(Text, nullable=False, server_default=DEFAULT_IDEA_STATUS),
    )
    # nullable: ideas seeded by scripts/01_init_db.py have no owner
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: str = Field(default_factory=_now_iso, sa_column=Column(Text, nullable=False))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }
