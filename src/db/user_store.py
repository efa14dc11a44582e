"""
User persistence: registration and credential lookup.

Uniqueness is checked before the insert; the unique constraint on
``users.username`` catches the narrow race where two registrations for the
same name pass the check together, and is reported the same way.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.auth.password import hash_password, verify_password
from src.db.errors import StorageError, UserExistsError
from src.db.models import User
from src.log import get_logger

logger = get_logger(__name__)


class UserStore:
    def __init__(self, engine: Engine, bcrypt_rounds: Optional[int] = None):
        self.engine = engine
        self.bcrypt_rounds = bcrypt_rounds

    def get_by_username(self, username: str) -> Optional[User]:
        try:
            with Session(self.engine) as session:
                return session.exec(select(User).where(User.username == username)).first()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def create(self, username: str, password: str) -> Dict[str, Any]:
        """Insert a new user with a hashed password. Returns ``{id, username}``."""
        if self.exists(username):
            raise UserExistsError(username)

        user = User(username=username, password=hash_password(password, self.bcrypt_rounds))
        try:
            with Session(self.engine) as session:
                session.add(user)
                session.commit()
                session.refresh(user)
                logger.info("registered user id=%s username=%s", user.id, user.username)
                return user.to_public()
        except IntegrityError as e:
            logger.warning("username %r taken by a concurrent registration", username)
            raise UserExistsError(username) from e
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def authenticate(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Return ``{id, username}`` when the credentials match, else ``None``."""
        user = self.get_by_username(username)
        if user is None or not verify_password(password, user.password):
            return None
        return user.to_public()
