"""Repository for User database operations."""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskflow.models.user import User
from taskflow.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email.lower()).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        user_db = self.db.query(UserDB).filter(UserDB.username == username).first()
        return user_db.to_pydantic() if user_db else None

    def get_password_hash(self, user_id: str) -> Optional[str]:
        """Get the stored password hash for a user."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.password_hash if user_db else None

    def find_conflict(
        self,
        email: Optional[str] = None,
        username: Optional[str] = None,
        exclude_user_id: Optional[str] = None,
    ) -> Optional[User]:
        """Find another user already holding this email or username."""
        conditions = []
        if email:
            conditions.append(UserDB.email == email.lower())
        if username:
            conditions.append(UserDB.username == username)
        if not conditions:
            return None

        query = self.db.query(UserDB).filter(or_(*conditions))
        if exclude_user_id:
            query = query.filter(UserDB.id != exclude_user_id)
        user_db = query.first()
        return user_db.to_pydantic() if user_db else None

    def create(self, user: User, password_hash: str) -> User:
        """Create a new user with its password hash."""
        try:
            user_db = UserDB.from_pydantic(user, password_hash)
            user_db.email = user.email.lower()
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user.id}: {user.username}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise

    def update(
        self,
        user_id: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> Optional[User]:
        """Update the given profile fields. Returns None if the user does not exist."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user_db:
            return None

        if username:
            user_db.username = username
        if email:
            user_db.email = email.lower()
        if password_hash:
            user_db.password_hash = password_hash
        user_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user_db:
            return False

        try:
            self.db.delete(user_db)
            self.db.commit()
            logger.debug(f"Deleted user {user_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {type(e).__name__}: {str(e)}")
            raise
