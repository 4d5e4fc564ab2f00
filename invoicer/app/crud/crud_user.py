"""CRUD operations for users."""

from typing import Optional

from sqlalchemy.orm import Session

from invoicer.app.db.session import atomic
from invoicer.app.models.user import User


class CRUDUser:
    def create(self, db: Session, *, username: str, hashed_password: str) -> User:
        # The unique index on username decides concurrent signups
        user = User(username=username, hashed_password=hashed_password)
        with atomic(db, conflict_message="Username already exists"):
            db.add(user)
        db.refresh(user)
        return user

    def get(self, db: Session, *, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()


user_crud = CRUDUser()
