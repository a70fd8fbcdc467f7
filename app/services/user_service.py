"""Credential store: user lookup and creation."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateUsername
from app.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str) -> User:
    if get_user_by_username(db, username) is not None:
        raise DuplicateUsername()

    user = User(username=username)
    user.set_password(password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # un autre inscrit a pris le username entre le check et le commit
        db.rollback()
        raise DuplicateUsername()
    db.refresh(user)
    return user
