"""Session authenticator.

Register / login establish a server-side session and hand the client an
opaque cookie; logout tears it down; ``current_user`` turns a cookie back
into a ``User`` for the authorization dependencies.
"""

import logging
from functools import lru_cache
from typing import NamedTuple, Optional

from fastapi import Request, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidCredentials, Unauthenticated
from app.core.security import create_session_token, read_session_token
from app.core.sessions import SessionRecord, SessionStore
from app.models.user import User, check_password, hash_password
from app.services.user_service import create_user, get_user, get_user_by_username

logger = logging.getLogger(__name__)


class AuthResult(NamedTuple):
    user: User
    session: SessionRecord


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password")


def _open_session(store: SessionStore, user: User) -> SessionRecord:
    # nettoyage opportuniste des sessions expirées
    store.purge_expired()
    return store.create(user.id)


def register(db: Session, store: SessionStore, username: str, password: str) -> AuthResult:
    user = create_user(db, username, password)
    logger.info("Registered user id=%s", user.id)
    return AuthResult(user, _open_session(store, user))


def login(db: Session, store: SessionStore, username: str, password: str) -> AuthResult:
    user = get_user_by_username(db, username)
    if user is None:
        # même coût bcrypt que pour un mauvais mot de passe
        check_password(password, _dummy_hash())
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    if not user.verify_password(password):
        logger.warning("Failed login attempt for user id=%s", user.id)
        raise InvalidCredentials()

    logger.info("User id=%s logged in", user.id)
    return AuthResult(user, _open_session(store, user))


def logout(store: SessionStore, session_id: Optional[str]) -> None:
    if session_id:
        store.destroy(session_id)
        logger.info("Session closed")


def current_user(db: Session, store: SessionStore, session_id: Optional[str]) -> User:
    if not session_id:
        raise Unauthenticated()

    user_id = store.resolve(session_id)
    if user_id is None:
        raise Unauthenticated()

    user = get_user(db, user_id)
    if user is None:
        # une session valide doit toujours pointer vers un user existant
        store.destroy(session_id)
        raise Unauthenticated()
    return user


def session_id_from_request(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return read_session_token(token)


def start_session(response: Response, session: SessionRecord) -> None:
    max_age = int((session.expires_at - session.created_at).total_seconds())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(session.session_id, session.expires_at - session.created_at),
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def end_session(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
