from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings

ALGORITHM = "HS256"


def create_session_token(session_id: str, expires_in: Optional[timedelta] = None) -> str:
    # le cookie ne porte que l'id de session, jamais l'identité de l'utilisateur
    if expires_in is None:
        expires_in = timedelta(minutes=settings.SESSION_EXPIRE_MIN)
    payload = {
        "sid": session_id,
        "exp": datetime.now(timezone.utc) + expires_in,
        "type": "session",
    }
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SESSION_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None


def read_session_token(token: str) -> Optional[str]:
    payload = verify_token(token)
    if payload is None or payload.get("type") != "session":
        return None
    session_id = payload.get("sid")
    if not isinstance(session_id, str) or not session_id:
        return None
    return session_id
