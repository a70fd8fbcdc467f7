from sqlalchemy import Column, Integer, String
from app.core.config import settings
from app.core.database import Base
import bcrypt

BCRYPT_MAX_BYTES = 72

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    def set_password(self, password: str):
        self.password_hash = hash_password(password)

    def verify_password(self, password: str) -> bool:
        return check_password(password, self.password_hash)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode()


def check_password(password: str, password_hash: str) -> bool:
    raw = password.encode()
    if len(raw) > BCRYPT_MAX_BYTES:
        # aucun hash stocké ne peut correspondre; on paie quand même le coût bcrypt
        bcrypt.checkpw(raw[:BCRYPT_MAX_BYTES], password_hash.encode())
        return False
    # checkpw compare en temps constant
    return bcrypt.checkpw(raw, password_hash.encode())
