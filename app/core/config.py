from os import getenv


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskkeeper:taskkeeper@db:5432/taskkeeper")

    SESSION_SECRET = getenv("SESSION_SECRET", "dev-secret-change-in-prod")
    SESSION_EXPIRE_MIN = int(getenv("SESSION_EXPIRE_MIN", "10080"))  # 7 jours
    SESSION_COOKIE_NAME = getenv("SESSION_COOKIE_NAME", "taskkeeper_session")
    SESSION_COOKIE_SECURE = _as_bool(getenv("SESSION_COOKIE_SECURE", "false"))

    USERNAME_MIN_LENGTH = int(getenv("USERNAME_MIN_LENGTH", "3"))
    PASSWORD_MIN_LENGTH = int(getenv("PASSWORD_MIN_LENGTH", "6"))
    BCRYPT_ROUNDS = int(getenv("BCRYPT_ROUNDS", "12"))

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
