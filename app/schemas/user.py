from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from app.core.config import settings
from app.models.user import BCRYPT_MAX_BYTES


def _strip(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value

# même normalisation à l'inscription et au login
Username = Annotated[str, AfterValidator(_strip)]

class UserCredentials(BaseModel):
    """Corps de /api/register"""
    username: Username = Field(max_length=64)
    password: str = Field(min_length=settings.PASSWORD_MIN_LENGTH)

    @field_validator("username")
    @classmethod
    def check_username_length(cls, value: str) -> str:
        if len(value) < settings.USERNAME_MIN_LENGTH:
            raise ValueError(f"must contain at least {settings.USERNAME_MIN_LENGTH} characters")
        return value

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        # bcrypt ignore (ou refuse) tout ce qui dépasse 72 octets
        if len(value.encode()) > BCRYPT_MAX_BYTES:
            raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes")
        return value

class UserResponse(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)

class LoginRequest(BaseModel):
    # pas de règle de longueur ici: un mauvais login reste un 401 générique
    username: Username
    password: str = Field(min_length=1)
