from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from app.core.authorization import get_current_user
from app.core.database import get_db
from app.core.sessions import SessionStore, get_session_store
from app.models.user import User
from app.schemas.user import LoginRequest, UserCredentials, UserResponse
from app.services import auth_service

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    credentials: UserCredentials,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Créer un nouvel utilisateur et ouvrir sa session"""
    result = auth_service.register(db, store, credentials.username, credentials.password)
    auth_service.start_session(response, result.session)
    return result.user

@router.post("/login", response_model=UserResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Se connecter"""
    result = auth_service.login(db, store, credentials.username, credentials.password)
    auth_service.start_session(response, result.session)
    return result.user

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Se déconnecter (idempotent)"""
    auth_service.logout(store, auth_service.session_id_from_request(request))
    auth_service.end_session(response)

@router.get("/user", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Utilisateur de la session courante"""
    return current_user
