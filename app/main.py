import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from app.core import database
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.core.logging_setup import setup_logging
from app.core.sessions import SessionStore
from app.routers import health, auth, tasks

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Init DB
    database.Base.metadata.create_all(bind=database.engine)
    logger.info("Taskkeeper API started")
    yield
    app.state.sessions.clear()


app = FastAPI(
    title="Taskkeeper API",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.sessions = SessionStore(ttl=timedelta(minutes=settings.SESSION_EXPIRE_MIN))

register_error_handlers(app)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(tasks.router)
