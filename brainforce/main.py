import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from brainforce.core.errors import AppError
from brainforce.core.logging import configure_logging
from brainforce.db.base import Base, engine, log_database_backend
from brainforce.ai.openai_client import log_startup as ai_log_startup

# Import models so create_all picks them up
from brainforce.auth.models import User  # noqa: F401
from brainforce.quizzes.models import Quiz  # noqa: F401

from brainforce.auth.routes import router as auth_router
from brainforce.quizzes.routes import router as quiz_router
from brainforce.ai.routes import router as ai_router
from brainforce.web.routes import router as web_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="BrainForce", version="0.1.0")

# Create database tables (useful in dev; in production prefer Alembic)
Base.metadata.create_all(bind=engine)

log_database_backend()
ai_log_startup()


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(auth_router)
app.include_router(quiz_router)
app.include_router(ai_router)
app.include_router(web_router)


# Redirect root to login page
@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/login")
