"""FastAPI web application for TaskFlow."""

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskflow import __version__
from taskflow.api.dependencies import get_completion_client
from taskflow.api.routes import auth, tasks, users
from taskflow.config import CORS_ORIGINS, configure_logging, is_production, validate_config
from taskflow.database.database import init_db
from taskflow.integrations.openai_client import CompletionClient

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="TaskFlow API",
    description="Task management with AI-assisted categorization, prioritization and insights",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(users.router)


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    if is_production():
        # Refuse to boot with an insecure JWT secret or no completion key
        validate_config()
    init_db()
    logger.info("TaskFlow API started")


@app.get("/health")
def health(client: CompletionClient = Depends(get_completion_client)):
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__, "aiAvailable": client.available}
