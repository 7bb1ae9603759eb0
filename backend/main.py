"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from habitdesk import __version__
from habitdesk.core.config import settings
from habitdesk.routes import dashboard, habits, health, todos

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)
logging.getLogger('openai').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup/shutdown events
    """
    logger.info(f"✓ HabitDesk started, data file: {settings.DATA_FILE}")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set, todo simplification is disabled")

    yield

    logger.info("✓ HabitDesk stopped")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="HabitDesk",
    version=__version__,
    lifespan=lifespan
)

# Register routes
app.include_router(health.router)
app.include_router(dashboard.router)
app.include_router(habits.router)
app.include_router(todos.router)
