# mentor_network/main.py
import logging
from fastapi import FastAPI

from .config import get_settings
from .database import create_db_and_tables, SessionLocal
from .core.entity_store import EntityStore
from .exceptions import StoreUnavailableError
from .routers import auth_router, users_router, follow_router

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mentor Network API",
    description="Mentor recommendations and consent-based follow requests between mentors and mentees.",
    version="1.0.0",
)

# Include routers
app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(follow_router.router)

@app.on_event("startup")
def startup_event():
    """Initialize application on startup"""
    logger.info("Application startup event triggered.")
    try:
        create_db_and_tables()
        logger.info("Startup sequence completed successfully.")
    except Exception as e:
        logger.critical(f"Critical error during startup: {e}", exc_info=True)

@app.get("/health")
def health_check():
    """Health check endpoint"""
    with SessionLocal() as db:
        try:
            EntityStore(db).ping()
        except StoreUnavailableError as e:
            logger.error(f"Health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy"}
