from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from mcbays_contact.contact.router import contact_method_not_allowed
from mcbays_contact.contact.router import router as contact_router
from mcbays_contact.core.config import settings
from mcbays_contact.core.logging_config import configure_logging
from mcbays_contact.core.sentry import init_sentry
from mcbays_contact.middleware import RequestIDMiddleware


# Load environment variables
load_dotenv()

configure_logging()

logger = logging.getLogger(__name__)

init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration problems; there are no services to start."""
    logger.info("Starting contact relay...")

    if not settings.TO_EMAIL:
        logger.warning("TO_EMAIL not configured - submissions will fail to send")
    if not settings.ALLOWED_ORIGIN:
        logger.warning("ALLOWED_ORIGIN not configured - allowing any origin")

    yield

    logger.info("Shutting down contact relay...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_url="/openapi.json" if settings.is_local else None,
)

app.add_middleware(RequestIDMiddleware)

# CORS is answered by the contact handler itself, not by CORSMiddleware
app.include_router(contact_router)
app.add_exception_handler(StarletteHTTPException, contact_method_not_allowed)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
