"""
SecondLife Exchange - Main FastAPI Application

Peer-to-peer item exchange marketplace:
- Item listings with search and filters
- Barter exchange proposals and status workflow
- Per-user matching preferences
- Personalised recommendations with scored reasons
- Structured Logging
- Prometheus Metrics
- Rate Limiting
"""

from fastapi import FastAPI, status, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from .config import settings
from .api import api_router
from .exceptions import ServiceError, service_error_handler
from .utils.database import init_db, SessionLocal
from .utils.logging import setup_logging, get_logger, configure_uvicorn_logging
from .utils.metrics import setup_metrics
from .utils.rate_limit import limiter

# Setup structured logging
setup_logging(log_level=settings.LOG_LEVEL)
configure_uvicorn_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""

    logger.info("Starting SecondLife Exchange", version=settings.VERSION)

    logger.info("Initializing database")
    init_db()

    logger.info("SecondLife Exchange started successfully")

    yield

    logger.info("Shutting down SecondLife Exchange")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    # SecondLife Exchange API

    Give objects a second life by swapping them with other members.

    ## Features

    📦 **Items**
    - List, search and filter second-hand items
    - Categories, conditions and listing status

    🔁 **Exchanges**
    - Propose a barter for another member's item
    - Accept, decline, cancel and complete exchanges

    🎯 **Matching**
    - Save preferred / disliked categories, preferred conditions and country
    - Personalised recommendations with a 0-100 score and the reasons behind it

    📈 **Observability**
    - Structured logging (JSON)
    - Prometheus metrics
    - Health checks
    """,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "users", "description": "Member profiles"},
        {"name": "items", "description": "Item listings"},
        {"name": "exchanges", "description": "Barter proposals and their workflow"},
        {"name": "matching", "description": "Matching preferences and recommendations"},
    ]
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Map service errors to HTTP responses
app.add_exception_handler(ServiceError, service_error_handler)

# Setup Prometheus metrics
setup_metrics(app)

# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    logger.info(
        "Request received",
        method=request.method,
        url=str(request.url),
        client=request.client.host if request.client else None
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code
    )

    return response


@app.get("/", tags=["root"])
def root():
    """Root endpoint"""
    return {
        "message": "SecondLife Exchange API",
        "version": settings.VERSION,
        "docs": "/docs",
        "status": "operational"
    }


@app.get("/health", tags=["root"], status_code=status.HTTP_200_OK)
def health_check():
    """Health check endpoint"""

    db_healthy = True
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        db_healthy = False

    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "version": settings.VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "secondlife.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
