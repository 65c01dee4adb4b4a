from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from app.core.database import Base, async_engine
from app.core.config import settings
from app.core.exceptions import LedgerError, ledger_error_handler, validation_error_handler
from app.core.health import ledger_is_consistent
from app.core.logging import get_logger, setup_logging
from app.modules.accounts.router import router as accounts_router
from app.modules.payments.router import router as payments_router
from app.modules.transfers.router import router as transfers_router

# Configure logging before creating the app
setup_logging()
logger = get_logger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    async with async_engine.begin() as conn:
        # Create all tables (for development - use Alembic in production)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s starting up (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)

    yield

    # Shutdown
    await async_engine.dispose()
    logger.info("%s shutting down", settings.APP_NAME)


app = FastAPI(
    title="Ledger API",
    description="Accounts, transfers and payment history",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LedgerError, ledger_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request with its client address"""
    logger.info(
        "HTTP %s %s from %s",
        request.method,
        request.url.path,
        request.client.host if request.client else "?",
    )
    return await call_next(request)


# Include routers
app.include_router(accounts_router)
app.include_router(transfers_router)
app.include_router(payments_router)


@app.get("/status")
async def status():
    """Liveness endpoint"""
    return {"success": True}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok" if ledger_is_consistent() else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to the {settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }
