from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from app.config import get_settings
from app.exceptions import InventoryError
from app.api import articles, clients, health, purchases, sales, suppliers

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Starting up application...")

    missing = settings.missing_credentials()
    if missing:
        logger.warning(f"Google credentials not configured: {', '.join(missing)}")
    else:
        logger.info(f"Using spreadsheet {settings.spreadsheet_id}")

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Inventory and point-of-sale backend that keeps its data in a Google Sheets
    spreadsheet: articles, sales, purchases, clients and suppliers, one tab each.

    ## Features

    ### Schema on read
    Tabs are located by name and columns by header, in any order and with
    accent-insensitive aliases. Extra columns added by hand are preserved.

    ### Stock bookkeeping
    Sales take quantities out of stock, purchases add them and set the article
    price. Every multi-step operation undoes the steps already applied when a
    later one fails.

    ### No cache
    Every request reads the spreadsheet, so edits made by hand are visible
    immediately.
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are reported as 400 with the first problem found."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Solicitud inválida"
    return JSONResponse(status_code=400, content={"error": message})


# Include API routers
app.include_router(health.router, prefix="/api")
app.include_router(articles.router, prefix="/api")
app.include_router(sales.router, prefix="/api")
app.include_router(purchases.router, prefix="/api")
app.include_router(clients.router, prefix="/api")
app.include_router(suppliers.router, prefix="/api")


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/health"
    }
