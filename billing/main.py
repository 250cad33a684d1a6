from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from billing.config import get_settings
from billing.database import engine, Base
from billing.api import users, products, purchases, health

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
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

    # Create database tables
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Inventory and billing backend for a small store.

    - **Users**: Signup, credential check and user listing
    - **Products**: Catalog management and stock reduction after billing
    - **Purchases**: Immutable record of completed bills

    ## Stock Reduction
    `PUT /api/products/{product_id}` reduces stock with a single conditional
    UPDATE, so quantity never goes negative under concurrent billing.

    ## Product Addressing
    Products have an internal `id` and a business key `product_id`.
    `DELETE /api/products/{id}` deletes by internal id;
    `DELETE /api/products/by-product-id/{product_id}` deletes by business key.
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(health.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(purchases.router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render HTTP errors as {"message": ...} for client errors and
    {"error": ...} for server errors.
    """
    key = "error" if exc.status_code >= 500 else "message"
    return JSONResponse(
        status_code=exc.status_code,
        content={key: exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/health/"
    }
