# shoppy/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shoppy.core.config import get_settings
from shoppy.core.errors import (
    AggregateNotFoundError,
    DuplicateAssociationError,
    PermissionDeniedError,
    ReferenceNotFoundError,
    ShoppyError,
    StoreReassignmentError,
    TransactionError,
)
from shoppy.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from shoppy.models import user as _user_models  # noqa: F401
from shoppy.models import catalog as _catalog_models  # noqa: F401
from shoppy.models import store as _store_models  # noqa: F401
from shoppy.models import product as _product_models  # noqa: F401


# Routers
from shoppy.routers.users import router as users_router
from shoppy.routers.catalog import router as catalog_router
from shoppy.routers.products import router as products_router
from shoppy.routers.stores import router as stores_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")

# Domain error -> HTTP status. Subclasses before their bases.
ERROR_STATUS: list[tuple[type[ShoppyError], int]] = [
    (ReferenceNotFoundError, status.HTTP_400_BAD_REQUEST),
    (DuplicateAssociationError, status.HTTP_400_BAD_REQUEST),
    (AggregateNotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (StoreReassignmentError, status.HTTP_409_CONFLICT),
    (TransactionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ShoppyError)
async def shoppy_error_handler(request: Request, exc: ShoppyError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(catalog_router, prefix=settings.API_PREFIX)
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(stores_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "shoppy-backend"}
