"""
Verduleria - Backend API
Gestión de clientes, productos, pedidos y remitos
"""
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

# Import API routers
from verduleria.api import customers, products, orders, delivery_notes
from verduleria.core.config import settings
from verduleria.core.database import check_database_connection, init_db
from verduleria.core.exceptions import VerduleriaError
from verduleria.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.API_TITLE} {settings.API_VERSION} ready")
    yield


# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.exception_handler(VerduleriaError)
async def verduleria_error_handler(request: Request, exc: VerduleriaError):
    """Translate application errors to their HTTP status"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include API routers
app.include_router(customers.router, prefix="/api/v1/customers", tags=["Customers"])
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(delivery_notes.router, prefix="/api/v1/delivery-notes", tags=["Delivery Notes"])


@app.get("/")
async def root():
    """Endpoint raíz - Verificación de estado de la API"""
    return {
        "message": "Verduleria API",
        "status": "online",
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION
    }


@app.get("/health")
def health():
    """Health check endpoint para monitoreo - tests database connectivity"""
    start_time = time.time()

    db_latency_ms = None
    db_error = None

    try:
        # Fast check: a single attempt
        db_latency_ms = check_database_connection(max_retries=1)
        db_status = "connected"
    except OperationalError as e:
        db_status = "disconnected"
        db_error = str(e)

    total_latency_ms = round((time.time() - start_time) * 1000, 2)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "verduleria-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error
        },
        "total_latency_ms": total_latency_ms
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "verduleria.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_DEBUG,
    )
