import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from foodorders.core.db import init_db, close_db
from foodorders.api.v1.orders import router as orders_router
from foodorders.api.v1.personnel import router as personnel_router
from foodorders.api.v1.catalog import router as catalog_router
from foodorders.core.config import PROJECT_NAME, VERSION, LOG_LEVEL
from foodorders.core.exception_handlers import setup_exception_handlers

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("foodorders")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
)

# Include routers for modular API structure
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(personnel_router, prefix="/api/v1/personnel", tags=["Delivery Personnel"])
app.include_router(catalog_router, prefix="/api/v1/catalog", tags=["Catalog"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
