"""
Warehouse - Inventory Management Backend
FastAPI Application Entry Point
"""
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from wms.core import settings, engine, Base, SessionLocal, WarehouseError
from wms.core.logging_config import setup_logging
from wms.api.router import api_router
from wms.jobs import start_scheduler, stop_scheduler
from wms.services import UserService

logger = logging.getLogger(__name__)


# Lifespan for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Startup: Create tables if not exist
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")

    if settings.SEED_DEFAULT_USERS:
        db = SessionLocal()
        try:
            UserService.seed_default_users(db)
        finally:
            db.close()

    if settings.FILE_CLEANUP_ENABLED:
        try:
            start_scheduler()
        except Exception as e:
            logger.warning(f"Could not start file cleanup scheduler: {e}")

    yield

    # Shutdown
    stop_scheduler()
    logger.info(f"{settings.APP_NAME} shutting down")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Warehouse Inventory, Transactions, BOM & Work Diary System",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(WarehouseError)
async def warehouse_error_handler(request: Request, exc: WarehouseError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind}
    )


# Include routers
app.include_router(api_router, prefix="/api")


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
