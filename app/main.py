from fastapi import FastAPI, Request, Response, status
import time
from datetime import datetime, timezone
from typing import Optional

from app.core.config import settings
from app.core.exceptions import PersistenceError, TaskNotFoundError
from app.core.lifespan import lifespan
from app.core.logging import setup_logging, get_logger
from app.interfaces.task_store import BaseTaskStore
from app.routes import task_routes
from app.schemas.task_schema import HealthResponse

# Setup logging
setup_logging()
logger = get_logger(__name__)


def create_app(task_store: Optional[BaseTaskStore] = None) -> FastAPI:
    """Build the application; a passed store replaces the configured one"""
    app = FastAPI(
        title="Task Service",
        description="CRUD API for tasks",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    if task_store is not None:
        app.state.task_store = task_store

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    app.include_router(task_routes.router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint"""
        store_health = await request.app.state.task_store.health_check()
        return HealthResponse(
            status="healthy" if store_health["status"] == "healthy" else "degraded",
            service=settings.SERVICE_NAME,
            version=settings.SERVICE_VERSION,
            timestamp=datetime.now(timezone.utc),
            dependencies={"store": store_health},
        )

    @app.get("/")
    async def root():
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
