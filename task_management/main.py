"""
Task Management service - application factory and entry point.
"""
import logging
import time
from datetime import timedelta
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import Settings, get_settings
from .core.database import build_engine, build_session_factory, init_db, check_db_connection
from .core.exceptions import register_exception_handlers
from .core.permissions import AccessPolicy
from .routers import auth, users, projects, tasks, comments, notifications

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its collaborators.

    The engine, session factory and access policy are constructed here and
    kept on ``app.state``; request dependencies read them from there.
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Task Management Service",
        description="Users, projects, tasks, comments and notifications",
        version=__version__,
    )

    engine = build_engine(settings.database_url, echo=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.policy = AccessPolicy(
        comment_edit_grace=timedelta(minutes=settings.comment_edit_grace_minutes)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if request.url.path != "/health":
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")
        return response

    register_exception_handlers(app)

    prefix = settings.api_prefix
    app.include_router(auth.router, prefix=prefix + "/auth", tags=["auth"])
    app.include_router(users.router, prefix=prefix + "/users", tags=["users"])
    app.include_router(projects.router, prefix=prefix + "/projects", tags=["projects"])
    app.include_router(tasks.router, prefix=prefix + "/tasks", tags=["tasks"])
    app.include_router(comments.router, prefix=prefix + "/comments", tags=["comments"])
    app.include_router(notifications.router, prefix=prefix + "/notifications", tags=["notifications"])

    @app.on_event("startup")
    async def startup_event():
        """Probe the database and create tables"""
        logger.info("Starting Task Management Service...")
        if check_db_connection(engine) and init_db(engine):
            logger.info("✅ Database connected successfully!")
        else:
            logger.error("❌ Failed to connect to database")
            if settings.db_connect_fatal:
                raise RuntimeError("Database unavailable at startup")
        logger.info(f"🚀 Application is running on: http://localhost:{settings.port}")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down Task Management Service...")
        engine.dispose()

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": __version__,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        db_healthy = check_db_connection(engine)
        return {
            "service": settings.service_name,
            "version": __version__,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time(),
        }

    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    uvicorn.run("task_management.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
