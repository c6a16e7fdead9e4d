import asyncio
import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
import alembic.config
import alembic.command
from jiji.core.config import settings
from jiji.core.database import engine
from jiji.core.errors import register_error_handlers
from jiji.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def run_migrations():
    """Sync function to run migrations"""
    alembic_cfg = alembic.config.Config("alembic.ini")
    # Keep our logging config; alembic.ini would reset the root logger
    alembic_cfg.attributes["skip_logging"] = True
    alembic.command.upgrade(alembic_cfg, "head")


# Close the engine once everything is done and close all the sessions
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply any pending migrations automatically when the app starts
    if settings.RUN_MIGRATIONS:
        try:
            await asyncio.to_thread(run_migrations)
            logger.info("Migrations applied successfully (or already up-to-date)")
        except Exception as e:
            logger.error(f"Migration error during startup: {e}")

    logger.info(
        f"Learn with Jiji API ({settings.ENVIRONMENT}) serving /api/{settings.API_VERSION}"
    )
    yield
    logger.info("Shutting down, disposing database engine")
    await engine.dispose()


app = FastAPI(title="Learn with Jiji API", lifespan=lifespan)

register_error_handlers(app)

if settings.ENVIRONMENT.lower() != "production":

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} "
            f"status={response.status_code} time={process_time:.2f}ms"
        )
        return response


# Include the master router containing all our endpoints
app.include_router(api_router)


@app.get("/")
async def root():
    prefix = f"/api/{settings.API_VERSION}"
    return {
        "success": True,
        "message": "Learn with Jiji API is running",
        "version": settings.API_VERSION,
        "endpoints": {
            "health": f"{prefix}/health",
            "askJiji": f"{prefix}/ask-jiji",
            "history": f"{prefix}/history",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("jiji.main:app", host="0.0.0.0", port=settings.PORT)
