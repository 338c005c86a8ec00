from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.v1.api import api_router
from core.config import settings
from core.database import create_tables, engine
from core.exception.exception_handlers import register_exception_handlers
from core.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.DB_CREATE_TABLES:
        await create_tables()
    logger.info("startup_complete")
    yield
    await engine.dispose()
    logger.info("shutdown_complete")


app = FastAPI(title="Recipe Share API", lifespan=lifespan)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": "Recipe Share API"}
