from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from core.config import settings

POSTGRES_DATABASE_URL = settings.POSTGRES_DATABASE_URL

engine = create_async_engine(
    POSTGRES_DATABASE_URL,
    echo=settings.DB_ECHO,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session_factory() as session:
        yield session


async def create_tables() -> None:
    # no migrations; the schema is created from the models at startup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
