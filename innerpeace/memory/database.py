from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from innerpeace.memory.models import Base
from innerpeace.core.logger import logger

def create_engine_for(url: str) -> AsyncEngine:
    logger.info("Connecting to document store: {}", url.split("@")[-1])
    return create_async_engine(url, future=True)

def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)

async def init_db(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
