"""Configuração do banco de dados async"""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from fantasy_football.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


# Garante que a URL async use asyncpg explicitamente
def get_async_database_url() -> str:
    """Garante URL async com asyncpg"""
    url = settings.database_url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif url.startswith("postgresql+psycopg2://"):
        return url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
    return url


def get_engine_options(url: str) -> dict:
    """Opções do engine conforme o backend (SQLite não aceita pool dimensionado)"""
    if url.startswith("sqlite"):
        return {"poolclass": NullPool, "echo": settings.DEBUG}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "echo": settings.DEBUG,
    }


async_url = get_async_database_url()

engine = create_async_engine(async_url, **get_engine_options(async_url))

# Session factory async
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    Dependency async para obter sessão do banco de dados.
    Uso: db: AsyncSession = Depends(get_db)

    Cada requisição é uma unidade de trabalho: commit no sucesso,
    rollback em qualquer exceção.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Inicializa o banco de dados criando todas as tabelas"""
    import fantasy_football.models  # noqa: F401  registra os modelos no metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Banco de dados inicializado")


async def close_db():
    """Fecha todas as conexões do banco"""
    await engine.dispose()
    logger.info("Conexões do banco de dados fechadas")
