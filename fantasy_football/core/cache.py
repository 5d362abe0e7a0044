"""Cache Redis async das buscas no mercado de transferências

Chaves ficam sob ``CACHE_PREFIX`` (ex.: ``ffm:market:search:...``). Redis
indisponível não derruba a API: leituras viram miss e escritas são ignoradas.
"""
import json
from typing import Optional, Any
import logging
from redis.asyncio import Redis, ConnectionPool
from redis.exceptions import RedisError
from fantasy_football.core.config import settings

logger = logging.getLogger(__name__)

MARKET_NAMESPACE = "market"


class CacheManager:
    """Gerenciador de cache Redis async com namespace"""

    def __init__(self, enabled: bool = True, prefix: str = ""):
        self.enabled = enabled
        self.prefix = prefix
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = None

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def _get_client(self) -> Optional[Redis]:
        """Obtém cliente Redis (lazy initialization)"""
        if not self.enabled:
            return None
        if self._client:
            return self._client

        try:
            self._pool = ConnectionPool(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                password=settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_connect_timeout=5,
                health_check_interval=30,
                max_connections=50,
            )
            client = Redis(connection_pool=self._pool)
            await client.ping()
            self._client = client
            logger.info("Redis conectado com sucesso")
            return self._client
        except (RedisError, OSError) as e:
            logger.error(f"Erro ao conectar Redis: {e}")
            return None

    async def ping(self) -> bool:
        client = await self._get_client()
        if not client:
            return False
        try:
            return bool(await client.ping())
        except (RedisError, OSError):
            return False

    async def get(self, key: str) -> Optional[Any]:
        client = await self._get_client()
        if not client:
            return None

        try:
            value = await client.get(self._key(key))
            return json.loads(value) if value else None
        except (RedisError, OSError, json.JSONDecodeError) as e:
            logger.warning(f"Erro ao ler cache {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Define valor no cache com TTL (padrão CACHE_TTL)"""
        client = await self._get_client()
        if not client:
            return False

        try:
            serialized = json.dumps(value, default=str)
            return bool(await client.setex(self._key(key), ttl or settings.CACHE_TTL, serialized))
        except (RedisError, OSError, TypeError) as e:
            logger.warning(f"Erro ao escrever cache {key}: {e}")
            return False

    async def delete_namespace(self, namespace: str) -> int:
        """Remove todas as chaves de um namespace"""
        client = await self._get_client()
        if not client:
            return 0

        try:
            keys = [key async for key in client.scan_iter(match=self._key(f"{namespace}:*"))]
            removed = await client.delete(*keys) if keys else 0
            logger.debug(f"Cache {namespace}: {removed} chaves removidas")
            return removed
        except (RedisError, OSError) as e:
            logger.warning(f"Erro ao limpar namespace {namespace}: {e}")
            return 0

    async def close(self):
        """Fecha conexões Redis"""
        if self._client:
            await self._client.aclose()
        if self._pool:
            await self._pool.disconnect()


# Instância global do cache
cache = CacheManager(enabled=settings.CACHE_ENABLED, prefix=settings.CACHE_PREFIX)


def market_search_key(filters: dict) -> str:
    """Chave estável para um conjunto de filtros de busca"""
    parts = [f"{name}={value}" for name, value in sorted(filters.items()) if value is not None]
    return f"{MARKET_NAMESPACE}:search:" + "&".join(parts)


async def invalidate_market() -> int:
    """Descarta buscas em cache após anúncio, remoção ou transferência"""
    return await cache.delete_namespace(MARKET_NAMESPACE)
