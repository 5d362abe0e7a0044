"""Configuração de logging com id da requisição em cada linha"""
from contextvars import ContextVar
import logging
import sys
from pathlib import Path
from fantasy_football.core.config import settings

LOG_FORMAT = "%(asctime)s [%(request_id)s] %(name)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Anexa o id da requisição corrente ao registro"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def _build_handlers() -> list:
    handlers: list = [logging.StreamHandler(sys.stdout)]

    # Fora de DEBUG também grava em arquivo
    if not settings.DEBUG:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    request_filter = RequestIdFilter()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.addFilter(request_filter)
        handler.setFormatter(formatter)
    return handlers


def setup_logging() -> logging.Logger:
    """Configura o logger raiz da aplicação (idempotente)"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        handlers=_build_handlers(),
        force=True,
    )

    # Bibliotecas ruidosas
    for name, level in (
        ("uvicorn.access", logging.WARNING),
        ("sqlalchemy.engine", logging.WARNING),
        ("passlib", logging.ERROR),
    ):
        logging.getLogger(name).setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configurado (nível {settings.LOG_LEVEL.upper()})")
    return logger
