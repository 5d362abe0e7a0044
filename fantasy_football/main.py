"""Aplicação principal FastAPI"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm.exc import StaleDataError
from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import AppError, ConcurrentModification, ValidationError
from fantasy_football.core.logging_config import setup_logging
from fantasy_football.core.middleware import RequestContextMiddleware
from fantasy_football.core.rate_limit import limiter
from fantasy_football.api.v1.api import api_router
import logging

# Configura logging
setup_logging()
logger = logging.getLogger(__name__)

NAME_FIELDS = {
    "firstName", "lastName", "name", "playerName", "teamName",
    "first_name", "last_name", "player_name", "team_name",
}

# Cria aplicação FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API REST de fantasy football: times, jogadores e mercado de transferências",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc"
)

# Estado do limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestContextMiddleware)

# Inclui routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


def validation_error_from(errors: list) -> ValidationError:
    """Converte o primeiro erro do pydantic num ValidationError com código estável"""
    if not errors:
        return ValidationError()

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = location[-1] if location else ""
    message = f"{'.'.join(location)}: {first.get('msg', '')}" if location else first.get("msg", "")

    if field in NAME_FIELDS and first.get("type") == "string_pattern_mismatch":
        return ValidationError(message, code="INVALID_NAME")
    if field == "email":
        return ValidationError(message, code="INVALID_EMAIL")
    if field == "password":
        return ValidationError(message, code="INVALID_PASSWORD")
    return ValidationError(message)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.code} {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = validation_error_from(exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_response())


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_handler(request: Request, exc: PydanticValidationError):
    error = validation_error_from(exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_response())


@app.exception_handler(StaleDataError)
async def stale_data_handler(request: Request, exc: StaleDataError):
    logger.warning(f"Modificação concorrente em {request.method} {request.url.path}: {exc}")
    error = ConcurrentModification()
    return JSONResponse(status_code=error.status_code, content=error.to_response())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"statusCode": 500, "error": "INTERNAL_ERROR", "message": "Erro interno do servidor"},
    )


@app.get("/")
async def root():
    """Endpoint raiz"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "iam": f"{settings.API_V1_PREFIX}/iam",
            "players": f"{settings.API_V1_PREFIX}/players",
            "teams": f"{settings.API_V1_PREFIX}/teams",
            "transfer_market": f"{settings.API_V1_PREFIX}/transfer-market",
            "transfers": f"{settings.API_V1_PREFIX}/transfers",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


@app.on_event("startup")
async def startup_event():
    """Evento de startup"""
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciando...")
    from fantasy_football.core.database import init_db
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    """Evento de shutdown"""
    logger.info("Aplicação encerrando...")
    from fantasy_football.core.cache import cache
    await cache.close()
    from fantasy_football.core.database import close_db
    await close_db()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fantasy_football.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
