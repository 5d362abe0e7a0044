"""Router principal da API v1"""
from fastapi import APIRouter
from fantasy_football.api.v1.endpoints import (
    iam,
    players,
    teams,
    users,
    transfer_market,
    transfers,
    monitoring,
    data_integrity,
)

api_router = APIRouter()

api_router.include_router(iam.router, prefix="/iam", tags=["iam"])
api_router.include_router(players.router, prefix="/players", tags=["players"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(transfer_market.router, prefix="/transfer-market", tags=["transfer-market"])
api_router.include_router(transfers.router, prefix="/transfers", tags=["transfers"])
api_router.include_router(monitoring.router, prefix="/monitoring", tags=["monitoring"])
api_router.include_router(data_integrity.router, prefix="/data-integrity", tags=["data-integrity"])
