"""Endpoint de verificação de integridade de dados"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from fantasy_football.core.database import get_db
from fantasy_football.core.data_integrity import DataIntegrityChecker
from fantasy_football.core.security import ROLE_ADMIN, Principal, get_optional_principal, require_role

router = APIRouter()


@router.get("/check")
async def check_data_integrity(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Verifica integridade dos dados no banco"""
    require_role(principal, [ROLE_ADMIN])

    checker = DataIntegrityChecker(db)
    result = await checker.check_data_consistency()
    return result
