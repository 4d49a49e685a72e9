# rebound/routes/recovery_routes.py
from fastapi import APIRouter

from rebound.services.recovery import RECOVERY_STRATEGIES, RECOVERY_TOOLS

router = APIRouter(prefix="/api/recovery", tags=["recovery"])


@router.get("/strategies")
def list_strategies():
    return RECOVERY_STRATEGIES


@router.get("/tools")
def list_tools():
    return RECOVERY_TOOLS
