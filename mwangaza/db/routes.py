"""
Database - API Routes

ADMIN ENDPOINTS - storage status and test reset
"""

from fastapi import APIRouter, Depends, HTTPException

from mwangaza.auth.routes import require_access
from mwangaza.auth.schemas import Principal
from mwangaza.core.config import settings
from mwangaza.db.query import get_query_engine

router = APIRouter()


@router.get("/api/v1/database/status")
async def database_status(principal: Principal = Depends(require_access("database", "view"))):
    """Test the connection and report table sizes"""
    engine = get_query_engine()
    connected = await engine.test_connection()
    return {
        "connected": connected,
        "backend": engine.store.backend,
        "configuration": settings.describe_database(),
        "tables": engine.table_counts() if connected else {},
    }


@router.post("/api/v1/database/reset")
def database_reset(principal: Principal = Depends(require_access("database", "admin"))):
    """Clear every client table (development only)"""
    if not settings.DEBUG:
        raise HTTPException(status_code=403, detail="Database reset is disabled outside DEBUG mode")
    engine = get_query_engine()
    engine.reset_database()
    return {"message": "Database reset", "tables": engine.table_counts()}
