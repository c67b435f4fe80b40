"""
Health check API route
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from simple_example.database.connection import get_engine

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check - verifies the database answers a trivial query"""
    try:
        engine = get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected"
        }

    except Exception as e:
        # Only report unhealthy for actual infrastructure issues
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
