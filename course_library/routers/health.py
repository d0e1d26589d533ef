from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library.config import settings
from course_library.database import get_session

router = APIRouter()


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    try:
        # Check database connection
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return {
            "status": "healthy",
            "version": settings.API_VERSION,
            "database": "connected",
        }
    except SQLAlchemyError as e:
        return {
            "status": "unhealthy",
            "version": settings.API_VERSION,
            "database": "disconnected",
            "error": str(e),
        }
