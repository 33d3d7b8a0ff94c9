"""
Health repository for database connectivity checks.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


class HealthRepository:
    """Repository for health check queries."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def check_database(self) -> bool:
        """Return True when a trivial query round-trips."""
        result = await self.session.execute(text("SELECT 1"))
        return result.scalar() == 1
