"""
Health service.
Provides health check functionality.
"""

import time
from rcm.services.base_service import BaseService
from rcm.schemas.health import HealthResponse
from rcm.core.logging import get_logger

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""
    
    def __init__(self):
        self.start_time = time.time()
    
    async def get_health(self) -> HealthResponse:
        """
        Get system health status.
        
        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration
        
        checks = {}
        
        # Check database connectivity
        try:
            from rcm.db.session import get_sessionmaker
            from rcm.db.repositories.health_repository import HealthRepository
            
            async with get_sessionmaker()() as session:
                repo = HealthRepository(session=session)
                db_status = await repo.check_database()
                checks["database"] = "ok" if db_status else "error"
        except Exception as e:
            logger.warning("Database health check failed", extra={"error": str(e)})
            checks["database"] = f"error: {str(e)}"
        
        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"
        
        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
