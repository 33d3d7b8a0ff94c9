"""
API middleware for tenant scoping.

Authentication happens upstream; the gateway forwards the caller's team in the
``X-Team-ID`` header and every capacity route depends on it.
"""

from typing import Optional
from fastapi import Header, HTTPException, status
from uuid import UUID


async def require_team(
    x_team_id: Optional[str] = Header(None, alias="X-Team-ID"),
) -> UUID:
    """
    Team scoping dependency.
    
    Usage:
        @router.get("/endpoint")
        async def my_endpoint(team_id: UUID = Depends(require_team)):
            ...
    
    Returns:
        The caller's team ID
        
    Raises:
        HTTPException: If the header is missing or not a UUID
    """
    if not x_team_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    
    try:
        return UUID(x_team_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid team ID",
        )
