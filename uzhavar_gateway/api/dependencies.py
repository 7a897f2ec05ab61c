"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session
from uzhavar_gateway.domain.models import Market, UserRole
from uzhavar_gateway.domain.exceptions import RecordNotFoundError, PermissionDeniedError
from uzhavar_gateway.domain.aggregation import authorize_summaries
from uzhavar_gateway.infrastructure.clients.assistant import AssistantClient
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import MarketRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_assistant_client() -> AssistantClient:
    """Provide assistant client instance"""
    return AssistantClient()


def get_market(market_id: str, db: Session = Depends(get_db)) -> Market:
    """Resolve the market path parameter or 404"""
    try:
        return MarketRepository(db).get_market(market_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def get_user_role(x_user_role: Optional[str] = Header(None)) -> Optional[UserRole]:
    """Caller's role from the X-User-Role header; the value is trusted as given"""
    if not x_user_role:
        return None
    try:
        return UserRole(x_user_role.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown role: {x_user_role}")


def require_admin(role: Optional[UserRole] = Depends(get_user_role)) -> UserRole:
    """Only market staff (ADMIN) may trigger bulk notifications"""
    try:
        return authorize_summaries(role)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
