"""FastAPI dependencies for dependency injection."""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.retry import RetryPolicy
from core.application.services import (
    CartService,
    DeliveryService,
    OrderPlacementService,
    OrderQueryService,
)
from core.domain.event_bus import EventBus
from core.domain.value_objects import UserAccess
from core.infrastructure.database import config as database
from core.infrastructure.event_bus import get_event_bus
from core.infrastructure.security import InvalidTokenError, decode_access_token
from core.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings() -> AppSettings:
    return get_app_settings()


_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory bound to the global engine.

    Returns:
        async_sessionmaker instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = database.get_session_factory()
    return _session_factory


def get_bus() -> EventBus:
    return get_event_bus()


def get_retry_policy(settings: AppSettings = Depends(get_settings)) -> RetryPolicy:
    return RetryPolicy.from_settings(settings.ordering)


# =============================================================================
# IDENTITY
# =============================================================================

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: AppSettings = Depends(get_settings),
) -> UserAccess:
    """Decode the bearer token into the caller's identity.

    Raises:
        HTTPException: 401 when the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials, settings.auth)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# =============================================================================
# SERVICES
# =============================================================================

def get_order_placement_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    event_bus: EventBus = Depends(get_bus),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> OrderPlacementService:
    return OrderPlacementService(session_factory, event_bus, retry_policy)


def get_delivery_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    event_bus: EventBus = Depends(get_bus),
    retry_policy: RetryPolicy = Depends(get_retry_policy),
) -> DeliveryService:
    return DeliveryService(session_factory, event_bus, retry_policy)


def get_order_query_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> OrderQueryService:
    return OrderQueryService(session_factory)


def get_cart_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> CartService:
    return CartService(session_factory)
