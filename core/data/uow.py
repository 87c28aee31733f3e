"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.exceptions import ConcurrencyError
from core.domain.value_objects import ExecutionID

from .repositories import (
    SqlAlchemyCartRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyUserRepository,
)

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def is_serialization_failure(exc: DBAPIError) -> bool:
    """True when the database aborted the transaction because of a concurrent writer."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in RETRYABLE_SQLSTATES:
        return True
    return "database is locked" in str(orig)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories
    5. Surface write conflicts as ConcurrencyError
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._product_repository: Optional[SqlAlchemyProductRepository] = None
        self._user_repository: Optional[SqlAlchemyUserRepository] = None
        self._cart_repository: Optional[SqlAlchemyCartRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback anything uncommitted, then close the session."""
        try:
            if exc_type is not None:
                await self._session.rollback()
        finally:
            await self._session.close()

        if isinstance(exc_val, DBAPIError) and is_serialization_failure(exc_val):
            raise ConcurrencyError(str(exc_val.orig)) from exc_val

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository."""
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self.session)
        return self._order_repository

    @property
    def products(self) -> SqlAlchemyProductRepository:
        if self._product_repository is None:
            self._product_repository = SqlAlchemyProductRepository(self.session)
        return self._product_repository

    @property
    def users(self) -> SqlAlchemyUserRepository:
        if self._user_repository is None:
            self._user_repository = SqlAlchemyUserRepository(self.session)
        return self._user_repository

    @property
    def carts(self) -> SqlAlchemyCartRepository:
        if self._cart_repository is None:
            self._cart_repository = SqlAlchemyCartRepository(self.session)
        return self._cart_repository

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self.session.rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
