"""
Async Database Configuration
SQLAlchemy 2.0 with async support
"""
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncGenerator, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from .config import settings


# Base class for ORM models
Base = declarative_base()

# Opens one unit of work; repositories take this instead of a live session
SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]

# Lazily created so importing models never opens a connection pool
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine() -> AsyncEngine:
    """Get async engine instance (singleton)"""
    global _engine
    if _engine is None:
        engine_args = {
            "echo": settings.DEBUG,
            "pool_pre_ping": True,
        }
        if settings.DEBUG:
            engine_args["poolclass"] = NullPool
        else:
            engine_args.update({
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
                "pool_recycle": settings.DB_POOL_RECYCLE,
            })
        _engine = create_async_engine(settings.DATABASE_URL, **engine_args)
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Get session factory bound to the shared engine"""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _session_factory


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database sessions

    Usage:
        async with get_db_session() as session:
            result = await session.execute(query)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def close_db():
    """Close database connections"""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


# Returns the JWT claims of the signed-in account, or None when anonymous
ClaimsProvider = Callable[[], Optional[Dict[str, Any]]]


def scoped_session_factory(
    claims_provider: ClaimsProvider,
    base: SessionFactory = get_db_session,
) -> SessionFactory:
    """
    Wrap a session factory so row level security sees the caller

    Policies call auth.uid()/auth.role(), which read the transaction-local
    `request.jwt.claims` setting and the current role. Both are set at the
    start of every unit of work from whatever the provider returns then, so
    one factory follows sign-in, sign-out and token refresh.
    """

    @asynccontextmanager
    async def open_session() -> AsyncGenerator[AsyncSession, None]:
        async with base() as session:
            claims = claims_provider()
            if claims is None:
                role = settings.DB_ANON_ROLE
            else:
                await session.execute(
                    text("SELECT set_config('request.jwt.claims', :claims, true)"),
                    {"claims": json.dumps(claims)},
                )
                role = settings.DB_AUTHENTICATED_ROLE
            if role:
                # Role names cannot be bound; settings only accept plain identifiers
                await session.execute(text(f'SET LOCAL ROLE "{role}"'))
            yield session

    return open_session
