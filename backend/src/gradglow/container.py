"""
Dependency Injection Container
Wires repositories, the identity adapter and the state store
"""
from typing import Optional, Tuple

from gradglow.application.repositories.interfaces import (
    IApplicationRepository,
    IListingRepository,
    IProfileRepository,
)
from gradglow.application.services.auth import AuthService
from gradglow.application.services.internships import InternshipStore
from gradglow.application.services.notifications import INotifier
from gradglow.core.database import (
    SessionFactory,
    close_db,
    get_db_session,
    scoped_session_factory,
)
from gradglow.infrastructure.identity import SupabaseAuthClient
from gradglow.infrastructure.persistence.repositories import (
    SQLAlchemyApplicationRepository,
    SQLAlchemyListingRepository,
    SQLAlchemyProfileRepository,
)


# Singleton instances (stateless)
_auth_client: Optional[SupabaseAuthClient] = None


def get_auth_client() -> SupabaseAuthClient:
    """Get auth API client instance (singleton)"""
    global _auth_client
    if _auth_client is None:
        _auth_client = SupabaseAuthClient()
    return _auth_client


def get_listing_repository(session_factory: SessionFactory = get_db_session) -> IListingRepository:
    return SQLAlchemyListingRepository(session_factory)


def get_application_repository(session_factory: SessionFactory = get_db_session) -> IApplicationRepository:
    return SQLAlchemyApplicationRepository(session_factory)


def get_profile_repository(session_factory: SessionFactory = get_db_session) -> IProfileRepository:
    return SQLAlchemyProfileRepository(session_factory)


def build_auth_service(
    auth_client: Optional[SupabaseAuthClient] = None,
    session_factory: SessionFactory = get_db_session
) -> AuthService:
    """New identity adapter; each holds its own session"""
    return AuthService(
        auth_client or get_auth_client(),
        get_profile_repository(session_factory),
    )


def build_store(
    notifier: Optional[INotifier] = None,
    session_factory: SessionFactory = get_db_session
) -> InternshipStore:
    """New state store over the SQLAlchemy repositories"""
    return InternshipStore(
        get_listing_repository(session_factory),
        get_application_repository(session_factory),
        notifier=notifier,
    )


def build_client(
    notifier: Optional[INotifier] = None,
    auth_client: Optional[SupabaseAuthClient] = None,
    session_factory: SessionFactory = get_db_session
) -> Tuple[AuthService, InternshipStore]:
    """
    Auth service and store with the store following session changes

    Returns:
        (auth service, store) ready for the view layer
    """
    auth_service = build_auth_service(auth_client, session_factory)
    # Listing and application queries run as the signed-in account.
    # Profile writes happen during sign-up, before any session exists.
    store = build_store(
        notifier,
        scoped_session_factory(auth_service.database_claims, session_factory),
    )
    store.attach(auth_service)
    return auth_service, store


async def shutdown() -> None:
    """Release the connection pool and drop singletons"""
    global _auth_client
    await close_db()
    _auth_client = None
