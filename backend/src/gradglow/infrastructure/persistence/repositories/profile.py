"""
Profile Repository Implementation
SQLAlchemy-based profile repository
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger

from gradglow.application.repositories.interfaces import IProfileRepository
from gradglow.core.database import SessionFactory, get_db_session
from gradglow.core.exceptions import RepositoryException
from gradglow.domain.entities import User
from gradglow.infrastructure.persistence.mappers import db_row_to_user
from gradglow.infrastructure.persistence.models import ProfileModel


class SQLAlchemyProfileRepository(IProfileRepository):
    """SQLAlchemy implementation of the profile repository"""

    def __init__(self, session_factory: SessionFactory = get_db_session):
        self.session_factory = session_factory

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get the profile for an auth user id"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ProfileModel).where(ProfileModel.id == user_id)
                )
                model = result.scalar_one_or_none()

            if model:
                return db_row_to_user(model)
            return None

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to get profile {user_id}: {str(e)}")
            raise RepositoryException("Failed to load profile") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable profile row: {str(e)}")
            raise RepositoryException("Failed to load profile") from e

    async def upsert(self, user: User) -> User:
        """Create or overwrite the profile keyed by the auth user id"""
        values = {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "name": user.name,
            "avatar_url": user.avatar_url,
        }
        stmt = insert(ProfileModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProfileModel.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )

        try:
            async with self.session_factory() as session:
                await session.execute(stmt)

            logger.info(f"Profile saved for {user.id} ({user.role.value})")
            return user

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to save profile {user.id}: {str(e)}")
            raise RepositoryException("Failed to save profile") from e
