"""
Internship Listing Repository Implementation
SQLAlchemy-based listing repository
"""
from typing import List
from uuid import UUID

from sqlalchemy import select, delete, and_
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger

from gradglow.application.repositories.interfaces import IListingRepository
from gradglow.core.database import SessionFactory, get_db_session
from gradglow.core.exceptions import RepositoryException
from gradglow.domain.entities import Internship, NewInternship
from gradglow.infrastructure.persistence.mappers import db_row_to_listing
from gradglow.infrastructure.persistence.models import InternshipListingModel


class SQLAlchemyListingRepository(IListingRepository):
    """SQLAlchemy implementation of the listing repository"""

    def __init__(self, session_factory: SessionFactory = get_db_session):
        self.session_factory = session_factory

    async def fetch_all(self) -> List[Internship]:
        """Get every listing, newest first"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(InternshipListingModel)
                    .order_by(InternshipListingModel.created_at.desc())
                )
                models = result.scalars().all()
            return [db_row_to_listing(m) for m in models]

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to fetch internships: {str(e)}")
            raise RepositoryException("Failed to load internships") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable internship row: {str(e)}")
            raise RepositoryException("Failed to load internships") from e

    async def fetch_owned_by(self, recruiter_id: UUID) -> List[Internship]:
        """Get listings posted by one recruiter, newest first"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(InternshipListingModel)
                    .where(InternshipListingModel.recruiter_id == recruiter_id)
                    .order_by(InternshipListingModel.created_at.desc())
                )
                models = result.scalars().all()
            return [db_row_to_listing(m) for m in models]

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to fetch internships for recruiter {recruiter_id}: {str(e)}")
            raise RepositoryException("Failed to load your internships") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable internship row: {str(e)}")
            raise RepositoryException("Failed to load your internships") from e

    async def create(self, data: NewInternship, recruiter_id: UUID) -> Internship:
        """Insert a listing; the owner always comes from the caller, never from `data`"""
        try:
            async with self.session_factory() as session:
                model = InternshipListingModel(**data.to_record(), recruiter_id=recruiter_id)
                session.add(model)
                await session.flush()
                await session.refresh(model)
                internship = db_row_to_listing(model)

            logger.info(f"Internship created: {internship.id} by recruiter {recruiter_id}")
            return internship

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to create internship for recruiter {recruiter_id}: {str(e)}")
            raise RepositoryException("Failed to post internship") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable internship row: {str(e)}")
            raise RepositoryException("Failed to post internship") from e

    async def delete(self, internship_id: UUID, recruiter_id: UUID) -> bool:
        """Delete a listing only if `recruiter_id` owns it"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(InternshipListingModel).where(
                        and_(
                            InternshipListingModel.id == internship_id,
                            InternshipListingModel.recruiter_id == recruiter_id
                        )
                    )
                )
                deleted = (result.rowcount or 0) > 0

            if not deleted:
                logger.info(f"No internship {internship_id} owned by {recruiter_id}; nothing deleted")
            return deleted

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to delete internship {internship_id}: {str(e)}")
            raise RepositoryException("Failed to delete internship") from e
