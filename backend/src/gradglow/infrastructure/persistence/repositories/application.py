"""
Application Repository Implementation
SQLAlchemy-based application repository
"""
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from loguru import logger

from gradglow.application.repositories.interfaces import IApplicationRepository
from gradglow.core.database import SessionFactory, get_db_session
from gradglow.core.exceptions import DuplicateApplicationException, RepositoryException
from gradglow.domain.entities import Application, ApplicationSubmission, Internship
from gradglow.domain.enums import ApplicationStatus
from gradglow.infrastructure.persistence.mappers import application_record, db_row_to_application
from gradglow.infrastructure.persistence.models import ApplicationModel

UNIQUE_APPLICATION_CONSTRAINT = "uq_applications_student_internship"


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """SQLAlchemy implementation of the application repository"""

    def __init__(self, session_factory: SessionFactory = get_db_session):
        self.session_factory = session_factory

    async def fetch_for_student(self, student_id: UUID) -> List[Application]:
        """Get a student's applications, newest first"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ApplicationModel)
                    .where(ApplicationModel.student_id == student_id)
                    .order_by(ApplicationModel.created_at.desc())
                )
                models = result.scalars().all()
            return [db_row_to_application(m) for m in models]

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to fetch applications for student {student_id}: {str(e)}")
            raise RepositoryException("Failed to load your applications") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable application row: {str(e)}")
            raise RepositoryException("Failed to load your applications") from e

    async def fetch_for_recruiter(self, listing_ids: Iterable[UUID]) -> List[Application]:
        """Get applications against any of the given listings, newest first"""
        ids = list(listing_ids)
        if not ids:
            return []

        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ApplicationModel)
                    .where(ApplicationModel.internship_id.in_(ids))
                    .order_by(ApplicationModel.created_at.desc())
                )
                models = result.scalars().all()
            return [db_row_to_application(m) for m in models]

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to fetch applications for {len(ids)} listings: {str(e)}")
            raise RepositoryException("Failed to load applications") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable application row: {str(e)}")
            raise RepositoryException("Failed to load applications") from e

    async def create(
        self,
        listing: Internship,
        student_id: UUID,
        student_name: Optional[str],
        data: ApplicationSubmission
    ) -> Application:
        """Insert a pending application carrying the listing's title and company"""
        try:
            async with self.session_factory() as session:
                model = ApplicationModel(**application_record(listing, student_id, student_name, data))
                session.add(model)
                await session.flush()
                await session.refresh(model)
                application = db_row_to_application(model)

            logger.info(f"Application {application.id} submitted by {student_id} for {listing.id}")
            return application

        except IntegrityError as e:
            if UNIQUE_APPLICATION_CONSTRAINT in str(e.orig):
                logger.warning(f"Duplicate application rejected by database: student={student_id}, internship={listing.id}")
                raise DuplicateApplicationException(str(listing.id)) from e
            logger.error(f"Application insert violated a constraint: {str(e)}")
            raise RepositoryException("Failed to submit application") from e

        except (ValueError, KeyError) as e:
            logger.error(f"Unreadable application row: {str(e)}")
            raise RepositoryException("Failed to submit application") from e

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to create application for {listing.id}: {str(e)}")
            raise RepositoryException("Failed to submit application") from e

    async def update_status(self, application_id: UUID, status: ApplicationStatus) -> None:
        """Overwrite an application's status"""
        try:
            async with self.session_factory() as session:
                await session.execute(
                    update(ApplicationModel)
                    .where(ApplicationModel.id == application_id)
                    .values(status=status.value)
                )
            logger.info(f"Application {application_id} status set to {status.value}")

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to update application {application_id}: {str(e)}")
            raise RepositoryException("Failed to update application status") from e
