"""create profiles, internship_listings and applications

Revision ID: 20261019_0900
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '20261019_0900'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the three tables the client core reads and writes.

    - profiles: one row per auth account, keyed by the auth user id
    - internship_listings: recruiter-owned listings
    - applications: at most one per (student, listing), removed with the listing
    """
    op.create_table(
        'profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, comment='Auth user id'),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, comment='student or recruiter'),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("role IN ('student', 'recruiter')", name='ck_profiles_role'),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'])

    op.create_table(
        'internship_listings',
        sa.Column(
            'id',
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()")
        ),
        sa.Column('recruiter_id', postgresql.UUID(as_uuid=True), nullable=False, comment='profiles.id of the owner'),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False, comment='Free text'),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', postgresql.ARRAY(sa.Text()), nullable=False, server_default='{}'),
        sa.Column('salary', sa.String(length=100), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=False),
        sa.Column('is_remote', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('company_description', sa.Text(), nullable=True),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['recruiter_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_internship_listings_recruiter_id', 'internship_listings', ['recruiter_id'])
    op.create_index(
        'ix_internship_listings_created_at',
        'internship_listings',
        [sa.text('created_at DESC')]
    )

    op.create_table(
        'applications',
        sa.Column(
            'id',
            postgresql.UUID(as_uuid=True),
            nullable=False,
            server_default=sa.text("gen_random_uuid()")
        ),
        sa.Column('internship_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='pending'),
        sa.Column('resume_url', sa.String(length=500), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('linkedin_url', sa.String(length=500), nullable=True),
        sa.Column('portfolio_url', sa.String(length=500), nullable=True),
        sa.Column('why_interested', sa.Text(), nullable=True),
        sa.Column('relevant_experience', sa.Text(), nullable=True),
        sa.Column('student_name', sa.String(length=255), nullable=True),
        sa.Column('internship_title', sa.String(length=255), nullable=False, comment='Display cache'),
        sa.Column('internship_company', sa.String(length=255), nullable=False, comment='Display cache'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['internship_id'], ['internship_listings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'internship_id', name='uq_applications_student_internship'),
        sa.CheckConstraint(
            "status IN ('pending', 'reviewing', 'accepted', 'rejected')",
            name='ck_applications_status'
        ),
    )
    op.create_index('ix_applications_internship_id', 'applications', ['internship_id'])
    op.create_index('ix_applications_student_id', 'applications', ['student_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])


def downgrade() -> None:
    """Drop the tables in dependency order"""
    op.drop_index('ix_applications_status', table_name='applications')
    op.drop_index('ix_applications_student_id', table_name='applications')
    op.drop_index('ix_applications_internship_id', table_name='applications')
    op.drop_table('applications')
    op.drop_index('ix_internship_listings_created_at', table_name='internship_listings')
    op.drop_index('ix_internship_listings_recruiter_id', table_name='internship_listings')
    op.drop_table('internship_listings')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')
