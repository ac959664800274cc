"""add row level security policies

Revision ID: 20261019_0930
Revises: 20261019_0900
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '20261019_0930'
down_revision: Union[str, None] = '20261019_0900'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Role of the signed-in account, read from profiles
_IS_RECRUITER = (
    "EXISTS (SELECT 1 FROM profiles p WHERE p.id = auth.uid() AND p.role = 'recruiter')"
)
_IS_STUDENT = (
    "EXISTS (SELECT 1 FROM profiles p WHERE p.id = auth.uid() AND p.role = 'student')"
)
_OWNS_LISTING = (
    "EXISTS (SELECT 1 FROM internship_listings l "
    "WHERE l.id = applications.internship_id AND l.recruiter_id = auth.uid())"
)

POLICIES = [
    # profiles
    ("profiles", "profiles_select_authenticated", "SELECT", "USING (auth.role() = 'authenticated')"),
    ("profiles", "profiles_insert_own", "INSERT", "WITH CHECK (id = auth.uid())"),
    ("profiles", "profiles_update_own", "UPDATE", "USING (id = auth.uid()) WITH CHECK (id = auth.uid())"),

    # internship_listings
    ("internship_listings", "listings_select_all", "SELECT", "USING (true)"),
    (
        "internship_listings",
        "listings_insert_own",
        "INSERT",
        f"WITH CHECK (recruiter_id = auth.uid() AND {_IS_RECRUITER})"
    ),
    (
        "internship_listings",
        "listings_update_own",
        "UPDATE",
        "USING (recruiter_id = auth.uid()) WITH CHECK (recruiter_id = auth.uid())"
    ),
    ("internship_listings", "listings_delete_own", "DELETE", "USING (recruiter_id = auth.uid())"),

    # applications
    (
        "applications",
        "applications_select_party",
        "SELECT",
        f"USING (student_id = auth.uid() OR {_OWNS_LISTING})"
    ),
    (
        "applications",
        "applications_insert_student",
        "INSERT",
        f"WITH CHECK (student_id = auth.uid() AND status = 'pending' AND {_IS_STUDENT})"
    ),
    (
        "applications",
        "applications_update_recruiter",
        "UPDATE",
        f"USING ({_OWNS_LISTING}) WITH CHECK ({_OWNS_LISTING})"
    ),
]

TABLES = ["profiles", "internship_listings", "applications"]


def upgrade() -> None:
    """
    Enforce ownership in the database.

    - Anyone may read listings; only the owning recruiter may write them
    - Students insert their own pending applications only
    - Recruiters read and update applications to listings they own
    """
    for table in TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")

    for table, name, command, clause in POLICIES:
        op.execute(f"CREATE POLICY {name} ON {table} FOR {command} {clause}")


def downgrade() -> None:
    """Drop the policies and disable row level security"""
    for table, name, _, _ in reversed(POLICIES):
        op.execute(f"DROP POLICY IF EXISTS {name} ON {table}")

    for table in TABLES:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY")
