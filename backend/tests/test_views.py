"""
Tests for derived views and dashboard helpers
"""
from uuid import uuid4

from gradglow.application.services.internships import views
from gradglow.domain.entities import AnonymousSession, RecruiterSession, StudentSession
from gradglow.domain.enums import ApplicationStatus, InternshipCategory, UserRole
from gradglow.domain.value_objects import ListingFilter


class TestRoleScopedViews:
    """student_applications / recruiter_internships / recruiter_applications"""

    def test_anonymous_sees_no_scoped_rows(self, make_listing, make_application):
        listings = [make_listing()]
        applications = [make_application(internship_id=listings[0].id)]
        anonymous = AnonymousSession()

        assert views.student_applications(applications, anonymous) == ()
        assert views.recruiter_internships(listings, anonymous) == ()
        assert views.recruiter_applications(applications, listings, anonymous) == ()

    def test_student_sees_only_own_applications(self, make_user, make_application):
        student = make_user(UserRole.STUDENT)
        mine = make_application(student_id=student.id)
        theirs = make_application()

        assert views.student_applications([mine, theirs], StudentSession(student)) == (mine,)

    def test_recruiter_scoping_follows_ownership(self, make_user, make_listing, make_application):
        recruiter = make_user(UserRole.RECRUITER)
        owned = make_listing(recruiter_id=recruiter.id)
        foreign = make_listing()
        on_owned = make_application(internship_id=owned.id)
        on_foreign = make_application(internship_id=foreign.id)
        session = RecruiterSession(recruiter)

        assert views.recruiter_internships([owned, foreign], session) == (owned,)
        assert views.recruiter_applications([on_owned, on_foreign], [owned, foreign], session) == (on_owned,)

    def test_student_session_gets_no_recruiter_rows(self, make_user, make_listing):
        student = make_user(UserRole.STUDENT)
        listing = make_listing(recruiter_id=student.id)

        assert views.recruiter_internships([listing], StudentSession(student)) == ()


class TestFilterInternships:
    """Listings page filters"""

    def test_empty_filter_returns_everything(self, make_listing):
        listings = [make_listing(), make_listing()]

        assert views.filter_internships(listings, ListingFilter()) == listings

    def test_search_is_case_insensitive_across_fields(self, make_listing):
        by_title = make_listing(title="Data Science Intern")
        by_company = make_listing(title="Intern", company="DataWorks")
        by_description = make_listing(title="Intern", company="Acme", description="Work with big DATA")
        unrelated = make_listing(title="Design Intern", company="Acme", description="Figma")

        result = views.filter_internships(
            [by_title, by_company, by_description, unrelated],
            ListingFilter(search="  data "),
        )

        assert result == [by_title, by_company, by_description]

    def test_category_location_and_remote_combine(self, make_listing):
        match = make_listing(category=InternshipCategory.DESIGN, location="Berlin", is_remote=True)
        wrong_category = make_listing(category=InternshipCategory.TECH, location="Berlin", is_remote=True)
        wrong_location = make_listing(category=InternshipCategory.DESIGN, location="Paris", is_remote=True)
        onsite = make_listing(category=InternshipCategory.DESIGN, location="Berlin", is_remote=False)

        result = views.filter_internships(
            [match, wrong_category, wrong_location, onsite],
            ListingFilter(category="Design", location="Berlin", remote_only=True),
        )

        assert result == [match]

    def test_category_filter_matches_passed_through_strings(self, make_listing):
        custom = make_listing(category="Space Tourism")

        assert views.filter_internships([custom], ListingFilter(category="Space Tourism")) == [custom]


class TestDashboardHelpers:
    """Counters, grouping, recommendations and status options"""

    def test_status_counts_are_zero_filled(self, make_application):
        applications = [
            make_application(status=ApplicationStatus.PENDING),
            make_application(status=ApplicationStatus.PENDING),
            make_application(status=ApplicationStatus.ACCEPTED),
        ]

        assert views.status_counts(applications) == {
            "total": 3,
            "pending": 2,
            "reviewing": 0,
            "accepted": 1,
            "rejected": 0,
        }

    def test_applications_grouped_in_listing_order(self, make_listing, make_application):
        first, second = make_listing(), make_listing()
        a1 = make_application(internship_id=second.id)
        a2 = make_application(internship_id=second.id)
        stray = make_application(internship_id=uuid4())

        grouped = views.applications_by_internship([a1, stray, a2], [first, second])

        assert list(grouped.keys()) == [first.id, second.id]
        assert grouped[first.id] == []
        assert grouped[second.id] == [a1, a2]

    def test_recommendations_skip_applied_and_respect_limit(self, make_listing, make_application):
        listings = [make_listing() for _ in range(5)]
        applications = [make_application(internship_id=listings[0].id)]

        recommended = views.recommended_internships(listings, applications, limit=3)

        assert recommended == listings[1:4]

    def test_status_options(self):
        assert views.status_options(ApplicationStatus.REVIEWING, strict=True) == [
            ApplicationStatus.ACCEPTED,
            ApplicationStatus.REJECTED,
        ]
        assert views.status_options(ApplicationStatus.ACCEPTED, strict=True) == []
        assert ApplicationStatus.ACCEPTED not in views.status_options(ApplicationStatus.ACCEPTED)
