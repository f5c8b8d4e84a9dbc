"""Tests for status tab projection and recruiter insights."""

import pytest

from talent_pipeline.core.models import Application, ApplicationStatus, Job
from talent_pipeline.jobs.insights import company_insights, dashboard_summary
from talent_pipeline.jobs.projector import StatusProjector, StatusView


def make_application(app_id, status, job_id="job-1"):
    return Application(id=app_id, job_id=job_id, status=status)


@pytest.fixture
def applications():
    """One job's applications across every status."""
    return [
        make_application("p1", ApplicationStatus.PENDING),
        make_application("p2", ApplicationStatus.PENDING),
        make_application("s1", ApplicationStatus.SHORTLISTED),
        make_application("h1", ApplicationStatus.HIRED),
        make_application("r1", ApplicationStatus.REJECTED),
        make_application("r2", ApplicationStatus.REJECTED),
    ]


class TestStatusProjector:
    """Test cases for StatusProjector."""

    @pytest.mark.parametrize("view,expected", [
        (StatusView.ALL, ["p1", "p2"]),
        (StatusView.SHORTLISTED, ["s1"]),
        (StatusView.HIRED, ["h1"]),
        (StatusView.REJECTED, ["r1", "r2"]),
        ("Shortlisted", ["s1"]),
    ])
    def test_project(self, applications, view, expected):
        assert [a.id for a in StatusProjector().project(applications, view)] == expected

    def test_dismissed_rejections_are_hidden_from_rejected_tab_only(self, applications):
        projector = StatusProjector()
        projector.dismiss("r1")
        projector.dismiss("p1")

        assert [a.id for a in projector.project(applications, StatusView.REJECTED)] == ["r2"]
        assert [a.id for a in projector.project(applications, StatusView.ALL)] == ["p1", "p2"]

    def test_dismissals_are_per_session(self, applications):
        projector = StatusProjector()
        projector.dismiss("r1")

        assert [a.id for a in StatusProjector().project(applications, StatusView.REJECTED)] == ["r1", "r2"]

        projector.restore("r1")
        assert projector.dismissed == set()

    def test_counts(self, applications):
        projector = StatusProjector()
        projector.dismiss("r2")

        assert projector.counts(applications) == {
            StatusView.ALL: 2,
            StatusView.SHORTLISTED: 1,
            StatusView.HIRED: 1,
            StatusView.REJECTED: 1,
        }

    def test_unknown_view_raises(self, applications):
        with pytest.raises(ValueError):
            StatusProjector().project(applications, "Archived")


class TestRecruiterInsights:
    """Test cases for dashboard counters and company insights."""

    @pytest.fixture
    def jobs(self):
        return [
            Job(id="job-1", title="Frontend", skills=["react", "css"], status="published"),
            Job(id="job-2", title="Backend", skills=["python", "sql", "react"], status="published"),
            Job(id="job-3", title="Data", skills=["python", "sql"], status="draft"),
        ]

    def test_dashboard_summary(self, jobs, applications):
        summary = dashboard_summary(jobs, applications)

        assert summary.jobs_posted == 3
        assert summary.total_applicants == 6
        assert summary.shortlisted == 1

    def test_company_insights(self, jobs, applications):
        applications = applications + [
            make_application("x1", ApplicationStatus.PENDING, job_id="job-2"),
            make_application("x2", ApplicationStatus.PENDING, job_id="job-3"),
        ]

        report = company_insights(jobs, applications)

        assert report.total_jobs == 3
        assert report.open_jobs == 2
        assert report.draft_jobs == 1
        assert report.total_applicants == 7
        assert report.avg_applicants_per_job == 3.5
        assert report.status_breakdown == {"pending": 3, "shortlisted": 1, "rejected": 2, "hired": 1}
        assert report.most_applied_job.id == "job-1"
        assert report.most_applied_job.title == "Frontend"
        assert report.most_applied_job.applicants == 6
        assert [(s.skill, s.count) for s in report.top_skills_demanded] == [
            ("react", 2), ("python", 2), ("sql", 2), ("css", 1)
        ]

    def test_company_insights_without_jobs(self):
        report = company_insights([], [])

        assert report.total_jobs == 0
        assert report.avg_applicants_per_job == 0.0
        assert report.most_applied_job is None
        assert report.status_breakdown == {"pending": 0, "shortlisted": 0, "rejected": 0, "hired": 0}
