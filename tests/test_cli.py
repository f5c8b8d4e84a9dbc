"""Tests for the command-line interface."""

import copy

import pytest
from typer.testing import CliRunner

from talent_pipeline import __version__
from talent_pipeline import cli
from talent_pipeline.core.errors import RecruiterAPIError
from talent_pipeline.core.models import ApplicationAction

STATUS_AFTER = {
    ApplicationAction.SHORTLIST: "shortlisted",
    ApplicationAction.REJECT: "rejected",
    ApplicationAction.HIRE: "hired",
    ApplicationAction.UNDO: "pending",
}


class FakeRecruiterClient:
    """In-memory stand-in for RecruiterAPIClient."""

    applicants = {
        "job-1": [
            {"id": "a1", "name": "Jane Doe", "email": "jane@x.com", "skills": "python, sql", "status": "pending"},
            {"id": "a2", "name": "John Roe", "email": "john@x.com", "cv": "python", "status": "hired"},
        ],
    }
    fail_writes = False

    def __init__(self, *args, **kwargs):
        self.applicants = copy.deepcopy(type(self).applicants)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def get_job(self, job_id):
        return {"id": job_id, "title": "Backend", "skills": ["python", "sql"]}

    async def list_jobs(self, recruiter_id):
        return [{"id": "job-1", "title": "Backend", "skills": ["python", "sql"], "status": "published"}]

    async def list_applicants(self, job_id):
        return self.applicants.get(job_id, [])

    async def update_applicant_status(self, job_id, applicant_id, action):
        if self.fail_writes:
            raise RecruiterAPIError("Failed to update applicant", status_code=500)
        for record in self.applicants.get(job_id, []):
            if record["id"] == applicant_id:
                record["status"] = STATUS_AFTER[ApplicationAction(action)]

    async def get_dashboard(self, recruiter_id):
        return {"suggestedCandidates": []}


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setattr(cli, "RecruiterAPIClient", FakeRecruiterClient)
    # Logging setup would pin structlog to the runner's temporary streams
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    monkeypatch.setattr(FakeRecruiterClient, "fail_writes", False)
    return CliRunner()


class TestCli:
    """Test cases for the talent CLI."""

    def test_version(self, runner):
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config(self, runner):
        result = runner.invoke(cli.app, ["config"])

        assert result.exit_code == 0
        assert "Suggestion Threshold" in result.output

    def test_applicants_default_view(self, runner):
        result = runner.invoke(cli.app, ["applicants", "job-1"])

        assert result.exit_code == 0
        assert "Jane Doe" in result.output
        assert "John Roe" not in result.output

    def test_applicants_hired_view(self, runner):
        result = runner.invoke(cli.app, ["applicants", "job-1", "--view", "Hired"])

        assert result.exit_code == 0
        assert "John Roe" in result.output

    def test_suggest(self, runner):
        result = runner.invoke(cli.app, ["suggest", "rec-1"])

        assert result.exit_code == 0
        assert "Jane Doe" in result.output

    def test_act(self, runner):
        result = runner.invoke(cli.app, ["act", "job-1", "a1", "shortlist"])

        assert result.exit_code == 0
        assert "shortlisted" in result.output

    def test_act_invalid_transition(self, runner):
        result = runner.invoke(cli.app, ["act", "job-1", "a2", "reject"])

        assert result.exit_code == 1
        assert "Cannot reject" in result.output

    def test_act_backend_failure(self, runner, monkeypatch):
        monkeypatch.setattr(FakeRecruiterClient, "fail_writes", True)

        result = runner.invoke(cli.app, ["act", "job-1", "a1", "shortlist"])

        assert result.exit_code == 1
        assert "Failed to update applicant" in result.output

    def test_insights(self, runner):
        result = runner.invoke(cli.app, ["insights", "rec-1"])

        assert result.exit_code == 0
        assert "Total Applicants" in result.output
