"""Command-line interface for Talent Pipeline."""

import asyncio
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from talent_pipeline.api.client import RecruiterAPIClient
from talent_pipeline.config import settings
from talent_pipeline.core.errors import TalentPipelineError
from talent_pipeline.core.models import Application, ApplicationAction, Suggestion
from talent_pipeline.jobs.aggregator import CandidateAggregator
from talent_pipeline.jobs.application import ApplicantBoard, allowed_actions
from talent_pipeline.jobs.insights import company_insights, dashboard_summary
from talent_pipeline.jobs.matcher import MatchScorer
from talent_pipeline.jobs.normalizer import job_from_record
from talent_pipeline.jobs.projector import StatusProjector, StatusView
from talent_pipeline.utils.logging import configure_logging

app = typer.Typer(
    name="talent",
    help="Talent Pipeline - candidate matching and application tracking for recruiters",
    add_completion=False,
)
console = Console()


@app.callback()
def _setup() -> None:
    configure_logging()


def _run(coro):
    try:
        return asyncio.run(coro)
    except TalentPipelineError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)


def _applications_table(title: str, applications: List[Application]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Match", justify="right", style="green")
    table.add_column("Status")
    table.add_column("Actions", style="magenta")

    for application in applications:
        table.add_row(
            application.id,
            application.candidate.name or "-",
            application.candidate.email or "-",
            f"{application.match_score}%",
            application.status.value,
            ", ".join(a.value for a in allowed_actions(application.status)) or "-",
        )
    return table


def _suggestions_table(suggestions: List[Suggestion]) -> Table:
    table = Table(title="Suggested Candidates")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Job")
    table.add_column("Match", justify="right", style="green")

    for rank, suggestion in enumerate(suggestions, start=1):
        table.add_row(
            str(rank),
            suggestion.candidate.name or "-",
            suggestion.candidate.email or "-",
            suggestion.job_title or suggestion.job_id,
            f"{suggestion.match_score}%",
        )
    return table


async def _load_board(client: RecruiterAPIClient, job_id: str) -> ApplicantBoard:
    record = await client.get_job(job_id)
    job = job_from_record({"id": job_id, **record})
    board = ApplicantBoard(job, client, scorer=MatchScorer())
    await board.refresh()
    return board


@app.command()
def suggest(recruiter_id: str = typer.Argument(..., help="Recruiter whose jobs are scanned")) -> None:
    """Show the top suggested candidates across a recruiter's jobs."""

    async def _suggest() -> List[Suggestion]:
        async with RecruiterAPIClient() as client:
            dashboard = await client.get_dashboard(recruiter_id)
            backend = dashboard.get("suggestedCandidates")
            return await CandidateAggregator().suggest(
                client, recruiter_id, backend if isinstance(backend, list) else None
            )

    suggestions = _run(_suggest())
    if not suggestions:
        console.print("⚠️  No candidates above the match threshold")
        return
    console.print(_suggestions_table(suggestions))


@app.command()
def applicants(
    job_id: str = typer.Argument(..., help="Job to inspect"),
    view: StatusView = typer.Option(StatusView.ALL, help="Tab to show"),
) -> None:
    """List a job's applicants for one status tab."""

    async def _list() -> List[Application]:
        async with RecruiterAPIClient() as client:
            board = await _load_board(client, job_id)
            return board.applications

    applications = _run(_list())
    projected = StatusProjector().project(applications, view)
    console.print(_applications_table(f"{view.value} applicants for job {job_id}", projected))


@app.command()
def act(
    job_id: str = typer.Argument(..., help="Job the application belongs to"),
    application_id: str = typer.Argument(..., help="Application to change"),
    action: ApplicationAction = typer.Argument(..., help="shortlist, reject, hire or undo"),
) -> None:
    """Shortlist, reject, hire or restore an applicant."""

    async def _act() -> Application:
        async with RecruiterAPIClient() as client:
            board = await _load_board(client, job_id)
            try:
                application = await board.apply(application_id, action)
                await board.wait_for_background()
                return board.get(application.id)
            finally:
                await board.close()

    application = _run(_act())
    console.print(f"✅ {application.candidate.name or application.id} is now [bold]{application.status.value}[/bold]")


@app.command()
def insights(recruiter_id: str = typer.Argument(..., help="Recruiter to summarize")) -> None:
    """Show dashboard counters and hiring insights."""

    async def _collect():
        async with RecruiterAPIClient() as client:
            jobs = [job_from_record(r) for r in await client.list_jobs(recruiter_id)]
            scorer = MatchScorer()
            applications: List[Application] = []
            for job in jobs:
                if job.status != "published" or not job.id:
                    continue
                applications.extend(scorer.build_applications(job, await client.list_applicants(job.id)))
            return dashboard_summary(jobs, applications), company_insights(jobs, applications)

    summary, report = _run(_collect())

    table = Table(title=f"Recruiter {recruiter_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Jobs Posted", str(summary.jobs_posted))
    table.add_row("Open / Draft", f"{report.open_jobs} / {report.draft_jobs}")
    table.add_row("Total Applicants", str(report.total_applicants))
    table.add_row("Shortlisted", str(summary.shortlisted))
    table.add_row("Avg Applicants per Job", f"{report.avg_applicants_per_job:.2f}")
    for status, count in report.status_breakdown.items():
        table.add_row(f"Status: {status}", str(count))
    if report.most_applied_job:
        job = report.most_applied_job
        table.add_row("Most Applied Job", f"{job.title or job.id} ({job.applicants})")
    if report.top_skills_demanded:
        table.add_row("Top Skills", ", ".join(f"{s.skill} ({s.count})" for s in report.top_skills_demanded))

    console.print(table)


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="Talent Pipeline Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    # Show non-sensitive settings
    table.add_row("API Base URL", settings.api_base_url)
    table.add_row("API Timeout", f"{settings.api_timeout}s")
    table.add_row("API Token", "configured" if settings.api_token else "not set")
    table.add_row("Suggestion Threshold", str(settings.suggestion_threshold))
    table.add_row("Suggestion Limit", str(settings.suggestion_limit))
    table.add_row("Refresh After Write", str(settings.refresh_after_write))
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from talent_pipeline import __version__
    console.print(f"Talent Pipeline v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
