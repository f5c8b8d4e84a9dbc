"""Dashboard counters and company hiring insights."""

from collections import Counter
from typing import Dict, Iterable, List

from talent_pipeline.core.models import (
    Application,
    ApplicationStatus,
    CompanyInsights,
    DashboardSummary,
    Job,
    MostAppliedJob,
    SkillDemand,
)

PUBLISHED = "published"
TOP_SKILLS = 5


def dashboard_summary(jobs: Iterable[Job], applications: Iterable[Application]) -> DashboardSummary:
    """Headline numbers for the recruiter home screen."""
    applications = list(applications)
    return DashboardSummary(
        jobs_posted=len(list(jobs)),
        total_applicants=len(applications),
        shortlisted=sum(1 for a in applications if a.status == ApplicationStatus.SHORTLISTED),
    )


def company_insights(jobs: Iterable[Job], applications: Iterable[Application]) -> CompanyInsights:
    """
    Aggregate hiring statistics across a recruiter's jobs.

    Only published jobs take applicants, so applications pointing at drafts
    or unknown jobs are ignored. Skill demand is counted over every job.
    """
    jobs = list(jobs)
    published = [job for job in jobs if job.status == PUBLISHED]
    published_ids = {job.id for job in published}

    breakdown: Dict[str, int] = {status.value: 0 for status in ApplicationStatus}
    per_job: Dict[str, int] = {}
    total = 0
    for application in applications:
        if application.job_id not in published_ids:
            continue
        total += 1
        breakdown[application.status.value] += 1
        per_job[application.job_id] = per_job.get(application.job_id, 0) + 1

    most_applied = None
    if per_job:
        # max() keeps the first job on ties
        job_id = max(per_job, key=per_job.get)
        titles = {job.id: job.title for job in published}
        most_applied = MostAppliedJob(id=job_id, title=titles.get(job_id) or None, applicants=per_job[job_id])

    skill_counts: Counter = Counter()
    for job in jobs:
        skill_counts.update(job.skills)
    top_skills: List[SkillDemand] = [
        SkillDemand(skill=skill, count=count)
        for skill, count in skill_counts.most_common(TOP_SKILLS)
    ]

    return CompanyInsights(
        total_jobs=len(jobs),
        open_jobs=len(published),
        draft_jobs=len(jobs) - len(published),
        total_applicants=total,
        avg_applicants_per_job=round(total / len(published), 2) if published else 0.0,
        status_breakdown=breakdown,
        most_applied_job=most_applied,
        top_skills_demanded=top_skills,
    )
