"""Core data models for Talent Pipeline."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ApplicationStatus(str, Enum):
    """Lifecycle status of an application."""
    PENDING = "pending"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    HIRED = "hired"


class ApplicationAction(str, Enum):
    """Recruiter actions that move an application between statuses."""
    SHORTLIST = "shortlist"
    REJECT = "reject"
    HIRE = "hire"
    UNDO = "undo"


class Job(BaseModel):
    """A job posting as seen by the matching engine."""
    id: str = Field(..., description="Job identifier")
    title: str = Field("", description="Job title")
    skills: List[str] = Field(default_factory=list, description="Normalized required skills")
    recruiter_id: str = Field("", description="Owning recruiter")
    status: str = Field("published", description="published, draft or archived")
    applicants_count: int = Field(0, description="Applicant count reported by the backend")


class Candidate(BaseModel):
    """A person who applied to a job."""
    id: str = Field("", description="Candidate identifier")
    name: str = Field("", description="Full name")
    email: str = Field("", description="Email address")
    phone: str = Field("", description="Phone number")
    location: str = Field("", description="Current location")
    education: str = Field("", description="Highest education")
    experience_years: int = Field(0, description="Years of experience")
    expected_salary: int = Field(0, description="Expected salary")
    skills: List[str] = Field(default_factory=list, description="Normalized skills")
    resume_text: Optional[str] = Field(None, description="Free-text CV or cover letter evidence")
    resume_url: str = Field("", description="Link to uploaded resume")
    portfolio_url: str = Field("", description="Portfolio website URL")
    linkedin: str = Field("", description="LinkedIn profile URL")
    github: str = Field("", description="GitHub profile URL")


class Application(BaseModel):
    """Record linking one candidate to one job."""
    id: str = Field(..., description="Application identifier")
    job_id: str = Field(..., description="Job the candidate applied to")
    candidate_id: str = Field("", description="Applying candidate")
    status: ApplicationStatus = Field(ApplicationStatus.PENDING, description="Lifecycle status")
    match_score: int = Field(0, description="Match percentage (0-100)")
    created_at: Optional[datetime] = Field(None, description="When the candidate applied")
    candidate: Candidate = Field(default_factory=Candidate, description="Embedded candidate details")
    pending_write: bool = Field(False, description="Local status not yet confirmed by the backend")

    @field_validator("match_score")
    @classmethod
    def _clamp_score(cls, value: int) -> int:
        return max(0, min(100, value))


class Suggestion(BaseModel):
    """A ranked candidate surfaced on the recruiter dashboard."""
    job_id: str = Field(..., description="Job the candidate applied to")
    job_title: str = Field("", description="Title of that job")
    application_id: str = Field(..., description="Underlying application")
    candidate: Candidate = Field(..., description="Suggested candidate")
    match_score: int = Field(..., description="Match percentage (0-100)")
    dedup_key: str = Field(..., description="Normalized email and name")


class DashboardSummary(BaseModel):
    """Headline counters for the recruiter dashboard."""
    jobs_posted: int = 0
    total_applicants: int = 0
    shortlisted: int = 0


class MostAppliedJob(BaseModel):
    """Job with the largest number of applicants."""
    id: str
    title: Optional[str] = None
    applicants: int = 0


class SkillDemand(BaseModel):
    """How many of a recruiter's jobs ask for a skill."""
    skill: str
    count: int


class CompanyInsights(BaseModel):
    """Aggregate hiring statistics across a recruiter's jobs."""
    total_jobs: int = 0
    open_jobs: int = 0
    draft_jobs: int = 0
    total_applicants: int = 0
    avg_applicants_per_job: float = 0.0
    status_breakdown: Dict[str, int] = Field(
        default_factory=lambda: {status.value: 0 for status in ApplicationStatus}
    )
    most_applied_job: Optional[MostAppliedJob] = None
    top_skills_demanded: List[SkillDemand] = Field(default_factory=list)
