"""Normalization of raw job and applicant records from the recruiter backend.

Backend records are loosely shaped: the same concept shows up under several
field names, skills arrive either as comma-separated text or as lists, and any
field may be missing or carry the wrong type. Everything here degrades to an
empty value instead of raising so one malformed record never breaks a screen.
"""

import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from talent_pipeline.core.models import ApplicationStatus, Candidate, Job

# Field aliases, checked in order
NAME_ALIASES = ("name", "applicantName", "applicant.name", "fullName", "username")
EMAIL_ALIASES = ("email", "applicantEmail", "applicant.email")
PHONE_ALIASES = ("phone", "mobile", "applicant.phone")
CANDIDATE_SKILL_ALIASES = ("applicantSkills", "applicant.skills", "skills", "candidateSkills")
EVIDENCE_ALIASES = (
    "cvDescription",
    "cvDetails",
    "cv",
    "resumeText",
    "coverLetter",
    "applicant.cvDescription",
    "applicant.cv",
)
SCORE_ALIASES = ("matchPercentage", "match", "matchScore", "similarity")
JOB_SKILL_ALIASES = ("skills", "requiredSkills", "jobSkills", "tags")

CANDIDATE_ID_ALIASES = ("applicantId", "userId", "studentId", "candidateId", "applicant.id")
LOCATION_ALIASES = ("location", "city", "applicant.location")
EDUCATION_ALIASES = ("education", "qualification", "applicant.education")
EXPERIENCE_ALIASES = ("experienceYears", "experience", "yearsOfExperience", "applicant.experience")
SALARY_ALIASES = ("expectedSalary", "salaryExpectation", "applicant.expectedSalary")
RESUME_URL_ALIASES = ("resumeUrl", "cvUrl", "resume", "applicant.resumeUrl")
PORTFOLIO_ALIASES = ("portfolioUrl", "portfolio", "applicant.portfolioUrl")
LINKEDIN_ALIASES = ("linkedin", "linkedIn", "linkedinUrl", "applicant.linkedin")
GITHUB_ALIASES = ("github", "githubUrl", "applicant.github")
CREATED_AT_ALIASES = ("createdAt", "appliedAt", "created_at")


def normalize_skills(value: Any) -> List[str]:
    """
    Convert a skill field into ordered, trimmed, lower-cased tokens.

    Order and duplicates are preserved.

    Args:
        value: None, a comma-separated string, or a sequence of strings

    Returns:
        List of non-empty skill tokens
    """
    if isinstance(value, str):
        pieces: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        pieces = value
    else:
        return []

    tokens = []
    for piece in pieces:
        if not isinstance(piece, str):
            continue
        token = piece.strip().lower()
        if token:
            tokens.append(token)
    return tokens


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _lookup(record: Mapping[str, Any], path: str) -> Any:
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def resolve_field(record: Any, aliases: Sequence[str]) -> Any:
    """Return the first present value among aliases; dotted aliases walk nested mappings."""
    if not isinstance(record, Mapping):
        return None
    for alias in aliases:
        value = _lookup(record, alias)
        if not _is_missing(value):
            return value
    return None


def text_field(record: Any, aliases: Sequence[str]) -> str:
    """Resolve a field as text, defaulting to an empty string."""
    value = resolve_field(record, aliases)
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def int_field(record: Any, aliases: Sequence[str]) -> int:
    """Resolve a field as an integer, defaulting to zero."""
    value = resolve_field(record, aliases)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return 0


def evidence_field(record: Any) -> str:
    """Join every résumé/CV text alias present on the record."""
    if not isinstance(record, Mapping):
        return ""
    parts = []
    for alias in EVIDENCE_ALIASES:
        value = _lookup(record, alias)
        if isinstance(value, str) and value.strip():
            parts.append(value.strip())
    return "\n".join(parts)


def dedup_key(email: Any, name: Any) -> str:
    """Identity key used to collapse the same person across jobs."""
    def _norm(value: Any) -> str:
        return str(value).strip().lower() if value is not None else ""

    return f"{_norm(email)}-{_norm(name)}"


def parse_status(value: Any) -> ApplicationStatus:
    """Read a backend status; anything unrecognized counts as pending."""
    if isinstance(value, ApplicationStatus):
        return value
    if isinstance(value, str):
        try:
            return ApplicationStatus(value.strip().lower())
        except ValueError:
            return ApplicationStatus.PENDING
    return ApplicationStatus.PENDING


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse ISO strings, epoch numbers and serialized Firestore timestamps."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, Mapping):
        seconds = value.get("_seconds", value.get("seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return _from_epoch(seconds)
    return None


def _from_epoch(value: float) -> Optional[datetime]:
    try:
        # Millisecond epochs are what JavaScript clients send
        seconds = value / 1000 if value > 1e11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return None


def job_from_record(record: Any) -> Job:
    """Build a Job from a backend job record."""
    if not isinstance(record, Mapping):
        record = {}
    return Job(
        id=text_field(record, ("id", "jobId")),
        title=text_field(record, ("title",)),
        skills=normalize_skills(resolve_field(record, JOB_SKILL_ALIASES)),
        recruiter_id=text_field(record, ("recruiterId",)),
        status=text_field(record, ("status",)).lower() or "published",
        applicants_count=int_field(record, ("applicantsCount",)),
    )


def candidate_from_record(record: Any) -> Candidate:
    """Build a Candidate from an applicant record, tolerating every known alias."""
    if not isinstance(record, Mapping):
        record = {}
    evidence = evidence_field(record)
    return Candidate(
        id=text_field(record, CANDIDATE_ID_ALIASES) or text_field(record, ("id",)),
        name=text_field(record, NAME_ALIASES),
        email=text_field(record, EMAIL_ALIASES),
        phone=text_field(record, PHONE_ALIASES),
        location=text_field(record, LOCATION_ALIASES),
        education=text_field(record, EDUCATION_ALIASES),
        experience_years=max(0, int_field(record, EXPERIENCE_ALIASES)),
        expected_salary=max(0, int_field(record, SALARY_ALIASES)),
        skills=normalize_skills(resolve_field(record, CANDIDATE_SKILL_ALIASES)),
        resume_text=evidence or None,
        resume_url=text_field(record, RESUME_URL_ALIASES),
        portfolio_url=text_field(record, PORTFOLIO_ALIASES),
        linkedin=text_field(record, LINKEDIN_ALIASES),
        github=text_field(record, GITHUB_ALIASES),
    )
