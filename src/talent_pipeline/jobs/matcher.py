"""Match scoring between job postings and applicants."""

import math
from typing import Any, Iterable, List, Mapping, Optional

from talent_pipeline.core.models import Application, Candidate, Job
from talent_pipeline.jobs.normalizer import (
    CREATED_AT_ALIASES,
    SCORE_ALIASES,
    candidate_from_record,
    parse_status,
    parse_timestamp,
    resolve_field,
    text_field,
)
from talent_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def clamp_score(value: int) -> int:
    return max(0, min(100, value))


def normalize_explicit_score(value: Any) -> Optional[int]:
    """
    Normalize a score supplied by the backend.

    Fractions (<= 1) are read as ratios and scaled to percentages, anything
    else is already a percentage. The result is clamped to [0, 100].

    Returns:
        Integer percentage, or None when the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if isinstance(value, int):
        return clamp_score(value * 100 if value <= 1 else value)
    if not isinstance(value, float):
        return None
    if math.isnan(value):
        return None

    scaled = value * 100 if value <= 1 else value
    if math.isinf(scaled):
        return 100 if scaled > 0 else 0
    return clamp_score(round_half_up(scaled))


def explicit_score(record: Any) -> Optional[int]:
    """First numeric score among the known aliases, normalized."""
    if not isinstance(record, Mapping):
        return None
    for alias in SCORE_ALIASES:
        score = normalize_explicit_score(resolve_field(record, (alias,)))
        if score is not None:
            return score
    return None


def score_skills(job_skills: Iterable[str], evidence: Optional[str]) -> int:
    """
    Percentage of job skills found in the evidence text.

    Matching is case-insensitive substring containment with no word
    boundaries, so "go" also matches "google". Each distinct job skill is
    counted at most once.
    """
    skills = list(dict.fromkeys(s.lower() for s in job_skills if s))
    if not skills or not evidence or not evidence.strip():
        return 0

    text = evidence.lower()
    hits = sum(1 for skill in skills if skill in text)
    return clamp_score(round_half_up(hits / len(skills) * 100))


def evidence_text(candidate: Candidate) -> str:
    """Candidate skills followed by any free-text CV evidence."""
    parts: List[str] = []
    if candidate.skills:
        parts.append(", ".join(candidate.skills))
    if candidate.resume_text:
        parts.append(candidate.resume_text)
    return "\n".join(parts)


class MatchScorer:
    """Scores how well applicants fit a job posting."""

    def __init__(self):
        self.logger = logger.bind(component="match_scorer")

    def score(self, job: Job, candidate: Candidate, explicit: Any = None) -> int:
        """
        Score a candidate against a job.

        Args:
            job: Job with normalized required skills
            candidate: Candidate with skills and optional CV text
            explicit: Score supplied by the backend, if any

        Returns:
            Integer match percentage in [0, 100]
        """
        normalized = normalize_explicit_score(explicit)
        if normalized is not None:
            return normalized
        return score_skills(job.skills, evidence_text(candidate))

    def score_record(self, job: Job, record: Mapping[str, Any]) -> int:
        """Score a raw applicant record against a job."""
        explicit = explicit_score(record)
        if explicit is not None:
            return explicit
        return score_skills(job.skills, evidence_text(candidate_from_record(record)))

    def build_application(self, job: Job, record: Any) -> Application:
        """Turn a raw applicant record into a scored Application."""
        if not isinstance(record, Mapping):
            self.logger.warning("Defaulting malformed applicant record", job_id=job.id)
            record = {}

        candidate = candidate_from_record(record)
        explicit = explicit_score(record)
        match_score = explicit if explicit is not None else score_skills(job.skills, evidence_text(candidate))

        return Application(
            id=text_field(record, ("id", "applicationId")),
            job_id=text_field(record, ("jobId",)) or job.id,
            candidate_id=candidate.id,
            status=parse_status(record.get("status")),
            match_score=match_score,
            created_at=parse_timestamp(resolve_field(record, CREATED_AT_ALIASES)),
            candidate=candidate,
        )

    def build_applications(self, job: Job, records: Iterable[Any]) -> List[Application]:
        """Score every applicant record of one job."""
        applications = [self.build_application(job, record) for record in records]

        self.logger.debug(
            "Scored applicants",
            job_id=job.id,
            applicant_count=len(applications),
            skill_count=len(job.skills)
        )

        return applications
