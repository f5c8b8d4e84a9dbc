"""Candidate matching and application lifecycle engine."""

from .normalizer import (
    normalize_skills,
    dedup_key,
    job_from_record,
    candidate_from_record
)
from .matcher import (
    MatchScorer,
    score_skills,
    normalize_explicit_score
)
from .application import (
    ApplicantBoard,
    TRANSITIONS,
    allowed_actions,
    can_transition,
    next_status
)
from .aggregator import (
    CandidateAggregator,
    rank_candidates
)
from .projector import (
    StatusProjector,
    StatusView
)
from .insights import (
    dashboard_summary,
    company_insights
)

__all__ = [
    "normalize_skills",
    "dedup_key",
    "job_from_record",
    "candidate_from_record",
    "MatchScorer",
    "score_skills",
    "normalize_explicit_score",
    "ApplicantBoard",
    "TRANSITIONS",
    "allowed_actions",
    "can_transition",
    "next_status",
    "CandidateAggregator",
    "rank_candidates",
    "StatusProjector",
    "StatusView",
    "dashboard_summary",
    "company_insights"
]
