"""
Talent Pipeline: candidate matching and application lifecycle for recruiters.

This package scores applicants against job postings, moves applications
through the shortlist/reject/hire lifecycle with optimistic updates against
the recruiter backend, and ranks the strongest candidates across a
recruiter's jobs for the dashboard.
"""

__version__ = "0.1.0"

from talent_pipeline.core.errors import (
    TalentPipelineError,
    RecruiterAPIError,
    InvalidTransitionError,
    ApplicationNotFoundError,
)
from talent_pipeline.jobs.matcher import MatchScorer
from talent_pipeline.jobs.application import ApplicantBoard
from talent_pipeline.jobs.aggregator import CandidateAggregator
from talent_pipeline.jobs.projector import StatusProjector
from talent_pipeline.api.client import RecruiterAPIClient

__all__ = [
    "TalentPipelineError",
    "RecruiterAPIError",
    "InvalidTransitionError",
    "ApplicationNotFoundError",
    "MatchScorer",
    "ApplicantBoard",
    "CandidateAggregator",
    "StatusProjector",
    "RecruiterAPIClient",
]
