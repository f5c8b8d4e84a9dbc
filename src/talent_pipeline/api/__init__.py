"""Client for the recruiter backend."""

from .client import RecruiterAPIClient

__all__ = ["RecruiterAPIClient"]
