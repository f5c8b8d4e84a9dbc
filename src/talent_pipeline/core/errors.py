"""Exception hierarchy for the matching and lifecycle engine."""

from typing import Optional


class TalentPipelineError(Exception):
    """Base class for all engine errors."""


class RecruiterAPIError(TalentPipelineError):
    """The recruiter backend was unreachable or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class InvalidTransitionError(TalentPipelineError, ValueError):
    """An action is not allowed from the application's current status."""

    def __init__(self, status: str, action: str):
        super().__init__(f"Cannot {action} an application that is {status}")
        self.status = status
        self.action = action


class ApplicationNotFoundError(TalentPipelineError, KeyError):
    """The board holds no application with the requested id."""

    def __init__(self, application_id: str):
        super().__init__(application_id)
        self.application_id = application_id

    def __str__(self) -> str:
        return f"Application not found: {self.application_id}"
