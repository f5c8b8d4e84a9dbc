"""Tabbed status views over a job's applications."""

from enum import Enum
from typing import Dict, Iterable, List, Set, Union

from talent_pipeline.core.models import Application, ApplicationStatus


class StatusView(str, Enum):
    """Tabs shown for a selected job."""
    ALL = "All"
    SHORTLISTED = "Shortlisted"
    HIRED = "Hired"
    REJECTED = "Rejected"


VIEW_STATUS: Dict[StatusView, ApplicationStatus] = {
    # "All" lists only applications nobody has acted on yet
    StatusView.ALL: ApplicationStatus.PENDING,
    StatusView.SHORTLISTED: ApplicationStatus.SHORTLISTED,
    StatusView.HIRED: ApplicationStatus.HIRED,
    StatusView.REJECTED: ApplicationStatus.REJECTED,
}


class StatusProjector:
    """Filters applications per tab, remembering session-only reject dismissals."""

    def __init__(self):
        self._dismissed: Set[str] = set()

    @property
    def dismissed(self) -> Set[str]:
        return set(self._dismissed)

    def dismiss(self, application_id: str) -> None:
        """Hide a rejected application from the Rejected tab for this session."""
        self._dismissed.add(application_id)

    def restore(self, application_id: str) -> None:
        self._dismissed.discard(application_id)

    def project(
        self,
        applications: Iterable[Application],
        view: Union[StatusView, str]
    ) -> List[Application]:
        view = StatusView(view)
        status = VIEW_STATUS[view]
        selected = [a for a in applications if a.status == status]
        if view is StatusView.REJECTED:
            selected = [a for a in selected if a.id not in self._dismissed]
        return selected

    def counts(self, applications: Iterable[Application]) -> Dict[StatusView, int]:
        """Number of applications behind each tab."""
        applications = list(applications)
        return {view: len(self.project(applications, view)) for view in StatusView}
