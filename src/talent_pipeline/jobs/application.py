"""Application lifecycle: status transitions and the per-job applicant board."""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from talent_pipeline.config import settings
from talent_pipeline.core.errors import (
    ApplicationNotFoundError,
    InvalidTransitionError,
    RecruiterAPIError,
)
from talent_pipeline.core.models import Application, ApplicationAction, ApplicationStatus, Job
from talent_pipeline.jobs.matcher import MatchScorer
from talent_pipeline.utils.logging import get_logger, log_transition

logger = get_logger(__name__)


TRANSITIONS: Dict[ApplicationStatus, Dict[ApplicationAction, ApplicationStatus]] = {
    ApplicationStatus.PENDING: {
        ApplicationAction.SHORTLIST: ApplicationStatus.SHORTLISTED,
        ApplicationAction.REJECT: ApplicationStatus.REJECTED,
    },
    ApplicationStatus.SHORTLISTED: {
        ApplicationAction.REJECT: ApplicationStatus.REJECTED,
        ApplicationAction.HIRE: ApplicationStatus.HIRED,
    },
    ApplicationStatus.REJECTED: {
        ApplicationAction.UNDO: ApplicationStatus.PENDING,
    },
    ApplicationStatus.HIRED: {},
}


def allowed_actions(status: Union[ApplicationStatus, str]) -> List[ApplicationAction]:
    """Actions available from a status, in graph order."""
    return list(TRANSITIONS[ApplicationStatus(status)])


def can_transition(status: Union[ApplicationStatus, str], action: Union[ApplicationAction, str]) -> bool:
    return ApplicationAction(action) in TRANSITIONS[ApplicationStatus(status)]


def next_status(
    status: Union[ApplicationStatus, str],
    action: Union[ApplicationAction, str]
) -> ApplicationStatus:
    """
    Resolve the status an action leads to.

    Raises:
        InvalidTransitionError: if the action is not defined from this status
    """
    status = ApplicationStatus(status)
    action = ApplicationAction(action)
    try:
        return TRANSITIONS[status][action]
    except KeyError:
        raise InvalidTransitionError(status.value, action.value) from None


class ApplicantBoard:
    """Applicants of one job with optimistic, reconciled status changes.

    Transitions show up locally before the backend confirms them. A failed
    write rolls the status back and re-raises. Every mutation and every fetch
    takes a number from one increasing sequence; a fetch numbered before the
    latest mutation (or before an already-applied fetch) is stale and dropped.
    """

    def __init__(
        self,
        job: Job,
        client: Any,
        scorer: Optional[MatchScorer] = None,
        refresh_after_write: Optional[bool] = None,
    ):
        self.job = job
        self.client = client
        self.scorer = scorer or MatchScorer()
        self.refresh_after_write = (
            settings.refresh_after_write if refresh_after_write is None else refresh_after_write
        )

        self._applications: Dict[str, Application] = {}
        self._inflight: Dict[str, int] = {}
        self._sequence = 0
        self._last_mutation_seq = 0
        self._last_applied_fetch_seq = 0
        self._background: Set[asyncio.Task] = set()
        self._closed = False

        self.logger = logger.bind(component="applicant_board", job_id=job.id)

    @property
    def applications(self) -> List[Application]:
        return list(self._applications.values())

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, application_id: str) -> Application:
        try:
            return self._applications[application_id]
        except KeyError:
            raise ApplicationNotFoundError(application_id) from None

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    async def refresh(self) -> bool:
        """
        Re-fetch the job's applicants and merge them into local state.

        Returns:
            True if the response was applied, False if it was stale or the
            board was closed while the request was in flight
        """
        seq = self._next_sequence()
        records = await self.client.list_applicants(self.job.id)

        if self._closed:
            self.logger.debug("Discarding refresh for closed board", sequence=seq)
            return False

        if seq < self._last_mutation_seq or seq < self._last_applied_fetch_seq:
            self.logger.info(
                "Discarding stale applicant refresh",
                sequence=seq,
                last_mutation=self._last_mutation_seq,
                last_fetch=self._last_applied_fetch_seq
            )
            return False

        self._merge(records)
        self._last_applied_fetch_seq = seq
        return True

    def _merge(self, records: List[Mapping[str, Any]]) -> None:
        merged: Dict[str, Application] = {}
        for application in self.scorer.build_applications(self.job, records):
            if not application.id:
                continue
            local = self._applications.get(application.id)
            if local is not None and self._inflight.get(application.id):
                # Unconfirmed local status wins over the server copy
                application.status = local.status
                application.pending_write = True
            merged[application.id] = application

        self._applications = merged
        self.logger.debug("Applicants reconciled", applicant_count=len(merged))

    async def apply(self, application_id: str, action: Union[ApplicationAction, str]) -> Application:
        """
        Apply a lifecycle action optimistically and persist it.

        Args:
            application_id: Application to change
            action: shortlist, reject, hire or undo

        Returns:
            The application with its new status

        Raises:
            InvalidTransitionError: action not allowed from the current status
            ApplicationNotFoundError: unknown application id
            RecruiterAPIError: the backend write failed (status rolled back)
        """
        action = ApplicationAction(action)
        application = self.get(application_id)
        previous = application.status
        target = next_status(previous, action)

        self._last_mutation_seq = self._next_sequence()
        application.status = target
        application.pending_write = True
        self._inflight[application_id] = self._inflight.get(application_id, 0) + 1

        context = log_transition(self.job.id, application_id, action.value, previous=previous.value, target=target.value)
        self.logger.info("Applying application transition", **context)

        try:
            await self.client.update_applicant_status(self.job.id, application_id, action)
        except RecruiterAPIError as e:
            current = self._applications.get(application_id)
            self._finish_write(application_id)
            if current is not None and current.status == target:
                current.status = previous
            self.logger.warning("Transition rolled back", error=str(e), **context)
            raise

        self._finish_write(application_id)

        if self.refresh_after_write:
            self._schedule_refresh()

        return self._applications.get(application_id, application)

    def _finish_write(self, application_id: str) -> None:
        remaining = self._inflight.get(application_id, 0) - 1
        if remaining > 0:
            self._inflight[application_id] = remaining
            return
        self._inflight.pop(application_id, None)
        current = self._applications.get(application_id)
        if current is not None:
            current.pending_write = False

    async def shortlist(self, application_id: str) -> Application:
        return await self.apply(application_id, ApplicationAction.SHORTLIST)

    async def reject(self, application_id: str) -> Application:
        return await self.apply(application_id, ApplicationAction.REJECT)

    async def hire(self, application_id: str) -> Application:
        return await self.apply(application_id, ApplicationAction.HIRE)

    async def undo(self, application_id: str) -> Application:
        return await self.apply(application_id, ApplicationAction.UNDO)

    def _schedule_refresh(self) -> None:
        if self._closed:
            return
        task = asyncio.create_task(self._background_refresh())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _background_refresh(self) -> None:
        try:
            await self.refresh()
        except RecruiterAPIError as e:
            # Best effort; the optimistic state stays until the next refresh
            self.logger.warning("Background refresh failed", error=str(e))

    async def wait_for_background(self) -> None:
        """Wait until every scheduled refresh has finished."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def close(self) -> None:
        """Stop applying responses and cancel background refreshes."""
        self._closed = True
        tasks = list(self._background)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.logger.debug("Applicant board closed", cancelled=len(tasks))
