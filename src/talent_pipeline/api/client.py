"""Async client for the recruiter backend."""

from typing import Any, Dict, List, Optional, Union

import httpx

from talent_pipeline.config import settings
from talent_pipeline.core.errors import RecruiterAPIError
from talent_pipeline.core.models import ApplicationAction
from talent_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


class RecruiterAPIClient:
    """Thin wrapper over the recruiter REST endpoints.

    Responses are returned as raw records; normalization happens in the
    jobs package. Any transport failure or non-success status is raised as
    RecruiterAPIError. Nothing is retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        api_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        token = api_token if api_token is not None else settings.api_token

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.client = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            headers=headers,
            timeout=timeout if timeout is not None else settings.api_timeout,
            transport=transport,
        )

        self.logger = logger.bind(component="recruiter_api")

    async def __aenter__(self) -> "RecruiterAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            self.logger.error("Recruiter API unreachable", method=method, path=path, error=str(e))
            raise RecruiterAPIError(f"Network error: {e}", url=path) from e

        if response.is_error:
            message = _error_message(response)
            self.logger.warning(
                "Recruiter API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message
            )
            raise RecruiterAPIError(message, status_code=response.status_code, url=path)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            self.logger.warning("Recruiter API returned non-JSON body", method=method, path=path)
            return None

    async def list_jobs(self, recruiter_id: str) -> List[Dict[str, Any]]:
        """Fetch every job owned by a recruiter."""
        data = await self._request("GET", "/recruiter/jobs", params={"recruiterId": recruiter_id})
        return _as_list(data)

    async def get_job(self, job_id: str) -> Dict[str, Any]:
        """Fetch one job, published or draft."""
        data = await self._request("GET", f"/recruiter/jobs/{job_id}")
        return data if isinstance(data, dict) else {}

    async def list_applicants(self, job_id: str) -> List[Dict[str, Any]]:
        """Fetch the applicant records of one job."""
        data = await self._request("GET", f"/recruiter/jobs/{job_id}/applicants")
        return _as_list(data)

    async def update_applicant_status(
        self,
        job_id: str,
        applicant_id: str,
        action: Union[ApplicationAction, str]
    ) -> None:
        """Send a shortlist, reject, hire or undo action to the backend."""
        action_value = ApplicationAction(action).value
        await self._request("PUT", f"/recruiter/jobs/{job_id}/applicants/{applicant_id}/{action_value}")

        self.logger.info(
            "Applicant status updated",
            job_id=job_id,
            applicant_id=applicant_id,
            action=action_value
        )

    async def get_dashboard(self, recruiter_id: str) -> Dict[str, Any]:
        """Fetch the recruiter dashboard payload."""
        data = await self._request("GET", f"/recruiter/recruiter/{recruiter_id}/dashboard")
        return data if isinstance(data, dict) else {}

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.aclose()
        self.logger.debug("Recruiter API client closed")


def _as_list(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status {response.status_code}"
