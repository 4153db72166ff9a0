from __future__ import annotations

from dataclasses import dataclass
import logging
import posixpath
from types import TracebackType
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator

from cronjoborg.models import (
    DetailedJob,
    HistoryItem,
    Job,
    JobHistory,
    WireModel,
    empty_if_null,
)

API_URL = "https://api.cron-job.org"
DEFAULT_TIMEOUT_SECONDS = 5.0

logger = logging.getLogger(__name__)

_ResponseT = TypeVar("_ResponseT", bound=BaseModel)


class CronJobClientError(RuntimeError):
    pass


class CronJobTransportError(CronJobClientError):
    pass


class CronJobDecodeError(CronJobClientError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    transport: httpx.BaseTransport | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


class _ListJobsResponse(WireModel):
    jobs: list[Job] = Field(default_factory=list)
    some_failed: bool = Field(default=False, alias="some_failed")

    _null_jobs = field_validator("jobs", mode="before")(empty_if_null)


class _JobDetailsResponse(WireModel):
    job_details: DetailedJob = Field(default_factory=DetailedJob)


class _CreateJobResponse(WireModel):
    job_id: int = 0


class _HistoryDetailsResponse(WireModel):
    job_history_details: HistoryItem = Field(default_factory=HistoryItem)


class CronJobClient:
    """Blocking client for the cron-job.org REST API.

    Every method issues exactly one request. HTTP status codes are not
    inspected: an error reply from the service either fails to decode or
    decodes to default values.
    """

    def __init__(self, api_key: str, config: ClientConfig | None = None) -> None:
        config = config or ClientConfig()
        self._api_key = api_key
        self._http = httpx.Client(
            transport=config.transport,
            timeout=config.timeout_seconds,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CronJobClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    # https://docs.cron-job.org/rest-api.html#listing-cron-jobs
    def list_jobs(self) -> list[Job]:
        request = self.build_request("GET", "jobs")
        payload = self._call(request, _ListJobsResponse)
        if payload.some_failed:
            logger.warning("list_jobs: service reported that some jobs failed to load")
        return payload.jobs

    # https://docs.cron-job.org/rest-api.html#retrieving-cron-job-details
    def get_job(self, job_id: int) -> DetailedJob:
        request = self.build_request("GET", "jobs", job_id)
        return self._call(request, _JobDetailsResponse).job_details

    # https://docs.cron-job.org/rest-api.html#creating-a-cron-job
    def create_job(self, job: DetailedJob) -> int:
        request = self.build_request("PUT", "jobs", body={"job": job.to_wire()})
        return self._call(request, _CreateJobResponse).job_id

    # https://docs.cron-job.org/rest-api.html#updating-a-cron-job
    def update_job(self, job_id: int, job: DetailedJob) -> None:
        request = self.build_request("PATCH", "jobs", job_id, body={"job": job.to_wire()})
        self._send(request)

    # https://docs.cron-job.org/rest-api.html#deleting-a-cron-job
    def delete_job(self, job_id: int) -> None:
        request = self.build_request("DELETE", "jobs", job_id)
        self._send(request)

    # https://docs.cron-job.org/rest-api.html#retrieving-the-job-execution-history
    def get_job_history(self, job_id: int) -> JobHistory:
        request = self.build_request("GET", "jobs", job_id, "history")
        return self._call(request, JobHistory)

    # https://docs.cron-job.org/rest-api.html#retrieving-job-execution-history-item-details
    def get_history_details(self, job_id: int, history_id: int | str) -> HistoryItem:
        request = self.build_request("GET", "jobs", job_id, "history", history_id)
        return self._call(request, _HistoryDetailsResponse).job_history_details

    def build_request(
        self,
        method: str,
        *path_parts: object,
        body: dict[str, Any] | None = None,
    ) -> httpx.Request:
        try:
            base_url = httpx.URL(API_URL)
        except httpx.InvalidURL as exc:
            raise CronJobClientError(f"Invalid base URL {API_URL!r}: {exc}") from exc

        segments = [base_url.path, *(str(part) for part in path_parts)]
        # every segment stays under the base path, even with a leading "/"
        path = posixpath.normpath("/" + "/".join(s.strip("/") for s in segments if s.strip("/")))

        return self._http.build_request(
            method,
            base_url.copy_with(path=path),
            headers=self._headers(),
            json=body,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _send(self, request: httpx.Request) -> httpx.Response:
        logger.debug("-> %s %s", request.method, request.url)
        try:
            response = self._http.send(request)
        except httpx.HTTPError as exc:
            raise CronJobTransportError(str(exc)) from exc

        # body is already read in full by send()
        response.close()
        logger.debug("<- %s %s %s", request.method, request.url, response.status_code)
        return response

    def _call(self, request: httpx.Request, response_model: type[_ResponseT]) -> _ResponseT:
        response = self._send(request)
        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise CronJobDecodeError(
                f"Invalid {request.method} {request.url.path} payload: {exc}"
            ) from exc
