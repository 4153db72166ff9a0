"""Data-transfer types mirroring the cron-job.org REST API schema.

Attribute names are snake_case; the wire format is camelCase. Models accept
both spellings on input and always emit camelCase via ``to_wire``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from cronjoborg.times import Microseconds, Milliseconds, Seconds

DEFAULT_TIMEZONE = "Europe/Paris"
EVERY = -1

_SCHEDULE_LIST_FIELDS = ("hours", "mdays", "minutes", "months", "wdays")


def empty_if_null(value: Any) -> Any:
    """JSON null decodes to an empty list, as for a missing key."""
    return [] if value is None else value


class JobStatus(IntEnum):
    UNKNOWN = 0
    OK = 1
    FAILED_DNS = 2
    FAILED_COULD_NOT_CONNECT = 3
    FAILED_HTTP_ERROR = 4
    FAILED_TIMEOUT = 5
    FAILED_TOO_MUCH_RESPONSE_DATA = 6
    FAILED_INVALID_URL = 7
    FAILED_INTERNAL_ERROR = 8
    FAILED_UNKNOWN_REASON = 9

    @property
    def is_failure(self) -> bool:
        return self >= JobStatus.FAILED_DNS


class JobType(IntEnum):
    DEFAULT = 0
    MONITORING = 1


class RequestMethod(IntEnum):
    GET = 0
    POST = 1
    OPTIONS = 2
    HEAD = 3
    PUT = 4
    DELETE = 5
    TRACE = 6
    CONNECT = 7
    PATCH = 8


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Schedule(WireModel):
    """Recurrence rule; ``[-1]`` in any list means every unit.

    Empty fields are filled with defaults only in the serialized form.
    """

    timezone: str = ""
    hours: list[int] = Field(default_factory=list)
    mdays: list[int] = Field(default_factory=list)
    minutes: list[int] = Field(default_factory=list)
    months: list[int] = Field(default_factory=list)
    wdays: list[int] = Field(default_factory=list)

    _null_lists = field_validator(*_SCHEDULE_LIST_FIELDS, mode="before")(empty_if_null)

    @model_serializer(mode="wrap")
    def _fill_defaults(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if not data.get("timezone"):
            data["timezone"] = DEFAULT_TIMEZONE
        for name in _SCHEDULE_LIST_FIELDS:
            if not data.get(name):
                data[name] = [EVERY]
        return data


class Job(WireModel):
    job_id: int = 0
    enabled: bool = False
    title: str = ""
    save_responses: bool = False
    url: str = ""
    last_status: JobStatus = JobStatus.UNKNOWN
    last_duration: Milliseconds = Milliseconds(0)
    last_execution: Seconds = Seconds(0)
    # null when the service has no prediction
    next_execution: Seconds | None = None
    type: JobType = JobType.DEFAULT
    request_timeout: Seconds = Seconds(0)
    schedule: Schedule = Field(default_factory=Schedule)
    request_method: RequestMethod = RequestMethod.GET


class JobAuth(WireModel):
    enable: bool = False
    user: str = ""
    password: str = ""


class JobNotificationSettings(WireModel):
    on_failure: bool = False
    on_success: bool = False
    on_disable: bool = False


class JobExtendedData(WireModel):
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""


_DETAIL_KEYS = {
    "auth": "auth",
    "notification": "notification",
    "extendedData": "extendedData",
    "extended_data": "extendedData",
}


class DetailedJob(WireModel):
    """A Job plus its auth, notification and extended request settings.

    The remote service sends all of these as one flat object; the Job's keys
    are split out into ``job`` on decode and merged back on encode.
    """

    job: Job = Field(default_factory=Job)
    auth: JobAuth = Field(default_factory=JobAuth)
    notification: JobNotificationSettings = Field(default_factory=JobNotificationSettings)
    extended_data: JobExtendedData = Field(default_factory=JobExtendedData)

    @model_validator(mode="before")
    @classmethod
    def _split_flat_job(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "job" in data:
            return data

        details: dict[str, Any] = {}
        job_fields: dict[str, Any] = {}
        for key, value in data.items():
            if key in _DETAIL_KEYS:
                details[_DETAIL_KEYS[key]] = value
            else:
                job_fields[key] = value
        return {"job": job_fields, **details}

    @model_serializer(mode="wrap")
    def _flatten_job(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        job_fields = data.pop("job", {})
        return {**job_fields, **data}


class HistoryItemStats(WireModel):
    """curl-style timings measured from transfer start, in microseconds."""

    name_lookup: Microseconds = Microseconds(0)
    connect: Microseconds = Microseconds(0)
    # 0 when the target is not https
    app_connect: Microseconds = Microseconds(0)
    pre_transfer: Microseconds = Microseconds(0)
    start_transfer: Microseconds = Microseconds(0)
    total: Microseconds = Microseconds(0)


class HistoryItem(WireModel):
    job_id: int = 0
    identifier: str = ""
    date: Seconds = Seconds(0)
    date_planned: Seconds = Seconds(0)
    jitter: Milliseconds = Milliseconds(0)
    url: str = ""
    duration: Milliseconds = Milliseconds(0)
    status: JobStatus = JobStatus.UNKNOWN
    status_text: str = ""
    http_status: int = 0
    headers: str | None = None
    body: str | None = None
    stats: HistoryItemStats = Field(default_factory=HistoryItemStats)


class JobHistory(WireModel):
    history: HistoryItem = Field(default_factory=HistoryItem)
    predictions: list[Seconds] = Field(default_factory=list)

    _null_predictions = field_validator("predictions", mode="before")(empty_if_null)
