from cronjoborg.client import (
    API_URL,
    ClientConfig,
    CronJobClient,
    CronJobClientError,
    CronJobDecodeError,
    CronJobTransportError,
)
from cronjoborg.models import (
    DEFAULT_TIMEZONE,
    EVERY,
    DetailedJob,
    HistoryItem,
    HistoryItemStats,
    Job,
    JobAuth,
    JobExtendedData,
    JobHistory,
    JobNotificationSettings,
    JobStatus,
    JobType,
    RequestMethod,
    Schedule,
)
from cronjoborg.times import Microseconds, Milliseconds, Seconds

__all__ = [
    "API_URL",
    "DEFAULT_TIMEZONE",
    "EVERY",
    "ClientConfig",
    "CronJobClient",
    "CronJobClientError",
    "CronJobDecodeError",
    "CronJobTransportError",
    "DetailedJob",
    "HistoryItem",
    "HistoryItemStats",
    "Job",
    "JobAuth",
    "JobExtendedData",
    "JobHistory",
    "JobNotificationSettings",
    "JobStatus",
    "JobType",
    "Microseconds",
    "Milliseconds",
    "RequestMethod",
    "Schedule",
    "Seconds",
]
