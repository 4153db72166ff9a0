from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, Callable

from cronjoborg.client import ClientConfig, CronJobClient, CronJobClientError
from cronjoborg.config import Settings, get_settings
from cronjoborg.models import DetailedJob, Job, RequestMethod, Schedule

logger = logging.getLogger(__name__)

Handler = Callable[[CronJobClient, argparse.Namespace], Any]


def _int_list(value: str) -> list[int]:
    try:
        return [int(item) for item in value.split(",") if item.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected comma separated integers, got {value!r}"
        ) from exc


def _list_jobs(client: CronJobClient, args: argparse.Namespace) -> list[dict[str, Any]]:
    return [job.to_wire() for job in client.list_jobs()]


def _get_job(client: CronJobClient, args: argparse.Namespace) -> dict[str, Any]:
    return client.get_job(args.job_id).to_wire()


def _create_job(client: CronJobClient, args: argparse.Namespace) -> dict[str, int]:
    job = DetailedJob(
        job=Job(
            url=args.url,
            title=args.title,
            enabled=args.enabled,
            save_responses=args.save_responses,
            request_timeout=args.request_timeout,
            request_method=RequestMethod[args.method],
            schedule=Schedule(
                timezone=args.timezone,
                hours=args.hours,
                mdays=args.mdays,
                minutes=args.minutes,
                months=args.months,
                wdays=args.wdays,
            ),
        )
    )
    job_id = client.create_job(job)
    logger.info("created job %s for %s", job_id, args.url)
    return {"jobId": job_id}


def _update_job(client: CronJobClient, args: argparse.Namespace) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    if args.title is not None:
        updates["title"] = args.title
    if args.url is not None:
        updates["url"] = args.url
    if args.enabled is not None:
        updates["enabled"] = args.enabled
    if not updates:
        raise ValueError("update requires at least one of --title, --url, --enable, --disable")

    current = client.get_job(args.job_id)
    changed = current.model_copy(update={"job": current.job.model_copy(update=updates)})
    client.update_job(args.job_id, changed)
    return {"jobId": args.job_id, "updated": sorted(updates)}


def _delete_job(client: CronJobClient, args: argparse.Namespace) -> dict[str, Any]:
    client.delete_job(args.job_id)
    return {"jobId": args.job_id, "deleted": True}


def _job_history(client: CronJobClient, args: argparse.Namespace) -> dict[str, Any]:
    return client.get_job_history(args.job_id).to_wire()


def _history_details(client: CronJobClient, args: argparse.Namespace) -> dict[str, Any]:
    return client.get_history_details(args.job_id, args.history_id).to_wire()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cronjob",
        description="Manage cron-job.org jobs (API key from CRONJOB_API_KEY)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List all jobs")
    list_parser.set_defaults(handler=_list_jobs)

    get_parser = commands.add_parser("get", help="Show job details")
    get_parser.add_argument("job_id", type=int)
    get_parser.set_defaults(handler=_get_job)

    create_parser = commands.add_parser("create", help="Create a job")
    create_parser.add_argument("--url", required=True)
    create_parser.add_argument("--title", default="")
    create_parser.add_argument("--enabled", action="store_true")
    create_parser.add_argument("--save-responses", action="store_true")
    create_parser.add_argument("--request-timeout", type=int, default=0, help="Seconds, 0 for service default")
    create_parser.add_argument(
        "--method",
        type=str.upper,
        choices=[method.name for method in RequestMethod],
        default=RequestMethod.GET.name,
    )
    create_parser.add_argument("--timezone", default="")
    for name in ("hours", "mdays", "minutes", "months", "wdays"):
        create_parser.add_argument(
            f"--{name}",
            type=_int_list,
            default=[],
            help="Comma separated values, omit for every",
        )
    create_parser.set_defaults(handler=_create_job)

    update_parser = commands.add_parser("update", help="Change title, url or enabled state")
    update_parser.add_argument("job_id", type=int)
    update_parser.add_argument("--title", default=None)
    update_parser.add_argument("--url", default=None)
    enabled_group = update_parser.add_mutually_exclusive_group()
    enabled_group.add_argument("--enable", dest="enabled", action="store_true", default=None)
    enabled_group.add_argument("--disable", dest="enabled", action="store_false", default=None)
    update_parser.set_defaults(handler=_update_job)

    delete_parser = commands.add_parser("delete", help="Delete a job")
    delete_parser.add_argument("job_id", type=int)
    delete_parser.set_defaults(handler=_delete_job)

    history_parser = commands.add_parser("history", help="Show execution history")
    history_parser.add_argument("job_id", type=int)
    history_parser.set_defaults(handler=_job_history)

    detail_parser = commands.add_parser("history-detail", help="Show one history item")
    detail_parser.add_argument("job_id", type=int)
    detail_parser.add_argument("history_id")
    detail_parser.set_defaults(handler=_history_details)

    return parser


def _build_client(settings: Settings) -> CronJobClient:
    return CronJobClient(
        settings.api_key,
        ClientConfig(timeout_seconds=settings.timeout_seconds),
    )


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    handler: Handler = args.handler
    try:
        settings = get_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if not settings.api_key:
            raise ValueError("CRONJOB_API_KEY is not set")
        with _build_client(settings) as client:
            result = handler(client, args)
    except (CronJobClientError, ValueError) as exc:
        print(f"[cronjob] failed: {exc}", file=sys.stderr, flush=True)
        raise SystemExit(1) from exc

    print(json.dumps(result, indent=2), flush=True)


if __name__ == "__main__":
    main()
