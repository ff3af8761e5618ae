"""Cron scheduling of the threshold and force restart workflows."""
import logging
import re
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from railway_restarter.config import Settings
from railway_restarter.domain.services.restart_service import RestartService

logger = logging.getLogger(__name__)

THRESHOLD_JOB_ID = "threshold-check"
FORCE_JOB_ID = "force-restart"

_NUMERIC_WEEKDAY = re.compile(r"^(\*|\d+)(?:-(\d+))?(?:/(\d+))?$")


def convert_day_of_week(field: str) -> str:
    """Translate a crontab day-of-week field (0 and 7 are Sunday) to APScheduler numbering (0 is Monday).

    Numeric values, ranges and steps are expanded to explicit days; names such
    as ``mon-fri`` already mean the same thing in both and pass through.
    """
    if field == "*":
        return "*"

    days: List[int] = []
    names: List[str] = []
    for part in field.split(","):
        match = _NUMERIC_WEEKDAY.match(part)
        if match is None:
            names.append(part)
            continue

        start, end, step = match.groups()
        if start == "*":
            first, last = 0, 6
        else:
            first = int(start)
            last = int(end) if end else (7 if step else first)
        if last > 7 or first > last:
            raise ValueError(f"Invalid day of week {part!r}: values must be 0-7 in ascending order")

        for day in range(first, last + 1, int(step or 1)):
            converted = (day + 6) % 7
            if converted not in days:
                days.append(converted)

    return ",".join([str(day) for day in sorted(days)] + names)


def parse_cron(expression: str, timezone: Optional[str] = None) -> CronTrigger:
    """Build a CronTrigger from a 5-field crontab or a 6-field one with leading seconds."""
    fields = expression.split()
    if len(fields) == 5:
        second = "0"
        minute, hour, day, month, day_of_week = fields
    elif len(fields) == 6:
        second, minute, hour, day, month, day_of_week = fields
    else:
        raise ValueError(f"Wrong number of fields in cron expression {expression!r}: got {len(fields)}, expected 5 or 6")

    return CronTrigger(
        second=second,
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=convert_day_of_week(day_of_week),
        timezone=timezone,
    )


async def run_threshold_check(service: RestartService):
    logger.info("🧠 Checking RAM usage...")
    await service.check_memory()


async def run_force_restart(service: RestartService):
    logger.info("🔁 Restarting service...")
    await service.force_restart()


def build_scheduler(settings: Settings, service: RestartService) -> AsyncIOScheduler:
    """Register one cron job per workflow whose expression is configured."""
    scheduler = AsyncIOScheduler(timezone=settings.SCHEDULER_TIMEZONE)
    job_defaults = {"max_instances": 1, "coalesce": True, "replace_existing": True}

    if settings.threshold_check_enabled:
        scheduler.add_job(
            run_threshold_check,
            trigger=parse_cron(settings.MAX_RAM_CRON_INTERVAL_CHECK, settings.SCHEDULER_TIMEZONE),
            args=[service],
            id=THRESHOLD_JOB_ID,
            name="RAM threshold check",
            **job_defaults,
        )
        logger.info(f"⏰ RAM check scheduled: {settings.MAX_RAM_CRON_INTERVAL_CHECK}")

    if settings.force_restart_enabled:
        scheduler.add_job(
            run_force_restart,
            trigger=parse_cron(settings.CRON_INTERVAL_RESTART, settings.SCHEDULER_TIMEZONE),
            args=[service],
            id=FORCE_JOB_ID,
            name="Forced restart",
            **job_defaults,
        )
        logger.info(f"⏰ Forced restart scheduled: {settings.CRON_INTERVAL_RESTART}")

    if not scheduler.get_jobs():
        logger.warning("⚠️ No cron expressions configured - no workflow will run on a schedule")

    return scheduler
