"""Optional background scheduler that keeps the currency matrix warm."""

from __future__ import annotations

import logging
from typing import cast

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from flask import Flask

from .matrix_refresher import MatrixRefresher

logger = logging.getLogger(__name__)

SCHEDULER_EXT_KEY = "apscheduler"


def _run_refresh(app: Flask) -> None:
    with app.app_context():
        refresher = cast(MatrixRefresher | None, app.extensions.get("matrix_refresher"))
        if refresher is None:
            logger.warning("No matrix refresher configured; skipping scheduled refresh.")
            return
        if refresher.update_rates_if_needed():
            logger.info("Scheduled matrix refresh completed")


def init_scheduler(app: Flask) -> BackgroundScheduler | None:
    """Start a cron-triggered matrix refresh when SCHEDULER_ENABLED is set."""

    if not app.config.get("SCHEDULER_ENABLED", False):
        logger.info("Scheduler disabled via configuration.")
        return None

    if app.extensions.get(SCHEDULER_EXT_KEY):
        return app.extensions[SCHEDULER_EXT_KEY]

    scheduler = BackgroundScheduler(timezone=app.config.get("SCHEDULER_TIMEZONE", "UTC"))
    cron_expr = app.config.get("RATES_REFRESH_CRON", "*/15 * * * *")
    scheduler.add_job(
        _run_refresh,
        trigger=CronTrigger.from_crontab(cron_expr),
        args=[app],
        id="refresh_matrix",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    app.extensions[SCHEDULER_EXT_KEY] = scheduler

    logger.info("APScheduler started with cron '%s'", cron_expr)
    return scheduler
