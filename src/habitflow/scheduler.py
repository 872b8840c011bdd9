"""Background scheduler for the daily habit rollover."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

if TYPE_CHECKING:
    from .context import AppContext

logger = logging.getLogger("habitflow.scheduler")

ROLLOVER_JOB_ID = "daily_rollover"


class RolloverScheduler:
    """Runs ``HabitService.rollover`` once a day at the configured local time."""

    def __init__(self, ctx: AppContext, *, today: Callable[[], date] = date.today):
        """Initialize the scheduler with app context.

        Args:
            ctx: Application context with the habit service and config
            today: Clock used to pick the rollover day
        """
        self.ctx = ctx
        self.today = today
        self.scheduler: Optional[BackgroundScheduler] = None

    def start(self) -> None:
        """Start the background scheduler."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        config = self.ctx.config
        self.scheduler = BackgroundScheduler()
        self.scheduler.add_job(
            func=self.run_rollover,
            trigger=CronTrigger(hour=config.ROLLOVER_HOUR, minute=config.ROLLOVER_MINUTE),
            id=ROLLOVER_JOB_ID,
            name="Daily Habit Rollover",
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "Scheduled daily rollover at %02d:%02d", config.ROLLOVER_HOUR, config.ROLLOVER_MINUTE
        )

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=True)
            self.scheduler = None
            logger.info("Background scheduler stopped")

    def run_rollover(self) -> int:
        """Execute the rollover job; failures are logged, never raised."""
        try:
            return self.ctx.habit_service.rollover(self.today())
        except Exception as exc:
            logger.error(f"Scheduled rollover failed: {exc}", exc_info=True)
            return 0


def create_scheduler(ctx: AppContext, *, auto_start: bool = False) -> RolloverScheduler:
    """Create and optionally start the rollover scheduler."""
    scheduler = RolloverScheduler(ctx)
    if auto_start:
        scheduler.start()
    return scheduler
