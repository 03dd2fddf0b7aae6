# app/services/scheduler.py
"""
Scheduler service for deadline sweeps over goals and corporate tasks
"""

import logging
from datetime import date
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import settings
from app.database import SessionLocal
from app.models.corporate_task import CorporateTask, OPEN_TASK_STATUSES
from app.models.goal import OrganizationGoal

logger = logging.getLogger(__name__)


def mark_overdue(db, today: Optional[date] = None) -> dict:
    """Flag active goals and open tasks whose date has passed as 'overdue'"""
    today = today or date.today()

    goals = db.query(OrganizationGoal).filter(
        OrganizationGoal.status.in_(["active", "in_progress"]),
        OrganizationGoal.target_date.isnot(None),
        OrganizationGoal.target_date < today
    ).all()
    for goal in goals:
        goal.status = "overdue"

    tasks = db.query(CorporateTask).filter(
        CorporateTask.status.in_(OPEN_TASK_STATUSES),
        CorporateTask.due_date.isnot(None),
        CorporateTask.due_date < today
    ).all()
    for task in tasks:
        task.status = "overdue"

    db.commit()
    return {"goals": len(goals), "tasks": len(tasks)}


class DeadlineScheduler:
    """Periodic overdue sweep for goals and corporate tasks"""

    def __init__(self, session_factory=SessionLocal):
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory
        self.is_running = False
        self.last_result = None

    def start(self):
        """Start the scheduler"""
        if self.is_running:
            return

        self.scheduler.add_job(
            self.check_overdue,
            trigger=IntervalTrigger(minutes=settings.SCHEDULER["overdue_check_minutes"]),
            id='check_overdue',
            name='Check Overdue Goals and Tasks',
            replace_existing=True
        )

        # Right after midnight, when yesterday's deadlines lapse
        self.scheduler.add_job(
            self.check_overdue,
            trigger=CronTrigger(hour=0, minute=5),
            id='daily_overdue',
            name='Daily Overdue Check',
            replace_existing=True
        )

        self.scheduler.start()
        self.is_running = True
        logger.info("Deadline scheduler started")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown()
            self.is_running = False
            logger.info("Deadline scheduler stopped")

    async def check_overdue(self):
        """Run one overdue sweep"""
        db = self.session_factory()
        try:
            result = mark_overdue(db)
            self.last_result = result
            if result["goals"] or result["tasks"]:
                logger.info("Marked %s goals and %s tasks overdue", result["goals"], result["tasks"])
            return result
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Error checking overdue goals and tasks")
            raise
        finally:
            db.close()

    def get_status(self) -> dict:
        jobs = []
        if self.is_running:
            for job in self.scheduler.get_jobs():
                jobs.append({
                    "id": job.id,
                    "name": job.name,
                    "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
                })
        return {
            "status": "running" if self.is_running else "stopped",
            "jobs": jobs,
            "last_result": self.last_result,
        }


deadline_scheduler = DeadlineScheduler()
