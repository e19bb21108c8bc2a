"""
Background scheduler service for periodic tasks.
Pre-warms the TLE cache so the first request after expiry does not
wait on CelesTrak.
"""
import logging
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler(daemon=True)

# Track update statistics
update_stats = {
    'last_update': None,
    'total_updates': 0,
    'failed_updates': 0,
}


def prewarm_cache_job(app):
    """
    Background job to refresh TLE data for every category.
    Each refresh replaces the cache entry wholesale.
    """
    from services.tle_service import get_tle_service

    timestamp = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S UTC')
    logger.info(f"--- [Scheduler] Starting TLE cache pre-warm at {timestamp} ---")

    with app.app_context():
        try:
            results = get_tle_service(app).refresh_all()
        except Exception:
            update_stats['failed_updates'] += 1
            logger.exception("[Scheduler] Error during TLE pre-warm")
            return {}

    failed = [category for category, count in results.items() if count is None]
    for category, count in results.items():
        if count is not None:
            logger.info(f"  {category}: {count} satellites")

    update_stats['last_update'] = timestamp
    update_stats['total_updates'] += 1
    if failed:
        update_stats['failed_updates'] += 1
        logger.warning(f"[Scheduler] Pre-warm failed for: {', '.join(failed)}")

    logger.info("--- [Scheduler] TLE cache pre-warm complete ---")
    return results


def get_scheduler_status():
    """Get current scheduler status and statistics."""
    return {
        'running': scheduler.running,
        'last_update': update_stats['last_update'],
        'total_updates': update_stats['total_updates'],
        'failed_updates': update_stats['failed_updates'],
        'jobs': [
            {
                'id': job.id,
                'next_run': str(job.next_run_time) if job.next_run_time else None,
                'trigger': str(job.trigger)
            }
            for job in scheduler.get_jobs()
        ]
    }


def initialize_scheduler(app):
    """
    Initialize and start the background scheduler.

    CelesTrak asks clients not to poll at :00 or :30, so the job runs
    at an off-peak minute (TLE_PREWARM_MINUTE) on TLE_PREWARM_HOURS.

    Args:
        app: Flask application instance
    """
    if scheduler.running:
        return

    scheduler.add_job(
        prewarm_cache_job,
        'cron',
        args=[app],
        hour=app.config['TLE_PREWARM_HOURS'],
        minute=app.config['TLE_PREWARM_MINUTE'],
        timezone='utc',
        id='tle_prewarm',
        replace_existing=True
    )

    scheduler.start()
    logger.info(
        f"[Scheduler] Started: TLE pre-warm at hours {app.config['TLE_PREWARM_HOURS']} "
        f"minute :{app.config['TLE_PREWARM_MINUTE']:02d} UTC"
    )


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("[Scheduler] Shutdown complete")


def trigger_manual_update(app):
    """
    Trigger an immediate TLE pre-warm (useful for API endpoint).
    Runs in the background when the scheduler is running, inline otherwise.
    """
    if scheduler.running:
        scheduler.add_job(
            prewarm_cache_job,
            'date',
            args=[app],
            id='manual_update',
            replace_existing=True
        )
        return None
    return prewarm_cache_job(app)
